"""Tests for StockLedgerUseCase."""

from datetime import date
from unittest.mock import AsyncMock

import pytest

from repairshop.application.dto.requests import (
    AdjustStockRequest,
    EditMovementRequest,
    RecordMovementRequest,
)
from repairshop.application.use_cases.stock_ledger import (
    FULL_REMOVAL_REASON,
    MANUAL_ADJUSTMENT_REASON,
    StockLedgerUseCase,
)
from repairshop.core.entities.stock import Part, StockMovement
from repairshop.core.exceptions import InvalidAdjustmentError, MovementNotFoundError


def _with_id(movement: StockMovement) -> StockMovement:
    return movement.model_copy(update={"id": 42})


@pytest.fixture
def mock_stock_store():
    store = AsyncMock()
    store.add_movement.side_effect = _with_id
    store.list_by_part.return_value = []
    return store


@pytest.fixture
def mock_part_catalog():
    catalog = AsyncMock()
    catalog.get_part.return_value = Part(id="TCON-55", name="Placa T-CON")
    catalog.list_parts.return_value = [Part(id="TCON-55", name="Placa T-CON")]
    return catalog


@pytest.fixture
def use_case(mock_stock_store, mock_part_catalog):
    return StockLedgerUseCase(stock_store=mock_stock_store, part_catalog=mock_part_catalog)


def _existing(quantity: int, price: float | None = 10.0, id: int = 1) -> StockMovement:
    return StockMovement(
        id=id,
        part_id="TCON-55",
        quantity=quantity,
        unit_price=price,
        occurred_at=date(2025, 1, 2),
    )


class TestRecordMovement:
    async def test_appends_movement(self, use_case, mock_stock_store):
        request = RecordMovementRequest(
            part_id="TCON-55", quantity=5, unit_price=80.0, occurred_at=date(2025, 1, 2)
        )
        movement = await use_case.record_movement(request)

        assert movement.id == 42
        assert movement.quantity == 5
        assert movement.is_adjustment is False
        mock_stock_store.add_movement.assert_awaited_once()

    async def test_defaults_to_today(self, use_case):
        movement = await use_case.record_movement(
            RecordMovementRequest(part_id="TCON-55", quantity=-1)
        )
        assert isinstance(movement.occurred_at, date)

    async def test_outbound_beyond_stock_allowed(self, use_case, mock_stock_store):
        mock_stock_store.list_by_part.return_value = [_existing(1)]
        movement = await use_case.record_movement(
            RecordMovementRequest(part_id="TCON-55", quantity=-5)
        )
        assert movement.quantity == -5


class TestEditAndDelete:
    async def test_edit_in_place(self, use_case, mock_stock_store):
        mock_stock_store.get_movement.return_value = _existing(5)
        mock_stock_store.update_movement.side_effect = lambda m: m

        updated = await use_case.edit_movement(
            1,
            EditMovementRequest(quantity=4, unit_price=9.0, occurred_at=date(2025, 1, 3)),
        )

        assert updated.id == 1
        assert updated.quantity == 4
        assert updated.unit_price == 9.0
        assert updated.occurred_at == date(2025, 1, 3)

    async def test_edit_missing_movement(self, use_case, mock_stock_store):
        mock_stock_store.get_movement.return_value = None
        with pytest.raises(MovementNotFoundError):
            await use_case.edit_movement(
                99, EditMovementRequest(quantity=1, occurred_at=date(2025, 1, 3))
            )
        mock_stock_store.update_movement.assert_not_called()

    async def test_delete(self, use_case, mock_stock_store):
        mock_stock_store.delete_movement.return_value = True
        await use_case.delete_movement(1)
        mock_stock_store.delete_movement.assert_awaited_once_with(1)

    async def test_delete_missing_movement(self, use_case, mock_stock_store):
        mock_stock_store.delete_movement.return_value = False
        with pytest.raises(MovementNotFoundError):
            await use_case.delete_movement(99)


class TestAdjustAggregate:
    async def test_adjust_up_reaches_target(self, use_case, mock_stock_store):
        mock_stock_store.list_by_part.return_value = [_existing(5)]

        movement = await use_case.adjust_aggregate("TCON-55", 8, unit_price=12.0)

        assert movement.quantity == 3
        assert movement.is_adjustment is True
        assert movement.adjustment_reason == MANUAL_ADJUSTMENT_REASON
        assert movement.unit_price == 12.0

    async def test_adjust_down(self, use_case, mock_stock_store):
        mock_stock_store.list_by_part.return_value = [_existing(5)]
        movement = await use_case.adjust_aggregate("TCON-55", 2)
        assert movement.quantity == -3

    async def test_adjust_from_negative_total(self, use_case, mock_stock_store):
        mock_stock_store.list_by_part.return_value = [_existing(-2)]
        movement = await use_case.adjust_aggregate("TCON-55", 0)
        assert movement.quantity == 2

    async def test_negative_target_rejected_without_writing(self, use_case, mock_stock_store):
        with pytest.raises(InvalidAdjustmentError):
            await use_case.adjust_aggregate("TCON-55", -1)
        mock_stock_store.add_movement.assert_not_called()

    async def test_no_change_writes_nothing(self, use_case, mock_stock_store):
        mock_stock_store.list_by_part.return_value = [_existing(5)]
        assert await use_case.adjust_aggregate("TCON-55", 5) is None
        mock_stock_store.add_movement.assert_not_called()

    async def test_custom_reason_and_date(self, use_case, mock_stock_store):
        movement = await use_case.adjust(
            "TCON-55",
            AdjustStockRequest(
                target_quantity=4, occurred_at=date(2025, 2, 1), reason="Contagem anual"
            ),
        )
        assert movement.quantity == 4
        assert movement.adjustment_reason == "Contagem anual"
        assert movement.occurred_at == date(2025, 2, 1)

    async def test_remove_all_stock_uses_last_price(self, use_case, mock_stock_store):
        mock_stock_store.list_by_part.return_value = [
            _existing(3, price=10.0, id=2),
            _existing(2, price=8.0, id=1),
        ]
        movement = await use_case.remove_all_stock("TCON-55")

        assert movement.quantity == -5
        assert movement.unit_price == 10.0
        assert movement.adjustment_reason == FULL_REMOVAL_REASON

    async def test_remove_all_when_empty(self, use_case, mock_stock_store):
        assert await use_case.remove_all_stock("TCON-55") is None
        mock_stock_store.add_movement.assert_not_called()


class TestAggregation:
    async def test_aggregate_uses_catalog_name(self, use_case, mock_stock_store):
        mock_stock_store.list_by_part.return_value = [_existing(5)]
        stock = await use_case.aggregate("TCON-55")
        assert stock.part_name == "Placa T-CON"
        assert stock.total_quantity == 5

    async def test_aggregate_unknown_part_falls_back_to_id(
        self, use_case, mock_part_catalog
    ):
        mock_part_catalog.get_part.return_value = None
        stock = await use_case.aggregate("GHOST")
        assert stock.part_name == "GHOST"
        assert stock.total_quantity == 0

    async def test_aggregate_all_only_in_stock(self, use_case, mock_stock_store):
        mock_stock_store.list_all.return_value = [
            _existing(5),
            StockMovement(id=2, part_id="FONTE", quantity=1),
            StockMovement(id=3, part_id="FONTE", quantity=-1),
        ]
        result = await use_case.aggregate_all()
        assert [a.part_id for a in result] == ["TCON-55"]
        assert result[0].part_name == "Placa T-CON"
