"""Integration tests: use cases wired to the real SQLite stores."""

from datetime import date
from unittest.mock import AsyncMock, patch

import aiosqlite
import pytest

from repairshop.application.dto.requests import (
    BudgetItemRequest,
    CompleteOrderRequest,
    CreateBudgetRequest,
    EditMovementRequest,
    OpenOrderRequest,
    RecordMovementRequest,
    UsedPartRequest,
)
from repairshop.application.use_cases import (
    BudgetWorkflowUseCase,
    ChangeOrderStatusUseCase,
    CompleteServiceOrderUseCase,
    ListWarrantiesUseCase,
    OpenServiceOrderUseCase,
    StockLedgerUseCase,
)
from repairshop.core.entities import BudgetStatus, OrderStatus, Part
from repairshop.core.exceptions import BudgetNotFoundError, DatabaseError
from repairshop.core.services import warranty
from repairshop.core.services.order_state_machine import REFUSED_NOTE, ServiceOrderStateMachine
from repairshop.infrastructure.storage.sqlite import (
    SQLiteBudgetStore,
    SQLiteInvoiceStore,
    SQLiteOrderStore,
    SQLitePartCatalog,
    SQLiteStockStore,
)
from repairshop.infrastructure.storage.sqlite import budget_store as budget_store_module
from repairshop.infrastructure.storage.sqlite import order_store as order_store_module


@pytest.fixture
def stores(shop_db):
    return {
        "stock": SQLiteStockStore(),
        "parts": SQLitePartCatalog(),
        "orders": SQLiteOrderStore(os_number_prefix="OS-", os_number_width=6),
        "budgets": SQLiteBudgetStore(),
        "invoices": SQLiteInvoiceStore(),
    }


@pytest.fixture
def ledger(stores):
    return StockLedgerUseCase(stock_store=stores["stock"], part_catalog=stores["parts"])


@pytest.fixture
def notifier():
    return AsyncMock()


@pytest.fixture
def state_machine(clock):
    return ServiceOrderStateMachine(clock=clock)


@pytest.fixture
def workflow(stores, notifier, state_machine, clock):
    return BudgetWorkflowUseCase(
        budget_store=stores["budgets"],
        order_store=stores["orders"],
        notifier=notifier,
        state_machine=state_machine,
        clock=clock,
        warranty_months=3,
        validity_days=14,
        technician_name="Técnico Responsável",
    )


async def _open_order(stores, notifier, clock):
    use_case = OpenServiceOrderUseCase(order_store=stores["orders"], notifier=notifier, clock=clock)
    result = await use_case.execute(
        OpenOrderRequest(
            client_name="Maria Souza",
            technician_name="Carlos",
            equipment_type="TV",
            equipment_brand="Samsung",
            equipment_model="U8100F",
            defect="Sem imagem",
        )
    )
    return result.order


class TestStockLedgerFlow:
    async def test_record_adjust_and_remove(self, stores, ledger):
        await stores["parts"].create_part(Part(id="TCON-55", name="Placa T-CON"))
        await ledger.record_movement(
            RecordMovementRequest(
                part_id="TCON-55", quantity=5, unit_price=80.0, occurred_at=date(2025, 3, 1)
            )
        )
        await ledger.record_movement(
            RecordMovementRequest(part_id="TCON-55", quantity=-2, occurred_at=date(2025, 3, 2))
        )

        stock = await ledger.aggregate("TCON-55")
        assert stock.total_quantity == 3
        assert stock.last_unit_price is None

        adjustment = await ledger.adjust_aggregate("TCON-55", 10, unit_price=85.0)
        assert adjustment.quantity == 7
        assert (await ledger.aggregate("TCON-55")).total_quantity == 10

        removal = await ledger.remove_all_stock("TCON-55")
        assert removal.quantity == -10
        assert removal.unit_price == 85.0
        assert (await ledger.aggregate("TCON-55")).total_quantity == 0
        assert await ledger.aggregate_all() == []

    async def test_edit_and_delete_recompute(self, stores, ledger):
        first = await ledger.record_movement(
            RecordMovementRequest(part_id="FONTE", quantity=4, occurred_at=date(2025, 3, 1))
        )
        second = await ledger.record_movement(
            RecordMovementRequest(part_id="FONTE", quantity=1, occurred_at=date(2025, 3, 1))
        )

        await ledger.edit_movement(
            first.id, EditMovementRequest(quantity=6, occurred_at=date(2025, 3, 1))
        )
        assert (await ledger.aggregate("FONTE")).total_quantity == 7

        await ledger.delete_movement(second.id)
        stock = await ledger.aggregate("FONTE")
        assert stock.total_quantity == 6
        assert stock.movement_count == 1


class TestRepairFlow:
    async def test_quote_approve_invoice(self, stores, notifier, clock, workflow, fixed_now):
        order = await _open_order(stores, notifier, clock)
        assert order.os_number == "OS-000001"

        await stores["parts"].create_part(Part(id="TCON-55", name="Placa T-CON"))
        change = ChangeOrderStatusUseCase(
            order_store=stores["orders"],
            part_catalog=stores["parts"],
            navigator=AsyncMock(),
            state_machine=ServiceOrderStateMachine(clock=clock),
        )
        waiting = await change.execute(order.id, "waiting-parts", ["Placa T-CON"])
        assert waiting.order.waiting_parts[0].part_id == "TCON-55"
        assert [o.id for o in await stores["orders"].list_waiting_parts()] == [order.id]

        budget = await workflow.create_budget(
            CreateBudgetRequest(
                os_number=order.os_number,
                client_name=order.client_name,
                device=order.device,
                items=[
                    BudgetItemRequest(description="BARRA LED 37", quantity=2, unit_price=150.0),
                    BudgetItemRequest(description="Mão de obra", quantity=1, unit_price=200.0),
                ],
            )
        )
        assert budget.total_value == 500.0

        result = await workflow.approve_budget(budget.id)

        assert result.invoice.total_value == 500.0
        assert result.invoice.technician_name == "Carlos"
        assert result.invoice.warranty_end_date == warranty.end_date(fixed_now.date(), 3)
        notifier.invoice_issued.assert_awaited_once()

        stored_order = await stores["orders"].get_order(order.id)
        assert stored_order.status == OrderStatus.COMPLETED
        assert stored_order.waiting_parts is None
        assert stored_order.payment_amount == 500.0
        assert stored_order.warranty_end_date == result.invoice.warranty_end_date

        stored_invoice = await stores["invoices"].get_by_os_number(order.os_number)
        assert stored_invoice.id == result.invoice.id
        assert stored_invoice.items == result.invoice.items
        assert await stores["budgets"].get_budget(budget.id) is None
        with pytest.raises(BudgetNotFoundError):
            await workflow.approve_budget(budget.id)

        entries = await ListWarrantiesUseCase(order_store=stores["orders"]).execute(
            as_of=fixed_now.date()
        )
        assert [(e.order.id, e.status) for e in entries] == [(order.id, "active")]

    async def test_reject_closes_order(self, stores, notifier, clock, workflow):
        order = await _open_order(stores, notifier, clock)
        budget = await workflow.create_budget(
            CreateBudgetRequest(
                os_number=order.os_number,
                items=[BudgetItemRequest(description="Placa principal", unit_price=900.0)],
            )
        )

        result = await workflow.reject_budget(budget.id)

        assert (await stores["budgets"].get_budget(budget.id)).status == BudgetStatus.REJECTED
        stored_order = await stores["orders"].get_order(order.id)
        assert stored_order.status == OrderStatus.COMPLETED
        assert stored_order.observations == REFUSED_NOTE
        assert stored_order.warranty_end_date is None
        assert result.order.id == stored_order.id
        assert await stores["invoices"].list_invoices() == []

    async def test_complete_with_used_parts_consumes_stock(
        self, stores, notifier, clock, ledger
    ):
        await ledger.record_movement(
            RecordMovementRequest(part_id="TCON-55", quantity=3, unit_price=80.0)
        )
        order = await _open_order(stores, notifier, clock)

        complete = CompleteServiceOrderUseCase(
            order_store=stores["orders"],
            state_machine=ServiceOrderStateMachine(clock=clock),
            clock=clock,
        )
        result = await complete.complete(
            order.id,
            CompleteOrderRequest(
                payment_method="cash",
                payment_amount=350.0,
                used_parts=[
                    UsedPartRequest(part_name="Placa T-CON", quantity=2, part_id="TCON-55")
                ],
            ),
        )

        assert result.order.status == OrderStatus.COMPLETED
        assert (await ledger.aggregate("TCON-55")).total_quantity == 1
        movements = await ledger.list_movements("TCON-55")
        assert any(m.description == f"Usada na {order.os_number}" for m in movements)


def _failing_write():
    return AsyncMock(side_effect=aiosqlite.OperationalError("disk I/O error"))


class TestAtomicWrites:
    async def test_reject_rolls_back_when_order_write_fails(
        self, stores, notifier, clock, workflow
    ):
        order = await _open_order(stores, notifier, clock)
        budget = await workflow.create_budget(
            CreateBudgetRequest(
                os_number=order.os_number,
                items=[BudgetItemRequest(description="Placa principal", unit_price=900.0)],
            )
        )

        with patch.object(budget_store_module, "write_order", _failing_write()):
            with pytest.raises(DatabaseError):
                await workflow.reject_budget(budget.id)

        assert (await stores["budgets"].get_budget(budget.id)).status == BudgetStatus.PENDING
        assert (await stores["orders"].get_order(order.id)).status == OrderStatus.PENDING

        # Still pending, so the rejection can be retried
        result = await workflow.reject_budget(budget.id)
        assert result.budget.status == BudgetStatus.REJECTED
        assert (await stores["orders"].get_order(order.id)).status == OrderStatus.COMPLETED

    async def test_complete_rolls_back_when_stock_write_fails(
        self, stores, notifier, clock, ledger
    ):
        await ledger.record_movement(RecordMovementRequest(part_id="TCON-55", quantity=3))
        order = await _open_order(stores, notifier, clock)
        complete = CompleteServiceOrderUseCase(
            order_store=stores["orders"],
            state_machine=ServiceOrderStateMachine(clock=clock),
            clock=clock,
        )
        request = CompleteOrderRequest(
            payment_method="pix",
            payment_amount=350.0,
            used_parts=[UsedPartRequest(part_name="Placa T-CON", quantity=2, part_id="TCON-55")],
        )

        with patch.object(order_store_module, "insert_movement", _failing_write()):
            with pytest.raises(DatabaseError):
                await complete.complete(order.id, request)

        stored = await stores["orders"].get_order(order.id)
        assert stored.status == OrderStatus.PENDING
        assert stored.payment_amount is None
        assert (await ledger.aggregate("TCON-55")).total_quantity == 3

        await complete.complete(order.id, request)
        assert (await ledger.aggregate("TCON-55")).total_quantity == 1
