"""Tests for SQLite stock ledger and part catalog."""

from datetime import date

import pytest

from repairshop.core.entities.stock import Part, StockMovement
from repairshop.core.exceptions import DatabaseError
from repairshop.infrastructure.storage.sqlite.stock_store import (
    SQLitePartCatalog,
    SQLiteStockStore,
)


@pytest.fixture
def store(migrated_db) -> SQLiteStockStore:
    return SQLiteStockStore()


@pytest.fixture
def catalog(migrated_db) -> SQLitePartCatalog:
    return SQLitePartCatalog()


def _movement(quantity: int, day: date, price: float | None = 10.0, **kwargs) -> StockMovement:
    return StockMovement(
        part_id="TCON-55", quantity=quantity, unit_price=price, occurred_at=day, **kwargs
    )


class TestSQLiteStockStore:
    async def test_add_assigns_increasing_ids(self, store):
        first = await store.add_movement(_movement(5, date(2025, 1, 1)))
        second = await store.add_movement(_movement(-1, date(2025, 1, 1)))
        assert first.id is not None
        assert second.id > first.id

    async def test_round_trip(self, store):
        saved = await store.add_movement(
            _movement(
                3,
                date(2025, 1, 2),
                price=None,
                is_adjustment=True,
                adjustment_reason="Ajuste manual de estoque",
                description="contagem",
            )
        )
        loaded = await store.get_movement(saved.id)

        assert loaded.quantity == 3
        assert loaded.unit_price is None
        assert loaded.occurred_at == date(2025, 1, 2)
        assert loaded.is_adjustment is True
        assert loaded.adjustment_reason == "Ajuste manual de estoque"
        assert loaded.description == "contagem"
        assert loaded.created_at == saved.created_at

    async def test_get_missing(self, store):
        assert await store.get_movement(12345) is None

    async def test_list_by_part_newest_first(self, store):
        a = await store.add_movement(_movement(1, date(2025, 1, 1)))
        b = await store.add_movement(_movement(2, date(2025, 1, 5)))
        c = await store.add_movement(_movement(3, date(2025, 1, 5)))
        await store.add_movement(
            StockMovement(part_id="OTHER", quantity=9, occurred_at=date(2025, 1, 9))
        )

        movements = await store.list_by_part("TCON-55")

        assert [m.id for m in movements] == [c.id, b.id, a.id]

    async def test_update_in_place(self, store):
        saved = await store.add_movement(_movement(5, date(2025, 1, 1)))
        await store.update_movement(
            saved.model_copy(update={"quantity": 4, "occurred_at": date(2025, 1, 3)})
        )
        loaded = await store.get_movement(saved.id)
        assert loaded.quantity == 4
        assert loaded.occurred_at == date(2025, 1, 3)

    async def test_delete(self, store):
        saved = await store.add_movement(_movement(5, date(2025, 1, 1)))
        assert await store.delete_movement(saved.id) is True
        assert await store.get_movement(saved.id) is None
        assert await store.delete_movement(saved.id) is False

    async def test_list_all_in_insertion_order(self, store):
        a = await store.add_movement(_movement(1, date(2025, 2, 1)))
        b = await store.add_movement(
            StockMovement(part_id="FONTE", quantity=2, occurred_at=date(2025, 1, 1))
        )
        assert [m.id for m in await store.list_all()] == [a.id, b.id]


class TestSQLitePartCatalog:
    async def test_create_and_get(self, catalog):
        await catalog.create_part(Part(id="TCON-55", name="Placa T-CON", part_type="placa"))
        part = await catalog.get_part("TCON-55")
        assert part.name == "Placa T-CON"
        assert part.part_type == "placa"

    async def test_find_by_name_ignores_case(self, catalog):
        await catalog.create_part(Part(id="TCON-55", name="Placa T-CON"))
        part = await catalog.find_by_name("  placa t-con ")
        assert part is not None
        assert part.id == "TCON-55"
        assert await catalog.find_by_name("Fonte") is None

    async def test_list_sorted_by_name(self, catalog):
        await catalog.create_part(Part(id="P1", name="placa"))
        await catalog.create_part(Part(id="P2", name="Barra LED"))
        assert [p.id for p in await catalog.list_parts()] == ["P2", "P1"]

    async def test_duplicate_id_is_database_error(self, catalog):
        await catalog.create_part(Part(id="TCON-55", name="Placa T-CON"))
        with pytest.raises(DatabaseError):
            await catalog.create_part(Part(id="TCON-55", name="Outra"))
