"""SQLite implementation of the stock ledger and part catalog."""

import aiosqlite

from repairshop.config import get_logger
from repairshop.core.entities.stock import Part, StockMovement
from repairshop.core.interfaces.stock_store import IPartCatalog, IStockStore
from repairshop.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


async def insert_movement(conn: aiosqlite.Connection, movement: StockMovement) -> StockMovement:
    """Insert within a caller-owned transaction. Returns a copy with its ID."""
    cursor = await conn.execute(
        """
        INSERT INTO stock_movements (
            part_id, quantity, unit_price, occurred_at,
            is_adjustment, adjustment_reason, description, created_at
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            movement.part_id,
            movement.quantity,
            movement.unit_price,
            movement.occurred_at.isoformat(),
            int(movement.is_adjustment),
            movement.adjustment_reason,
            movement.description,
            movement.created_at.isoformat(),
        ),
    )
    return movement.model_copy(update={"id": cursor.lastrowid})


class SQLiteStockStore(IStockStore):
    """Stock movements in the `stock_movements` table."""

    async def add_movement(self, movement: StockMovement) -> StockMovement:
        async with get_transaction() as conn:
            movement = await insert_movement(conn, movement)
        logger.debug("movement_inserted", movement_id=movement.id, part_id=movement.part_id)
        return movement

    async def get_movement(self, movement_id: int) -> StockMovement | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM stock_movements WHERE id = ?", (movement_id,)
            )
            row = await cursor.fetchone()
            return self._row_to_movement(row) if row else None

    async def update_movement(self, movement: StockMovement) -> StockMovement:
        async with get_transaction() as conn:
            await conn.execute(
                """
                UPDATE stock_movements SET
                    quantity = ?,
                    unit_price = ?,
                    occurred_at = ?,
                    is_adjustment = ?,
                    adjustment_reason = ?,
                    description = ?
                WHERE id = ?
                """,
                (
                    movement.quantity,
                    movement.unit_price,
                    movement.occurred_at.isoformat(),
                    int(movement.is_adjustment),
                    movement.adjustment_reason,
                    movement.description,
                    movement.id,
                ),
            )
        return movement

    async def delete_movement(self, movement_id: int) -> bool:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM stock_movements WHERE id = ?", (movement_id,)
            )
            return cursor.rowcount > 0

    async def list_by_part(self, part_id: str) -> list[StockMovement]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM stock_movements
                WHERE part_id = ?
                ORDER BY occurred_at DESC, id DESC
                """,
                (part_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_movement(row) for row in rows]

    async def list_all(self) -> list[StockMovement]:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM stock_movements ORDER BY id")
            rows = await cursor.fetchall()
            return [self._row_to_movement(row) for row in rows]

    @staticmethod
    def _row_to_movement(row: aiosqlite.Row) -> StockMovement:
        data = dict(row)
        data["is_adjustment"] = bool(data["is_adjustment"])
        return StockMovement.model_validate(data)


class SQLitePartCatalog(IPartCatalog):
    """Catalog parts in the `parts` table."""

    async def get_part(self, part_id: str) -> Part | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM parts WHERE id = ?", (part_id,))
            row = await cursor.fetchone()
            return Part.model_validate(dict(row)) if row else None

    async def find_by_name(self, name: str) -> Part | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM parts WHERE name = ? COLLATE NOCASE ORDER BY id LIMIT 1",
                (name.strip(),),
            )
            row = await cursor.fetchone()
            return Part.model_validate(dict(row)) if row else None

    async def list_parts(self) -> list[Part]:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM parts ORDER BY name COLLATE NOCASE")
            rows = await cursor.fetchall()
            return [Part.model_validate(dict(row)) for row in rows]

    async def create_part(self, part: Part) -> Part:
        async with get_transaction() as conn:
            await conn.execute(
                """
                INSERT INTO parts (id, name, part_type, serial_number, notes, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    part.id,
                    part.name,
                    part.part_type,
                    part.serial_number,
                    part.notes,
                    part.created_at.isoformat(),
                ),
            )
        logger.info("part_created", part_id=part.id, name=part.name)
        return part
