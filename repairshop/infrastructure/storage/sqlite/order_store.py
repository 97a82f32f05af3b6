"""SQLite implementation of service order storage."""

import json
from collections.abc import Sequence

import aiosqlite

from repairshop.config import get_logger, get_settings
from repairshop.core.entities.service_order import OrderStatus, ServiceOrder
from repairshop.core.entities.stock import StockMovement
from repairshop.core.interfaces.order_store import IOrderStore
from repairshop.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from repairshop.infrastructure.storage.sqlite.stock_store import insert_movement

logger = get_logger(__name__)

_COLUMNS = (
    "os_number",
    "client_id",
    "client_name",
    "technician_id",
    "technician_name",
    "equipment_type",
    "equipment_brand",
    "equipment_model",
    "serial_number",
    "defect",
    "observations",
    "status",
    "priority",
    "entry_date",
    "completion_date",
    "delivery_date",
    "waiting_parts",
    "warranty_months",
    "warranty_start_date",
    "warranty_end_date",
    "payment_method",
    "payment_amount",
    "created_at",
    "updated_at",
)


def order_to_params(order: ServiceOrder) -> tuple:
    """Column values in _COLUMNS order."""
    data = order.model_dump(mode="json")
    if data["waiting_parts"] is not None:
        data["waiting_parts"] = json.dumps(data["waiting_parts"], ensure_ascii=False)
    return tuple(data[c] for c in _COLUMNS)


def row_to_order(row: aiosqlite.Row) -> ServiceOrder:
    data = dict(row)
    if data["waiting_parts"]:
        data["waiting_parts"] = json.loads(data["waiting_parts"])
    return ServiceOrder.model_validate(data)


async def insert_order(conn: aiosqlite.Connection, order: ServiceOrder) -> ServiceOrder:
    """Insert within a caller-owned transaction."""
    placeholders = ", ".join("?" for _ in _COLUMNS)
    cursor = await conn.execute(
        f"INSERT INTO service_orders ({', '.join(_COLUMNS)}) VALUES ({placeholders})",
        order_to_params(order),
    )
    return order.model_copy(update={"id": cursor.lastrowid})


async def write_order(conn: aiosqlite.Connection, order: ServiceOrder) -> ServiceOrder:
    """Update within a caller-owned transaction."""
    assignments = ", ".join(f"{c} = ?" for c in _COLUMNS)
    await conn.execute(
        f"UPDATE service_orders SET {assignments} WHERE id = ?",
        (*order_to_params(order), order.id),
    )
    return order


class SQLiteOrderStore(IOrderStore):
    """Service orders in the `service_orders` table."""

    def __init__(self, os_number_prefix: str | None = None, os_number_width: int | None = None):
        if os_number_prefix is None or os_number_width is None:
            shop = get_settings().shop
            os_number_prefix = shop.os_number_prefix if os_number_prefix is None else os_number_prefix
            os_number_width = os_number_width or shop.os_number_width
        self.os_number_prefix = os_number_prefix
        self.os_number_width = os_number_width

    async def create_order(self, order: ServiceOrder) -> ServiceOrder:
        async with get_transaction() as conn:
            order = await insert_order(conn, order)
        logger.info("order_created", order_id=order.id, os_number=order.os_number)
        return order

    async def get_order(self, order_id: int) -> ServiceOrder | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM service_orders WHERE id = ?", (order_id,))
            row = await cursor.fetchone()
            return row_to_order(row) if row else None

    async def get_by_os_number(self, os_number: str) -> ServiceOrder | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM service_orders WHERE os_number = ?", (os_number,)
            )
            row = await cursor.fetchone()
            return row_to_order(row) if row else None

    async def update_order(self, order: ServiceOrder) -> ServiceOrder:
        async with get_transaction() as conn:
            order = await write_order(conn, order)
        logger.debug("order_updated", order_id=order.id, status=order.status.value)
        return order

    async def update_with_movements(
        self, order: ServiceOrder, movements: Sequence[StockMovement]
    ) -> tuple[ServiceOrder, list[StockMovement]]:
        async with get_transaction("complete_order") as conn:
            order = await write_order(conn, order)
            stored = [await insert_movement(conn, m) for m in movements]
        logger.debug(
            "order_updated_with_movements",
            order_id=order.id,
            status=order.status.value,
            movements=len(stored),
        )
        return order, stored

    async def list_orders(self, limit: int = 100, offset: int = 0) -> list[ServiceOrder]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM service_orders ORDER BY entry_date DESC, id DESC LIMIT ? OFFSET ?",
                (limit, offset),
            )
            rows = await cursor.fetchall()
            return [row_to_order(row) for row in rows]

    async def list_by_status(
        self, status: OrderStatus, limit: int = 100, offset: int = 0
    ) -> list[ServiceOrder]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM service_orders
                WHERE status = ?
                ORDER BY entry_date DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                (OrderStatus(status).value, limit, offset),
            )
            rows = await cursor.fetchall()
            return [row_to_order(row) for row in rows]

    async def list_waiting_parts(self) -> list[ServiceOrder]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM service_orders WHERE status = ? ORDER BY entry_date, id",
                (OrderStatus.WAITING_PARTS.value,),
            )
            rows = await cursor.fetchall()
            return [row_to_order(row) for row in rows]

    async def next_os_number(self) -> str:
        """Prefix plus zero-padded (highest numeric suffix + 1)."""
        prefix = self.os_number_prefix
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT os_number FROM service_orders WHERE os_number LIKE ?",
                (f"{prefix}%",),
            )
            rows = await cursor.fetchall()

        highest = 0
        for row in rows:
            suffix = row[0][len(prefix):]
            if suffix.isdigit():
                highest = max(highest, int(suffix))
        return f"{prefix}{highest + 1:0{self.os_number_width}d}"
