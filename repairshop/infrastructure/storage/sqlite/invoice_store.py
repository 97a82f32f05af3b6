"""SQLite implementation of invoice storage."""

import json

import aiosqlite

from repairshop.config import get_logger
from repairshop.core.entities.budget import Invoice
from repairshop.core.interfaces.storage import IInvoiceStore
from repairshop.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


async def insert_invoice(conn: aiosqlite.Connection, invoice: Invoice) -> Invoice:
    """Insert within a caller-owned transaction. Returns a copy with its ID."""
    data = invoice.model_dump(mode="json")
    cursor = await conn.execute(
        """
        INSERT INTO invoices (
            os_number, client_name, device, items, total_value,
            issue_date, warranty_end_date, technician_name, created_at
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            data["os_number"],
            data["client_name"],
            data["device"],
            json.dumps(data["items"], ensure_ascii=False),
            data["total_value"],
            data["issue_date"],
            data["warranty_end_date"],
            data["technician_name"],
            data["created_at"],
        ),
    )
    return invoice.model_copy(update={"id": cursor.lastrowid})


def row_to_invoice(row: aiosqlite.Row) -> Invoice:
    data = dict(row)
    data["items"] = json.loads(data["items"] or "[]")
    return Invoice.model_validate(data)


class SQLiteInvoiceStore(IInvoiceStore):
    """Issued invoices in the `invoices` table."""

    async def create_invoice(self, invoice: Invoice) -> Invoice:
        async with get_transaction() as conn:
            invoice = await insert_invoice(conn, invoice)
        logger.info("invoice_stored", invoice_id=invoice.id, os_number=invoice.os_number)
        return invoice

    async def get_invoice(self, invoice_id: int) -> Invoice | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM invoices WHERE id = ?", (invoice_id,))
            row = await cursor.fetchone()
            return row_to_invoice(row) if row else None

    async def get_by_os_number(self, os_number: str) -> Invoice | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM invoices WHERE os_number = ? ORDER BY id DESC LIMIT 1",
                (os_number,),
            )
            row = await cursor.fetchone()
            return row_to_invoice(row) if row else None

    async def list_invoices(self, limit: int = 100, offset: int = 0) -> list[Invoice]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM invoices ORDER BY issue_date DESC, id DESC LIMIT ? OFFSET ?",
                (limit, offset),
            )
            rows = await cursor.fetchall()
            return [row_to_invoice(row) for row in rows]
