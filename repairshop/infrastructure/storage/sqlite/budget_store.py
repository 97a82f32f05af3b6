"""SQLite implementation of budget storage."""

import json

import aiosqlite

from repairshop.config import get_logger
from repairshop.core.entities.budget import Budget, BudgetStatus, Invoice
from repairshop.core.entities.service_order import ServiceOrder
from repairshop.core.interfaces.storage import IBudgetStore
from repairshop.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from repairshop.infrastructure.storage.sqlite.invoice_store import insert_invoice
from repairshop.infrastructure.storage.sqlite.order_store import insert_order, write_order

logger = get_logger(__name__)


def _row_to_budget(row: aiosqlite.Row) -> Budget:
    data = dict(row)
    data["items"] = json.loads(data["items"] or "[]")
    return Budget.model_validate(data)


async def write_budget(conn: aiosqlite.Connection, budget: Budget) -> Budget:
    """Update within a caller-owned transaction."""
    data = budget.model_dump(mode="json")
    await conn.execute(
        """
        UPDATE budgets SET
            client_name = ?,
            device = ?,
            items = ?,
            total_value = ?,
            expiry_date = ?,
            status = ?,
            updated_at = ?
        WHERE id = ?
        """,
        (
            data["client_name"],
            data["device"],
            json.dumps(data["items"], ensure_ascii=False),
            data["total_value"],
            data["expiry_date"],
            data["status"],
            data["updated_at"],
            budget.id,
        ),
    )
    return budget


class SQLiteBudgetStore(IBudgetStore):
    """Budgets in the `budgets` table."""

    async def create_budget(self, budget: Budget) -> Budget:
        data = budget.model_dump(mode="json")
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO budgets (
                    os_number, client_name, device, items, total_value,
                    issue_date, expiry_date, status, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    data["os_number"],
                    data["client_name"],
                    data["device"],
                    json.dumps(data["items"], ensure_ascii=False),
                    data["total_value"],
                    data["issue_date"],
                    data["expiry_date"],
                    data["status"],
                    data["created_at"],
                    data["updated_at"],
                ),
            )
            budget = budget.model_copy(update={"id": cursor.lastrowid})
        logger.info("budget_stored", budget_id=budget.id, os_number=budget.os_number)
        return budget

    async def get_budget(self, budget_id: int) -> Budget | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM budgets WHERE id = ?", (budget_id,))
            row = await cursor.fetchone()
            return _row_to_budget(row) if row else None

    async def get_active_by_os_number(self, os_number: str) -> Budget | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM budgets
                WHERE os_number = ? AND status = ?
                ORDER BY id DESC LIMIT 1
                """,
                (os_number, BudgetStatus.PENDING.value),
            )
            row = await cursor.fetchone()
            return _row_to_budget(row) if row else None

    async def update_budget(self, budget: Budget) -> Budget:
        async with get_transaction() as conn:
            budget = await write_budget(conn, budget)
        return budget

    async def delete_budget(self, budget_id: int) -> bool:
        async with get_transaction() as conn:
            cursor = await conn.execute("DELETE FROM budgets WHERE id = ?", (budget_id,))
            return cursor.rowcount > 0

    async def list_budgets(
        self, status: BudgetStatus | None = None, limit: int = 100, offset: int = 0
    ) -> list[Budget]:
        query = "SELECT * FROM budgets"
        params: list = []
        if status is not None:
            query += " WHERE status = ?"
            params.append(BudgetStatus(status).value)
        query += " ORDER BY issue_date DESC, id DESC LIMIT ? OFFSET ?"
        params.extend([limit, offset])

        async with get_connection() as conn:
            cursor = await conn.execute(query, params)
            rows = await cursor.fetchall()
            return [_row_to_budget(row) for row in rows]

    async def finalize_approval(
        self, invoice: Invoice, order: ServiceOrder, budget_id: int
    ) -> tuple[Invoice, ServiceOrder]:
        async with get_transaction("finalize_approval") as conn:
            invoice = await insert_invoice(conn, invoice)
            if order.id is None:
                order = await insert_order(conn, order)
            else:
                order = await write_order(conn, order)
            await conn.execute("DELETE FROM budgets WHERE id = ?", (budget_id,))

        logger.info(
            "budget_approval_finalized",
            budget_id=budget_id,
            invoice_id=invoice.id,
            order_id=order.id,
        )
        return invoice, order

    async def finalize_rejection(
        self, budget: Budget, order: ServiceOrder | None
    ) -> tuple[Budget, ServiceOrder | None]:
        async with get_transaction("finalize_rejection") as conn:
            budget = await write_budget(conn, budget)
            if order is not None:
                order = await write_order(conn, order)

        logger.info(
            "budget_rejection_finalized",
            budget_id=budget.id,
            order_id=order.id if order else None,
        )
        return budget, order
