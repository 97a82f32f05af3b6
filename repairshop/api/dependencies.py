"""
Dependency injection container for FastAPI.

Provides use case and store instances to route handlers.
"""

from repairshop.application.use_cases import (
    BudgetWorkflowUseCase,
    ChangeOrderStatusUseCase,
    CompleteServiceOrderUseCase,
    ListWarrantiesUseCase,
    OpenServiceOrderUseCase,
    StockLedgerUseCase,
)
from repairshop.infrastructure.storage.sqlite import (
    SQLiteInvoiceStore,
    SQLiteOrderStore,
    SQLitePartCatalog,
    get_invoice_store,
    get_order_store,
    get_part_catalog,
)


# Store dependencies
async def get_parts() -> SQLitePartCatalog:
    """Get part catalog."""
    return await get_part_catalog()


async def get_orders() -> SQLiteOrderStore:
    """Get service order store."""
    return await get_order_store()


async def get_invoices() -> SQLiteInvoiceStore:
    """Get invoice store."""
    return await get_invoice_store()


# Stock use case dependency
def get_stock_ledger_use_case() -> StockLedgerUseCase:
    return StockLedgerUseCase()


# Service order use case dependencies
def get_open_order_use_case() -> OpenServiceOrderUseCase:
    return OpenServiceOrderUseCase()


def get_change_status_use_case() -> ChangeOrderStatusUseCase:
    return ChangeOrderStatusUseCase()


def get_complete_order_use_case() -> CompleteServiceOrderUseCase:
    return CompleteServiceOrderUseCase()


def get_list_warranties_use_case() -> ListWarrantiesUseCase:
    return ListWarrantiesUseCase()


# Budget use case dependency
def get_budget_workflow_use_case() -> BudgetWorkflowUseCase:
    return BudgetWorkflowUseCase()
