"""SQLite storage implementations."""

from repairshop.infrastructure.storage.sqlite.budget_store import SQLiteBudgetStore
from repairshop.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from repairshop.infrastructure.storage.sqlite.invoice_store import SQLiteInvoiceStore
from repairshop.infrastructure.storage.sqlite.order_store import SQLiteOrderStore
from repairshop.infrastructure.storage.sqlite.stock_store import (
    SQLitePartCatalog,
    SQLiteStockStore,
)

# Singleton instances
_stock_store: SQLiteStockStore | None = None
_part_catalog: SQLitePartCatalog | None = None
_order_store: SQLiteOrderStore | None = None
_budget_store: SQLiteBudgetStore | None = None
_invoice_store: SQLiteInvoiceStore | None = None


async def get_stock_store() -> SQLiteStockStore:
    """Get singleton stock ledger store."""
    global _stock_store
    if _stock_store is None:
        _stock_store = SQLiteStockStore()
    return _stock_store


async def get_part_catalog() -> SQLitePartCatalog:
    """Get singleton part catalog."""
    global _part_catalog
    if _part_catalog is None:
        _part_catalog = SQLitePartCatalog()
    return _part_catalog


async def get_order_store() -> SQLiteOrderStore:
    """Get singleton service order store."""
    global _order_store
    if _order_store is None:
        _order_store = SQLiteOrderStore()
    return _order_store


async def get_budget_store() -> SQLiteBudgetStore:
    """Get singleton budget store."""
    global _budget_store
    if _budget_store is None:
        _budget_store = SQLiteBudgetStore()
    return _budget_store


async def get_invoice_store() -> SQLiteInvoiceStore:
    """Get singleton invoice store."""
    global _invoice_store
    if _invoice_store is None:
        _invoice_store = SQLiteInvoiceStore()
    return _invoice_store


def reset_stores() -> None:
    """Drop store singletons (for testing)."""
    global _stock_store, _part_catalog, _order_store, _budget_store, _invoice_store
    _stock_store = None
    _part_catalog = None
    _order_store = None
    _budget_store = None
    _invoice_store = None


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLiteStockStore",
    "SQLitePartCatalog",
    "SQLiteOrderStore",
    "SQLiteBudgetStore",
    "SQLiteInvoiceStore",
    # Factory functions
    "get_stock_store",
    "get_part_catalog",
    "get_order_store",
    "get_budget_store",
    "get_invoice_store",
    "reset_stores",
]
