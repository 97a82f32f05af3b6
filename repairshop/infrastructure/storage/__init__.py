"""Storage infrastructure implementations."""

from repairshop.infrastructure.storage.sqlite import (
    SQLiteBudgetStore,
    SQLiteInvoiceStore,
    SQLiteOrderStore,
    SQLitePartCatalog,
    SQLiteStockStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    # SQLite stores
    "SQLiteStockStore",
    "SQLitePartCatalog",
    "SQLiteOrderStore",
    "SQLiteBudgetStore",
    "SQLiteInvoiceStore",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
