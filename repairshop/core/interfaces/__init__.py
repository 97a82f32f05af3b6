"""Core interfaces (ports) for dependency injection."""

from repairshop.core.interfaces.notifier import INavigator, INotifier
from repairshop.core.interfaces.order_store import IOrderStore
from repairshop.core.interfaces.stock_store import IPartCatalog, IStockStore
from repairshop.core.interfaces.storage import IBudgetStore, IInvoiceStore

__all__ = [
    # Storage interfaces
    "IStockStore",
    "IPartCatalog",
    "IOrderStore",
    "IBudgetStore",
    "IInvoiceStore",
    # Collaborators
    "INotifier",
    "INavigator",
]
