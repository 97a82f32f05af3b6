"""Core domain entities."""

from repairshop.core.entities.budget import (
    Budget,
    BudgetItem,
    BudgetStatus,
    Invoice,
    InvoiceItem,
    format_brl,
)
from repairshop.core.entities.service_order import (
    CompletionType,
    OrderStatus,
    PaymentMethod,
    ServiceOrder,
    UsedPart,
    WaitingPart,
)
from repairshop.core.entities.stock import AggregatedStock, Part, StockMovement

__all__ = [
    # Stock entities
    "Part",
    "StockMovement",
    "AggregatedStock",
    # Service order entities
    "ServiceOrder",
    "OrderStatus",
    "PaymentMethod",
    "CompletionType",
    "WaitingPart",
    "UsedPart",
    # Budget entities
    "Budget",
    "BudgetItem",
    "BudgetStatus",
    "Invoice",
    "InvoiceItem",
    "format_brl",
]
