"""API route modules."""

from repairshop.api.routes.budgets import router as budgets_router
from repairshop.api.routes.health import router as health_router
from repairshop.api.routes.invoices import router as invoices_router
from repairshop.api.routes.orders import router as orders_router
from repairshop.api.routes.orders import warranties_router
from repairshop.api.routes.stock import router as stock_router

__all__ = [
    "health_router",
    "stock_router",
    "orders_router",
    "warranties_router",
    "budgets_router",
    "invoices_router",
]
