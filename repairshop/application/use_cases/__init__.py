"""Application use cases."""

from repairshop.application.use_cases.budget_workflow import (
    ApprovalResult,
    BudgetWorkflowUseCase,
    RejectionResult,
)
from repairshop.application.use_cases.change_order_status import ChangeOrderStatusUseCase
from repairshop.application.use_cases.complete_service_order import (
    CompleteServiceOrderUseCase,
)
from repairshop.application.use_cases.list_warranties import (
    ListWarrantiesUseCase,
    WarrantyEntry,
)
from repairshop.application.use_cases.open_service_order import (
    OpenServiceOrderUseCase,
    OrderResult,
)
from repairshop.application.use_cases.stock_ledger import StockLedgerUseCase

__all__ = [
    "StockLedgerUseCase",
    "OpenServiceOrderUseCase",
    "OrderResult",
    "ChangeOrderStatusUseCase",
    "CompleteServiceOrderUseCase",
    "ListWarrantiesUseCase",
    "WarrantyEntry",
    "BudgetWorkflowUseCase",
    "ApprovalResult",
    "RejectionResult",
]
