"""
Application layer - Use cases, DTOs, and service factories.

Use cases are the only entry point for API handlers.
"""

from repairshop.application.services import (
    get_navigator,
    get_notifier,
    get_state_machine,
    reset_services,
)
from repairshop.application.use_cases import (
    BudgetWorkflowUseCase,
    ChangeOrderStatusUseCase,
    CompleteServiceOrderUseCase,
    ListWarrantiesUseCase,
    OpenServiceOrderUseCase,
    StockLedgerUseCase,
)

__all__ = [
    # Use Cases
    "StockLedgerUseCase",
    "OpenServiceOrderUseCase",
    "ChangeOrderStatusUseCase",
    "CompleteServiceOrderUseCase",
    "ListWarrantiesUseCase",
    "BudgetWorkflowUseCase",
    # Service factories
    "get_state_machine",
    "get_notifier",
    "get_navigator",
    "reset_services",
]
