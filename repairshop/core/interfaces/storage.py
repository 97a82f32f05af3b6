"""
Abstract interfaces for budget and invoice storage.

Budgets are mutable while pending; invoices are write-once snapshots.
"""

from abc import ABC, abstractmethod

from repairshop.core.entities.budget import Budget, BudgetStatus, Invoice
from repairshop.core.entities.service_order import ServiceOrder


class IBudgetStore(ABC):
    """Interface for budget persistence."""

    @abstractmethod
    async def create_budget(self, budget: Budget) -> Budget:
        """Create a new budget."""
        pass

    @abstractmethod
    async def get_budget(self, budget_id: int) -> Budget | None:
        """Get budget by ID."""
        pass

    @abstractmethod
    async def get_active_by_os_number(self, os_number: str) -> Budget | None:
        """Most recent pending budget for an OS number."""
        pass

    @abstractmethod
    async def update_budget(self, budget: Budget) -> Budget:
        """Update items, totals and status of a budget."""
        pass

    @abstractmethod
    async def delete_budget(self, budget_id: int) -> bool:
        """Remove a budget from the active set."""
        pass

    @abstractmethod
    async def list_budgets(
        self, status: BudgetStatus | None = None, limit: int = 100, offset: int = 0
    ) -> list[Budget]:
        """List budgets, optionally filtered by status."""
        pass

    @abstractmethod
    async def finalize_approval(
        self, invoice: Invoice, order: ServiceOrder, budget_id: int
    ) -> tuple[Invoice, ServiceOrder]:
        """
        Atomically store the invoice, upsert the order and drop the budget.

        Returns the stored invoice and order with their IDs assigned.
        """
        pass

    @abstractmethod
    async def finalize_rejection(
        self, budget: Budget, order: ServiceOrder | None
    ) -> tuple[Budget, ServiceOrder | None]:
        """
        Atomically store the rejected budget and its closed order.

        `order` is None when the budget has no order on file.
        """
        pass


class IInvoiceStore(ABC):
    """Interface for issued invoice retrieval."""

    @abstractmethod
    async def create_invoice(self, invoice: Invoice) -> Invoice:
        """Store an invoice snapshot."""
        pass

    @abstractmethod
    async def get_invoice(self, invoice_id: int) -> Invoice | None:
        """Get invoice by ID."""
        pass

    @abstractmethod
    async def get_by_os_number(self, os_number: str) -> Invoice | None:
        """Latest invoice issued for an OS number."""
        pass

    @abstractmethod
    async def list_invoices(self, limit: int = 100, offset: int = 0) -> list[Invoice]:
        """List invoices, newest first."""
        pass
