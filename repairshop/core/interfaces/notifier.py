"""Outbound collaborator interfaces: client notification and UI navigation."""

from abc import ABC, abstractmethod

from repairshop.core.entities.budget import Invoice
from repairshop.core.entities.service_order import ServiceOrder


class INotifier(ABC):
    """Tells the client that something happened to their order."""

    @abstractmethod
    async def order_created(self, order: ServiceOrder) -> None:
        """Announce a newly opened service order."""
        pass

    @abstractmethod
    async def invoice_issued(self, invoice: Invoice) -> None:
        """Deliver a freshly issued invoice."""
        pass


class INavigator(ABC):
    """Routes staff to the follow-up screen for an order."""

    @abstractmethod
    async def parts_requested(self, order: ServiceOrder) -> None:
        """Order moved to waiting-parts; open the parts follow-up."""
        pass
