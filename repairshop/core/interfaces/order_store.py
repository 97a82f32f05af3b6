"""Abstract interface for service order storage."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from repairshop.core.entities.service_order import OrderStatus, ServiceOrder
from repairshop.core.entities.stock import StockMovement


class IOrderStore(ABC):
    """Interface for service order persistence."""

    @abstractmethod
    async def create_order(self, order: ServiceOrder) -> ServiceOrder:
        """Create a new service order."""
        pass

    @abstractmethod
    async def get_order(self, order_id: int) -> ServiceOrder | None:
        """Get order by ID."""
        pass

    @abstractmethod
    async def get_by_os_number(self, os_number: str) -> ServiceOrder | None:
        """Get order by its OS number."""
        pass

    @abstractmethod
    async def update_order(self, order: ServiceOrder) -> ServiceOrder:
        """Persist every field of an existing order."""
        pass

    @abstractmethod
    async def update_with_movements(
        self, order: ServiceOrder, movements: Sequence[StockMovement]
    ) -> tuple[ServiceOrder, list[StockMovement]]:
        """
        Atomically persist the order and append its stock movements.

        Returns the order and the stored movements with their IDs assigned.
        """
        pass

    @abstractmethod
    async def list_orders(
        self, limit: int = 100, offset: int = 0
    ) -> list[ServiceOrder]:
        """List orders, newest entry first."""
        pass

    @abstractmethod
    async def list_by_status(
        self, status: OrderStatus, limit: int = 100, offset: int = 0
    ) -> list[ServiceOrder]:
        """List orders currently in the given status."""
        pass

    @abstractmethod
    async def list_waiting_parts(self) -> list[ServiceOrder]:
        """Orders in waiting-parts status, oldest entry first."""
        pass

    @abstractmethod
    async def next_os_number(self) -> str:
        """Next free OS number in the shop sequence."""
        pass
