"""List Warranties Use Case - warranty status of completed orders."""

from dataclasses import dataclass
from datetime import date

from repairshop.core.clock import today
from repairshop.core.entities.service_order import OrderStatus, ServiceOrder
from repairshop.core.interfaces.order_store import IOrderStore
from repairshop.core.services import warranty

PAGE_SIZE = 500


@dataclass
class WarrantyEntry:
    """A completed order with its warranty standing as of a given day."""

    order: ServiceOrder
    active: bool
    days_remaining: int

    @property
    def status(self) -> str:
        return "active" if self.active else "expired"


class ListWarrantiesUseCase:
    """Completed orders that carry a warranty end date."""

    def __init__(self, order_store: IOrderStore | None = None):
        self._order_store = order_store

    async def _get_order_store(self) -> IOrderStore:
        if self._order_store is None:
            from repairshop.infrastructure.storage.sqlite import get_order_store

            self._order_store = await get_order_store()
        return self._order_store

    async def execute(
        self,
        status: str | None = None,
        as_of: date | None = None,
    ) -> list[WarrantyEntry]:
        """
        Args:
            status: "active", "expired" or None for both
            as_of: Reference day (defaults to today)

        Returns:
            Entries ordered by warranty end date, soonest first
        """
        as_of = as_of or today()
        store = await self._get_order_store()
        orders: list[ServiceOrder] = []
        while True:
            page = await store.list_by_status(
                OrderStatus.COMPLETED, limit=PAGE_SIZE, offset=len(orders)
            )
            orders.extend(page)
            if len(page) < PAGE_SIZE:
                break

        entries = [
            WarrantyEntry(
                order=o,
                active=warranty.is_valid(o.warranty_end_date, as_of),
                days_remaining=warranty.days_remaining(o.warranty_end_date, as_of),
            )
            for o in orders
            if o.warranty_end_date is not None
        ]
        if status is not None:
            entries = [e for e in entries if e.status == status]
        entries.sort(key=lambda e: e.order.warranty_end_date)
        return entries
