"""Open Service Order Use Case - register a new repair ticket."""

from dataclasses import dataclass, field

from repairshop.application.dto.requests import OpenOrderRequest
from repairshop.config import get_logger
from repairshop.core.clock import Clock, utcnow
from repairshop.core.entities.service_order import OrderStatus, ServiceOrder
from repairshop.core.interfaces.notifier import INotifier
from repairshop.core.interfaces.order_store import IOrderStore

logger = get_logger(__name__)


@dataclass
class OrderResult:
    """A saved order plus warnings from best-effort collaborators."""

    order: ServiceOrder
    warnings: list[str] = field(default_factory=list)


class OpenServiceOrderUseCase:
    """Assign the next OS number, persist, then notify the client."""

    def __init__(
        self,
        order_store: IOrderStore | None = None,
        notifier: INotifier | None = None,
        clock: Clock = utcnow,
    ):
        self._order_store = order_store
        self._notifier = notifier
        self._clock = clock

    async def _get_order_store(self) -> IOrderStore:
        if self._order_store is None:
            from repairshop.infrastructure.storage.sqlite import get_order_store

            self._order_store = await get_order_store()
        return self._order_store

    def _get_notifier(self) -> INotifier:
        if self._notifier is None:
            from repairshop.application.services import get_notifier

            self._notifier = get_notifier()
        return self._notifier

    async def execute(self, request: OpenOrderRequest) -> OrderResult:
        store = await self._get_order_store()
        now = self._clock()

        order = ServiceOrder(
            os_number=await store.next_os_number(),
            status=OrderStatus.PENDING,
            entry_date=now,
            created_at=now,
            updated_at=now,
            **request.model_dump(),
        )
        order = await store.create_order(order)
        logger.info("service_order_opened", order_id=order.id, os_number=order.os_number)

        warnings: list[str] = []
        try:
            await self._get_notifier().order_created(order)
        except Exception as e:
            logger.warning("order_notification_failed", os_number=order.os_number, error=str(e))
            warnings.append(f"Client notification failed: {e}")

        return OrderResult(order=order, warnings=warnings)
