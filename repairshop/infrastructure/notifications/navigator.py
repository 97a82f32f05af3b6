"""Navigator that records parts follow-ups in the log."""

from repairshop.config import get_logger
from repairshop.core.entities.service_order import ServiceOrder
from repairshop.core.interfaces.notifier import INavigator

logger = get_logger(__name__)


class LoggingNavigator(INavigator):
    """Headless navigator: there is no UI to route, so log the request."""

    async def parts_requested(self, order: ServiceOrder) -> None:
        logger.info(
            "parts_follow_up_requested",
            order_id=order.id,
            os_number=order.os_number,
            parts=[p.description for p in order.waiting_parts or []],
        )
