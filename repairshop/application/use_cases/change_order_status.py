"""Change Order Status Use Case - apply a status transition and persist it."""

from repairshop.application.use_cases.open_service_order import OrderResult
from repairshop.config import get_logger
from repairshop.core.entities.service_order import OrderStatus, WaitingPart
from repairshop.core.exceptions import OrderNotFoundError
from repairshop.core.interfaces.notifier import INavigator
from repairshop.core.interfaces.order_store import IOrderStore
from repairshop.core.interfaces.stock_store import IPartCatalog
from repairshop.core.services.order_state_machine import ServiceOrderStateMachine

logger = get_logger(__name__)


class ChangeOrderStatusUseCase:
    """
    Move a service order to a new status.

    Waiting-parts descriptions are matched against the part catalog by
    name; unmatched ones stay free text. The navigator is told about
    waiting-parts orders, best-effort.
    """

    def __init__(
        self,
        order_store: IOrderStore | None = None,
        part_catalog: IPartCatalog | None = None,
        navigator: INavigator | None = None,
        state_machine: ServiceOrderStateMachine | None = None,
    ):
        self._order_store = order_store
        self._part_catalog = part_catalog
        self._navigator = navigator
        self._state_machine = state_machine

    async def _get_order_store(self) -> IOrderStore:
        if self._order_store is None:
            from repairshop.infrastructure.storage.sqlite import get_order_store

            self._order_store = await get_order_store()
        return self._order_store

    async def _get_part_catalog(self) -> IPartCatalog:
        if self._part_catalog is None:
            from repairshop.infrastructure.storage.sqlite import get_part_catalog

            self._part_catalog = await get_part_catalog()
        return self._part_catalog

    def _get_navigator(self) -> INavigator:
        if self._navigator is None:
            from repairshop.application.services import get_navigator

            self._navigator = get_navigator()
        return self._navigator

    def _get_state_machine(self) -> ServiceOrderStateMachine:
        if self._state_machine is None:
            from repairshop.application.services import get_state_machine

            self._state_machine = get_state_machine()
        return self._state_machine

    async def _resolve_parts(self, descriptions: list[str]) -> list[WaitingPart]:
        catalog = await self._get_part_catalog()
        resolved = []
        for description in descriptions:
            text = description.strip()
            if not text:
                continue
            part = await catalog.find_by_name(text)
            resolved.append(WaitingPart(description=text, part_id=part.id if part else None))
        return resolved

    async def execute(
        self,
        order_id: int,
        new_status: OrderStatus | str,
        waiting_parts: list[str] | None = None,
    ) -> OrderResult:
        """
        Raises:
            OrderNotFoundError: unknown order id
            ValidationError: unknown status or missing waiting parts
        """
        store = await self._get_order_store()
        order = await store.get_order(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        parts = await self._resolve_parts(waiting_parts) if waiting_parts else None
        updated = self._get_state_machine().change_status(order, new_status, parts)
        updated = await store.update_order(updated)

        logger.info(
            "order_status_updated",
            order_id=order_id,
            os_number=updated.os_number,
            status=updated.status.value,
        )

        warnings: list[str] = []
        if updated.status == OrderStatus.WAITING_PARTS:
            try:
                await self._get_navigator().parts_requested(updated)
            except Exception as e:
                logger.warning("parts_navigation_failed", order_id=order_id, error=str(e))
                warnings.append(f"Parts follow-up failed: {e}")

        return OrderResult(order=updated, warnings=warnings)
