"""Complete Service Order Use Case - finalize, close or deliver an order."""

from repairshop.application.dto.requests import CompleteOrderRequest
from repairshop.application.use_cases.open_service_order import OrderResult
from repairshop.config import get_logger, order_context
from repairshop.core.clock import Clock, utcnow
from repairshop.core.entities.service_order import (
    CompletionType,
    ServiceOrder,
    UsedPart,
)
from repairshop.core.entities.stock import StockMovement
from repairshop.core.exceptions import OrderNotFoundError
from repairshop.core.interfaces.order_store import IOrderStore
from repairshop.core.services.order_state_machine import ServiceOrderStateMachine

logger = get_logger(__name__)


class CompleteServiceOrderUseCase:
    """
    Terminal transitions of a service order.

    - complete: repaired and paid, with a fresh warranty window; used
      catalog parts leave stock as outbound movements
    - close: not repaired (quote refused or no fix possible)
    - deliver: equipment handed back to the client
    """

    def __init__(
        self,
        order_store: IOrderStore | None = None,
        state_machine: ServiceOrderStateMachine | None = None,
        clock: Clock = utcnow,
    ):
        self._order_store = order_store
        self._state_machine = state_machine
        self._clock = clock

    async def _get_order_store(self) -> IOrderStore:
        if self._order_store is None:
            from repairshop.infrastructure.storage.sqlite import get_order_store

            self._order_store = await get_order_store()
        return self._order_store

    def _get_state_machine(self) -> ServiceOrderStateMachine:
        if self._state_machine is None:
            from repairshop.application.services import get_state_machine

            self._state_machine = get_state_machine()
        return self._state_machine

    async def _load(self, order_id: int) -> ServiceOrder:
        store = await self._get_order_store()
        order = await store.get_order(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    async def complete(self, order_id: int, request: CompleteOrderRequest) -> OrderResult:
        """Complete a repaired order with payment and warranty."""
        order = await self._load(order_id)
        with order_context(order.os_number, order_id=order_id):
            used_parts = [UsedPart(**p.model_dump()) for p in request.used_parts]

            completed = self._get_state_machine().complete_with_payment(
                order,
                payment_method=request.payment_method,
                payment_amount=request.payment_amount,
                warranty_months=request.warranty_months,
                service_description=request.service_description,
                used_parts=used_parts,
            )
            movements = [
                StockMovement(
                    part_id=part.part_id,
                    quantity=-part.quantity,
                    occurred_at=completed.completion_date.date(),
                    description=f"Usada na {completed.os_number}",
                )
                for part in used_parts
                if part.part_id is not None
            ]
            store = await self._get_order_store()
            completed, _ = await store.update_with_movements(completed, movements)

            logger.info(
                "service_order_completed",
                payment_method=completed.payment_method.value,
                payment_amount=completed.payment_amount,
                parts_used=len(used_parts),
            )
            return OrderResult(order=completed)

    async def close_without_repair(
        self, order_id: int, reason: CompletionType | str
    ) -> OrderResult:
        """Complete an order that was not repaired."""
        order = await self._load(order_id)
        closed = self._get_state_machine().close_without_repair(order, reason)
        store = await self._get_order_store()
        closed = await store.update_order(closed)

        logger.info(
            "service_order_closed",
            order_id=order_id,
            os_number=closed.os_number,
            reason=str(reason),
        )
        return OrderResult(order=closed)

    async def mark_delivered(self, order_id: int) -> OrderResult:
        """Stamp the delivery date unless one is already recorded."""
        order = await self._load(order_id)
        if order.delivery_date is not None:
            return OrderResult(order=order)

        now = self._clock()
        delivered = order.model_copy(update={"delivery_date": now, "updated_at": now})
        store = await self._get_order_store()
        delivered = await store.update_order(delivered)
        logger.info("service_order_delivered", order_id=order_id, os_number=delivered.os_number)
        return OrderResult(order=delivered)
