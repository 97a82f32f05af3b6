"""
Service order status state machine.

Flat and permissive: any status may follow any other. The only rules are
on payloads (waiting-parts needs parts) and on the fields a transition
fills in (completion stamps dates and warranty without overwriting).
"""

from collections.abc import Sequence

from repairshop.config import get_logger
from repairshop.core.clock import Clock, utcnow
from repairshop.core.entities.service_order import (
    CompletionType,
    OrderStatus,
    PaymentMethod,
    ServiceOrder,
    UsedPart,
    WaitingPart,
)
from repairshop.core.exceptions import ValidationError
from repairshop.core.services import warranty

logger = get_logger(__name__)

REFUSED_NOTE = "Cliente recusou o orçamento"
NO_REPAIR_NOTE = "Equipamento sem conserto"

_CLOSE_NOTES = {
    CompletionType.REFUSED: REFUSED_NOTE,
    CompletionType.NO_REPAIR: NO_REPAIR_NOTE,
}


def append_note(observations: str | None, note: str) -> str:
    """Append a line to free-text observations."""
    if not observations:
        return note
    return f"{observations}\n{note}"


def format_used_parts(used_parts: Sequence[UsedPart]) -> str:
    """Render "Peças utilizadas: A (2x), B (1x)"."""
    listing = ", ".join(f"{p.part_name} ({p.quantity}x)" for p in used_parts)
    return f"Peças utilizadas: {listing}"


def _parse_status(value: OrderStatus | str) -> OrderStatus:
    try:
        return OrderStatus(value)
    except ValueError as e:
        raise ValidationError("status", "unknown order status", value) from e


def _clean_waiting_parts(
    parts: Sequence[WaitingPart | str] | None,
) -> list[WaitingPart]:
    cleaned: list[WaitingPart] = []
    for part in parts or []:
        if isinstance(part, str):
            part = WaitingPart(description=part)
        description = part.description.strip()
        if description:
            cleaned.append(part.model_copy(update={"description": description}))
    return cleaned


class ServiceOrderStateMachine:
    """
    Applies status transitions to service orders.

    Never performs I/O; every method returns an updated copy and leaves
    the input untouched. `clock` is injectable so tests can pin "now".
    """

    def __init__(
        self,
        clock: Clock = utcnow,
        default_warranty_months: int = warranty.DEFAULT_WARRANTY_MONTHS,
    ):
        self.clock = clock
        self.default_warranty_months = default_warranty_months

    def change_status(
        self,
        order: ServiceOrder,
        new_status: OrderStatus | str,
        waiting_parts: Sequence[WaitingPart | str] | None = None,
    ) -> ServiceOrder:
        """
        Move an order to `new_status`.

        Raises:
            ValidationError: Unknown status, or waiting-parts without parts
        """
        status = _parse_status(new_status)
        now = self.clock()
        updates: dict = {"status": status, "updated_at": now}

        if status == OrderStatus.WAITING_PARTS:
            parts = _clean_waiting_parts(waiting_parts)
            if not parts:
                raise ValidationError(
                    "waiting_parts",
                    "at least one part is required when waiting for parts",
                    waiting_parts,
                )
            updates["waiting_parts"] = parts
        else:
            updates["waiting_parts"] = None

        if status == OrderStatus.COMPLETED:
            updates.update(self._completion_fields(order))

        logger.debug(
            "order_status_changed",
            os_number=order.os_number,
            from_status=order.status.value,
            to_status=status.value,
        )
        return order.model_copy(update=updates)

    def _completion_fields(self, order: ServiceOrder) -> dict:
        """Fields completion fills in, skipping any already populated."""
        now = self.clock()
        fields: dict = {}

        if order.warranty_months is None:
            fields["warranty_months"] = self.default_warranty_months
        if order.warranty_start_date is None:
            fields["warranty_start_date"] = now.date()
        if order.warranty_end_date is None:
            start = fields.get("warranty_start_date", order.warranty_start_date)
            months = fields.get("warranty_months", order.warranty_months)
            fields["warranty_end_date"] = warranty.end_date(start, months)
        if order.completion_date is None:
            fields["completion_date"] = now
        if order.delivery_date is None:
            fields["delivery_date"] = now
        return fields

    def complete_with_payment(
        self,
        order: ServiceOrder,
        payment_method: PaymentMethod | str,
        payment_amount: float,
        warranty_months: int = warranty.DEFAULT_WARRANTY_MONTHS,
        service_description: str | None = None,
        used_parts: Sequence[UsedPart] = (),
    ) -> ServiceOrder:
        """
        Finish a repaired order, recording payment and a fresh warranty.

        The warranty window starts today. The service description, when
        given, replaces the observations; used parts are appended.
        """
        try:
            method = PaymentMethod(payment_method)
        except ValueError as e:
            raise ValidationError("payment_method", "unknown payment method", payment_method) from e
        if payment_amount < 0:
            raise ValidationError("payment_amount", "must be >= 0", payment_amount)

        now = self.clock()
        start = now.date()
        observations = order.observations or ""
        if service_description:
            observations = service_description
        if used_parts:
            observations = append_note(observations, format_used_parts(used_parts))

        return order.model_copy(
            update={
                "status": OrderStatus.COMPLETED,
                "waiting_parts": None,
                "payment_method": method,
                "payment_amount": round(payment_amount, 2),
                "completion_date": now,
                "delivery_date": now,
                "warranty_months": warranty_months,
                "warranty_start_date": start,
                "warranty_end_date": warranty.end_date(start, warranty_months),
                "observations": observations or None,
                "updated_at": now,
            }
        )

    def close_without_repair(
        self,
        order: ServiceOrder,
        reason: CompletionType | str,
    ) -> ServiceOrder:
        """
        Finish an order that was not repaired (refused quote or no fix).

        No warranty or payment fields are set.
        """
        try:
            completion = CompletionType(reason)
        except ValueError as e:
            raise ValidationError("reason", "unknown completion type", reason) from e
        if completion not in _CLOSE_NOTES:
            raise ValidationError(
                "reason", "repaired orders are finalized through a budget", reason
            )

        now = self.clock()
        return order.model_copy(
            update={
                "status": OrderStatus.COMPLETED,
                "waiting_parts": None,
                "completion_date": now,
                "delivery_date": now,
                "observations": append_note(order.observations, _CLOSE_NOTES[completion]),
                "updated_at": now,
            }
        )
