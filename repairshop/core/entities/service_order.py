"""Service order (repair ticket) domain entities."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field

from repairshop.core.clock import utcnow


class OrderStatus(str, Enum):
    """Lifecycle states of a service order."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    WAITING_PARTS = "waiting-parts"
    UNDER_OBSERVATION = "under-observation"
    WAITING_CLIENT_RESPONSE = "waiting-client-response"
    ABANDONED = "abandoned"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.COMPLETED, OrderStatus.CANCELLED)


class PaymentMethod(str, Enum):
    """Accepted payment methods."""

    CASH = "cash"
    CARD = "card"
    PIX = "pix"
    TRANSFER = "transfer"


class CompletionType(str, Enum):
    """Outcome chosen when an order is ready to be finalized."""

    REPAIRED = "repaired"  # goes through the budget workflow
    REFUSED = "refused"  # client declined the quote
    NO_REPAIR = "no-repair"  # equipment cannot be repaired


class WaitingPart(BaseModel):
    """A part the order is waiting for, optionally linked to the catalog."""

    description: str
    part_id: str | None = None


class UsedPart(BaseModel):
    """A part consumed while repairing an order."""

    part_name: str
    quantity: int = Field(default=1, ge=1)
    part_id: str | None = None


class ServiceOrder(BaseModel):
    """A repair ticket tracked through its status lifecycle."""

    id: int | None = None
    os_number: str
    client_id: str | None = None
    client_name: str | None = None
    technician_id: str | None = None
    technician_name: str | None = None

    # Equipment
    equipment_type: str | None = None
    equipment_brand: str | None = None
    equipment_model: str | None = None
    serial_number: str | None = None

    defect: str = ""
    observations: str | None = None
    status: OrderStatus = OrderStatus.PENDING
    priority: str = "normal"

    entry_date: datetime = Field(default_factory=utcnow)
    completion_date: datetime | None = None
    delivery_date: datetime | None = None

    waiting_parts: list[WaitingPart] | None = None

    # Warranty
    warranty_months: int | None = None
    warranty_start_date: date | None = None
    warranty_end_date: date | None = None

    # Payment
    payment_method: PaymentMethod | None = None
    payment_amount: float | None = None

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def device(self) -> str:
        """Human-readable equipment label, e.g. "TV Samsung U8100F"."""
        parts = [self.equipment_type, self.equipment_brand, self.equipment_model]
        return " ".join(p for p in parts if p)

    @property
    def has_warranty(self) -> bool:
        return self.warranty_end_date is not None
