"""Inventory domain entities."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from repairshop.core.clock import utcnow


class Part(BaseModel):
    """Catalog entry for a spare part (e.g. "Placa T-CON")."""

    id: str
    name: str
    part_type: str | None = None
    serial_number: str | None = None
    notes: str | None = None
    created_at: datetime = Field(default_factory=utcnow)


class StockMovement(BaseModel):
    """
    One signed-quantity ledger entry for a part.

    Positive quantities are inbound, negative ones outbound or removals.
    The store-assigned id grows with insertion order.
    """

    id: int | None = None
    part_id: str  # FK → parts.id
    quantity: int
    unit_price: float | None = None  # price at time of movement
    occurred_at: date = Field(default_factory=lambda: utcnow().date())
    is_adjustment: bool = False
    adjustment_reason: str | None = None
    description: str | None = None
    created_at: datetime = Field(default_factory=utcnow)

    @property
    def is_inbound(self) -> bool:
        return self.quantity > 0


class AggregatedStock(BaseModel):
    """Current on-hand view of a part, derived from its movements."""

    part_id: str
    part_name: str
    total_quantity: int = 0
    last_unit_price: float | None = None
    last_movement_at: date | None = None
    movement_count: int = 0

    @property
    def in_stock(self) -> bool:
        return self.total_quantity > 0

    @property
    def total_value(self) -> float:
        """On-hand quantity valued at the last known unit price."""
        if self.last_unit_price is None or self.total_quantity <= 0:
            return 0.0
        return round(self.total_quantity * self.last_unit_price, 2)
