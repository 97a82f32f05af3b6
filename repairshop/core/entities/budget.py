"""Budget (quote) and invoice domain entities."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from repairshop.core.clock import utcnow


class BudgetStatus(str, Enum):
    """Budget states. Every state other than pending is terminal."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    EXPIRED = "expired"


class BudgetItem(BaseModel):
    """A single quoted line."""

    description: str
    quantity: int = Field(default=1, ge=1)
    unit_price: float = Field(default=0.0, ge=0)
    line_total: float = 0.0

    @model_validator(mode="after")
    def compute_line(self) -> "BudgetItem":
        """Compute line_total from quantity and unit_price."""
        self.line_total = round(self.quantity * self.unit_price, 2)
        return self


class Budget(BaseModel):
    """A price quote attached to a service order, pending client approval."""

    id: int | None = None
    os_number: str
    client_name: str | None = None
    device: str | None = None
    items: list[BudgetItem] = Field(default_factory=list)
    total_value: float = 0.0
    issue_date: date = Field(default_factory=lambda: utcnow().date())
    expiry_date: date | None = None
    status: BudgetStatus = BudgetStatus.PENDING
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="after")
    def compute_total(self) -> "Budget":
        """Compute total_value from items."""
        self.total_value = round(sum(i.line_total for i in self.items), 2)
        return self

    @property
    def is_pending(self) -> bool:
        return self.status == BudgetStatus.PENDING


class InvoiceItem(BaseModel):
    """Snapshot of a budget line copied onto an invoice."""

    model_config = ConfigDict(frozen=True)

    description: str
    quantity: int
    unit_price: float
    line_total: float


class Invoice(BaseModel):
    """
    Immutable billing and warranty document issued from an approved budget.

    Holds copies of everything it shows; it never points back at the
    live service order.
    """

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    os_number: str
    client_name: str | None = None
    device: str | None = None
    items: tuple[InvoiceItem, ...] = ()
    total_value: float
    issue_date: date
    warranty_end_date: date
    technician_name: str
    created_at: datetime = Field(default_factory=utcnow)


def format_brl(value: float) -> str:
    """Format an amount the way shop documents print it: R$ 1.234,56."""
    text = f"{value:,.2f}"
    return "R$ " + text.replace(",", "_").replace(".", ",").replace("_", ".")
