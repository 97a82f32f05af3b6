"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from datetime import date

from pydantic import BaseModel, Field

# --- Stock ---


class CreatePartRequest(BaseModel):
    """Request to register a catalog part."""

    id: str = Field(..., min_length=1, description="Part ID", examples=["TCON-55"])
    name: str = Field(..., min_length=1, description="Display name", examples=["Placa T-CON"])
    part_type: str | None = Field(default=None, description="Part category")
    serial_number: str | None = None
    notes: str | None = None


class RecordMovementRequest(BaseModel):
    """Request to append a stock movement to the ledger."""

    part_id: str = Field(..., description="Catalog part ID")
    quantity: int = Field(..., description="Signed quantity: positive in, negative out")
    unit_price: float | None = Field(default=None, ge=0, description="Price per unit")
    occurred_at: date | None = Field(
        default=None,
        description="Movement date (defaults to today)",
    )
    description: str | None = Field(default=None, description="Free-text note")


class EditMovementRequest(BaseModel):
    """Request to correct an existing movement in place."""

    quantity: int
    unit_price: float | None = Field(default=None, ge=0)
    occurred_at: date
    description: str | None = None


class AdjustStockRequest(BaseModel):
    """Request to bring a part's on-hand total to a target value."""

    target_quantity: int = Field(..., description="Desired on-hand total (>= 0)")
    unit_price: float | None = Field(default=None, ge=0)
    occurred_at: date | None = None
    reason: str | None = Field(
        default=None,
        description="Adjustment reason (defaults to a manual adjustment note)",
    )


# --- Service Orders ---


class OpenOrderRequest(BaseModel):
    """Request to open a new service order."""

    client_id: str | None = None
    client_name: str | None = None
    technician_id: str | None = None
    technician_name: str | None = None
    equipment_type: str | None = Field(default=None, examples=["TV"])
    equipment_brand: str | None = Field(default=None, examples=["Samsung"])
    equipment_model: str | None = Field(default=None, examples=["U8100F"])
    serial_number: str | None = None
    defect: str = Field(default="", description="Reported defect")
    observations: str | None = None
    priority: str = "normal"


class ChangeStatusRequest(BaseModel):
    """Request to move an order to another status."""

    status: str = Field(..., examples=["in-progress", "waiting-parts"])
    waiting_parts: list[str] | None = Field(
        default=None,
        description="Part descriptions; required for waiting-parts",
        examples=[["Placa T-CON"]],
    )


class UsedPartRequest(BaseModel):
    """A part consumed by the repair."""

    part_name: str = Field(..., min_length=1)
    quantity: int = Field(default=1, ge=1)
    part_id: str | None = Field(
        default=None,
        description="Catalog ID; when set, the part is taken out of stock",
    )


class CompleteOrderRequest(BaseModel):
    """Request to complete a repaired order with payment."""

    payment_method: str = Field(..., examples=["cash", "card", "pix", "transfer"])
    payment_amount: float = Field(..., ge=0)
    warranty_months: int = Field(default=3, ge=0, le=120)
    service_description: str | None = None
    used_parts: list[UsedPartRequest] = Field(default_factory=list)


class CloseOrderRequest(BaseModel):
    """Request to close an order that was not repaired."""

    reason: str = Field(..., examples=["refused", "no-repair"])


# --- Budgets ---


class BudgetItemRequest(BaseModel):
    """One quoted line."""

    description: str = Field(default="", examples=["BARRA LED 37"])
    quantity: int = Field(default=1, ge=1)
    unit_price: float = Field(default=0.0, ge=0)


class CreateBudgetRequest(BaseModel):
    """Request to quote an order."""

    os_number: str = Field(..., examples=["OS-1002"])
    client_name: str | None = None
    device: str | None = None
    items: list[BudgetItemRequest] = Field(default_factory=list)
    issue_date: date | None = None


class EditBudgetItemsRequest(BaseModel):
    """Request to replace a pending budget's items."""

    items: list[BudgetItemRequest]


class ExpireBudgetsRequest(BaseModel):
    """Request to expire stale pending budgets."""

    as_of: date | None = Field(default=None, description="Reference date (defaults to today)")
