"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from repairshop.core.entities.budget import BudgetStatus
from repairshop.core.entities.service_order import OrderStatus, PaymentMethod


class _FromEntity(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: bool = False


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. ORDER_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)


# --- Stock ---


class PartResponse(_FromEntity):
    """Catalog part response DTO."""

    id: str
    name: str
    part_type: str | None = None
    serial_number: str | None = None
    notes: str | None = None


class StockMovementResponse(_FromEntity):
    """Stock movement response DTO."""

    id: int
    part_id: str
    quantity: int
    unit_price: float | None = None
    occurred_at: date
    is_adjustment: bool = False
    adjustment_reason: str | None = None
    description: str | None = None
    created_at: datetime


class AggregatedStockResponse(_FromEntity):
    """On-hand view of one part."""

    part_id: str
    part_name: str
    total_quantity: int
    last_unit_price: float | None = None
    last_movement_at: date | None = None
    movement_count: int = 0
    in_stock: bool
    total_value: float


class StockListResponse(BaseModel):
    """In-stock parts ordered by name."""

    items: list[AggregatedStockResponse]
    total: int


class AdjustStockResponse(BaseModel):
    """Result of an adjustment; movement is null when nothing changed."""

    movement: StockMovementResponse | None = None
    stock: AggregatedStockResponse


# --- Service Orders ---


class WaitingPartResponse(_FromEntity):
    description: str
    part_id: str | None = None


class ServiceOrderResponse(_FromEntity):
    """Service order response DTO."""

    id: int
    os_number: str
    client_id: str | None = None
    client_name: str | None = None
    technician_id: str | None = None
    technician_name: str | None = None
    equipment_type: str | None = None
    equipment_brand: str | None = None
    equipment_model: str | None = None
    serial_number: str | None = None
    defect: str
    observations: str | None = None
    status: OrderStatus
    priority: str
    entry_date: datetime
    completion_date: datetime | None = None
    delivery_date: datetime | None = None
    waiting_parts: list[WaitingPartResponse] | None = None
    warranty_months: int | None = None
    warranty_start_date: date | None = None
    warranty_end_date: date | None = None
    payment_method: PaymentMethod | None = None
    payment_amount: float | None = None
    created_at: datetime
    updated_at: datetime


class OrderResultResponse(BaseModel):
    """An order plus any collaborator warnings raised while saving it."""

    order: ServiceOrderResponse
    warnings: list[str] = Field(default_factory=list)


class OrderListResponse(BaseModel):
    orders: list[ServiceOrderResponse]
    total: int


class WarrantyResponse(BaseModel):
    """Warranty status of a completed order."""

    order_id: int
    os_number: str
    client_name: str | None = None
    device: str
    warranty_start_date: date | None = None
    warranty_end_date: date
    status: str  # "active" or "expired"
    days_remaining: int


class WarrantyListResponse(BaseModel):
    warranties: list[WarrantyResponse]
    total: int


# --- Budgets / Invoices ---


class BudgetItemResponse(_FromEntity):
    description: str
    quantity: int
    unit_price: float
    line_total: float


class BudgetResponse(_FromEntity):
    """Budget response DTO."""

    id: int
    os_number: str
    client_name: str | None = None
    device: str | None = None
    items: list[BudgetItemResponse]
    total_value: float
    issue_date: date
    expiry_date: date | None = None
    status: BudgetStatus
    created_at: datetime
    updated_at: datetime


class InvoiceResponse(_FromEntity):
    """Invoice response DTO."""

    id: int
    os_number: str
    client_name: str | None = None
    device: str | None = None
    items: list[BudgetItemResponse]
    total_value: float
    issue_date: date
    warranty_end_date: date
    technician_name: str
    created_at: datetime


class InvoiceListResponse(BaseModel):
    invoices: list[InvoiceResponse]
    total: int


class ApproveBudgetResponse(BaseModel):
    """Issued invoice and the completed order."""

    invoice: InvoiceResponse
    order: ServiceOrderResponse
    warnings: list[str] = Field(default_factory=list)


class ExpireBudgetsResponse(BaseModel):
    expired: int
