"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from repairshop.application.dto.requests import (
    AdjustStockRequest,
    BudgetItemRequest,
    ChangeStatusRequest,
    CloseOrderRequest,
    CompleteOrderRequest,
    CreateBudgetRequest,
    CreatePartRequest,
    EditBudgetItemsRequest,
    EditMovementRequest,
    ExpireBudgetsRequest,
    OpenOrderRequest,
    RecordMovementRequest,
    UsedPartRequest,
)
from repairshop.application.dto.responses import (
    AdjustStockResponse,
    AggregatedStockResponse,
    ApproveBudgetResponse,
    BudgetResponse,
    ErrorResponse,
    ExpireBudgetsResponse,
    HealthResponse,
    InvoiceListResponse,
    InvoiceResponse,
    OrderListResponse,
    OrderResultResponse,
    PartResponse,
    ServiceOrderResponse,
    StockListResponse,
    StockMovementResponse,
    WarrantyListResponse,
    WarrantyResponse,
)

__all__ = [
    # Requests
    "CreatePartRequest",
    "RecordMovementRequest",
    "EditMovementRequest",
    "AdjustStockRequest",
    "OpenOrderRequest",
    "ChangeStatusRequest",
    "UsedPartRequest",
    "CompleteOrderRequest",
    "CloseOrderRequest",
    "BudgetItemRequest",
    "CreateBudgetRequest",
    "EditBudgetItemsRequest",
    "ExpireBudgetsRequest",
    # Responses
    "HealthResponse",
    "ErrorResponse",
    "PartResponse",
    "StockMovementResponse",
    "AggregatedStockResponse",
    "StockListResponse",
    "AdjustStockResponse",
    "ServiceOrderResponse",
    "OrderResultResponse",
    "OrderListResponse",
    "WarrantyResponse",
    "WarrantyListResponse",
    "BudgetResponse",
    "InvoiceResponse",
    "InvoiceListResponse",
    "ApproveBudgetResponse",
    "ExpireBudgetsResponse",
]
