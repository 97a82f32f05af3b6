"""Stock ledger endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, status

from repairshop.api.dependencies import get_parts, get_stock_ledger_use_case
from repairshop.application.dto.requests import (
    AdjustStockRequest,
    CreatePartRequest,
    EditMovementRequest,
    RecordMovementRequest,
)
from repairshop.application.dto.responses import (
    AdjustStockResponse,
    AggregatedStockResponse,
    ErrorResponse,
    PartResponse,
    StockListResponse,
    StockMovementResponse,
)
from repairshop.application.use_cases.stock_ledger import StockLedgerUseCase
from repairshop.core.entities.stock import Part
from repairshop.core.exceptions import PartNotFoundError
from repairshop.infrastructure.storage.sqlite import SQLitePartCatalog

router = APIRouter(prefix="/api/stock", tags=["stock"])


# --- Catalog ---


@router.post("/parts", response_model=PartResponse, status_code=status.HTTP_201_CREATED)
async def create_part(
    request: CreatePartRequest,
    catalog: SQLitePartCatalog = Depends(get_parts),
) -> PartResponse:
    """Register a catalog part."""
    part = await catalog.create_part(Part(**request.model_dump()))
    return PartResponse.model_validate(part)


@router.get("/parts", response_model=list[PartResponse])
async def list_parts(
    catalog: SQLitePartCatalog = Depends(get_parts),
) -> list[PartResponse]:
    return [PartResponse.model_validate(p) for p in await catalog.list_parts()]


@router.get(
    "/parts/{part_id}",
    response_model=PartResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_part(
    part_id: str,
    catalog: SQLitePartCatalog = Depends(get_parts),
) -> PartResponse:
    part = await catalog.get_part(part_id)
    if part is None:
        raise PartNotFoundError(part_id)
    return PartResponse.model_validate(part)


# --- Movements ---


@router.post(
    "/movements",
    response_model=StockMovementResponse,
    status_code=status.HTTP_201_CREATED,
)
async def record_movement(
    request: RecordMovementRequest,
    use_case: StockLedgerUseCase = Depends(get_stock_ledger_use_case),
) -> StockMovementResponse:
    """Append a movement (positive in, negative out)."""
    movement = await use_case.record_movement(request)
    return StockMovementResponse.model_validate(movement)


@router.put(
    "/movements/{movement_id}",
    response_model=StockMovementResponse,
    responses={404: {"model": ErrorResponse}},
)
async def edit_movement(
    movement_id: int,
    request: EditMovementRequest,
    use_case: StockLedgerUseCase = Depends(get_stock_ledger_use_case),
) -> StockMovementResponse:
    """Correct a movement in place."""
    movement = await use_case.edit_movement(movement_id, request)
    return StockMovementResponse.model_validate(movement)


@router.delete(
    "/movements/{movement_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_movement(
    movement_id: int,
    use_case: StockLedgerUseCase = Depends(get_stock_ledger_use_case),
) -> None:
    await use_case.delete_movement(movement_id)


# --- Aggregates ---


@router.get("", response_model=StockListResponse)
async def list_stock(
    use_case: StockLedgerUseCase = Depends(get_stock_ledger_use_case),
) -> StockListResponse:
    """Parts currently in stock, ordered by name."""
    aggregates = await use_case.aggregate_all()
    return StockListResponse(
        items=[AggregatedStockResponse.model_validate(a) for a in aggregates],
        total=len(aggregates),
    )


@router.get("/{part_id}", response_model=AggregatedStockResponse)
async def get_stock(
    part_id: str,
    use_case: StockLedgerUseCase = Depends(get_stock_ledger_use_case),
) -> AggregatedStockResponse:
    return AggregatedStockResponse.model_validate(await use_case.aggregate(part_id))


@router.get("/{part_id}/movements", response_model=list[StockMovementResponse])
async def list_movements(
    part_id: str,
    use_case: StockLedgerUseCase = Depends(get_stock_ledger_use_case),
) -> list[StockMovementResponse]:
    """Movement history, newest first."""
    movements = await use_case.list_movements(part_id)
    return [StockMovementResponse.model_validate(m) for m in movements]


@router.post(
    "/{part_id}/adjust",
    response_model=AdjustStockResponse,
    responses={400: {"model": ErrorResponse}},
)
async def adjust_stock(
    part_id: str,
    request: AdjustStockRequest,
    use_case: StockLedgerUseCase = Depends(get_stock_ledger_use_case),
) -> AdjustStockResponse:
    """Bring the part's total to a target quantity."""
    movement = await use_case.adjust(part_id, request)
    stock = await use_case.aggregate(part_id)
    return AdjustStockResponse(
        movement=StockMovementResponse.model_validate(movement) if movement else None,
        stock=AggregatedStockResponse.model_validate(stock),
    )


@router.delete("/{part_id}", response_model=AdjustStockResponse)
async def remove_all_stock(
    part_id: str,
    occurred_at: date | None = None,
    use_case: StockLedgerUseCase = Depends(get_stock_ledger_use_case),
) -> AdjustStockResponse:
    """Zero the part's stock at its last known price."""
    movement = await use_case.remove_all_stock(part_id, occurred_at)
    stock = await use_case.aggregate(part_id)
    return AdjustStockResponse(
        movement=StockMovementResponse.model_validate(movement) if movement else None,
        stock=AggregatedStockResponse.model_validate(stock),
    )
