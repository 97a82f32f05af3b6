"""Service order endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, status

from repairshop.api.dependencies import (
    get_change_status_use_case,
    get_complete_order_use_case,
    get_list_warranties_use_case,
    get_open_order_use_case,
    get_orders,
)
from repairshop.application.dto.requests import (
    ChangeStatusRequest,
    CloseOrderRequest,
    CompleteOrderRequest,
    OpenOrderRequest,
)
from repairshop.application.dto.responses import (
    ErrorResponse,
    OrderListResponse,
    OrderResultResponse,
    ServiceOrderResponse,
    WarrantyListResponse,
    WarrantyResponse,
)
from repairshop.application.use_cases import (
    ChangeOrderStatusUseCase,
    CompleteServiceOrderUseCase,
    ListWarrantiesUseCase,
    OpenServiceOrderUseCase,
    OrderResult,
)
from repairshop.core.exceptions import OrderNotFoundError
from repairshop.infrastructure.storage.sqlite import SQLiteOrderStore

router = APIRouter(prefix="/api/orders", tags=["orders"])
warranties_router = APIRouter(prefix="/api/warranties", tags=["warranties"])


def _to_response(result: OrderResult) -> OrderResultResponse:
    return OrderResultResponse(
        order=ServiceOrderResponse.model_validate(result.order),
        warnings=result.warnings,
    )


@router.post("", response_model=OrderResultResponse, status_code=status.HTTP_201_CREATED)
async def open_order(
    request: OpenOrderRequest,
    use_case: OpenServiceOrderUseCase = Depends(get_open_order_use_case),
) -> OrderResultResponse:
    """Open a service order with the next OS number."""
    return _to_response(await use_case.execute(request))


@router.get("/waiting-parts", response_model=OrderListResponse)
async def list_waiting_parts(
    store: SQLiteOrderStore = Depends(get_orders),
) -> OrderListResponse:
    """Orders waiting for parts, oldest first."""
    orders = await store.list_waiting_parts()
    return OrderListResponse(
        orders=[ServiceOrderResponse.model_validate(o) for o in orders],
        total=len(orders),
    )


@router.get(
    "/{order_id}",
    response_model=ServiceOrderResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_order(
    order_id: int,
    store: SQLiteOrderStore = Depends(get_orders),
) -> ServiceOrderResponse:
    order = await store.get_order(order_id)
    if order is None:
        raise OrderNotFoundError(order_id)
    return ServiceOrderResponse.model_validate(order)


@router.post(
    "/{order_id}/status",
    response_model=OrderResultResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def change_status(
    order_id: int,
    request: ChangeStatusRequest,
    use_case: ChangeOrderStatusUseCase = Depends(get_change_status_use_case),
) -> OrderResultResponse:
    """Move an order to another status."""
    result = await use_case.execute(order_id, request.status, request.waiting_parts)
    return _to_response(result)


@router.post(
    "/{order_id}/complete",
    response_model=OrderResultResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def complete_order(
    order_id: int,
    request: CompleteOrderRequest,
    use_case: CompleteServiceOrderUseCase = Depends(get_complete_order_use_case),
) -> OrderResultResponse:
    """Complete a repaired order with payment and warranty."""
    return _to_response(await use_case.complete(order_id, request))


@router.post(
    "/{order_id}/close",
    response_model=OrderResultResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def close_order(
    order_id: int,
    request: CloseOrderRequest,
    use_case: CompleteServiceOrderUseCase = Depends(get_complete_order_use_case),
) -> OrderResultResponse:
    """Complete an order that was refused or could not be repaired."""
    return _to_response(await use_case.close_without_repair(order_id, request.reason))


@router.post(
    "/{order_id}/deliver",
    response_model=OrderResultResponse,
    responses={404: {"model": ErrorResponse}},
)
async def deliver_order(
    order_id: int,
    use_case: CompleteServiceOrderUseCase = Depends(get_complete_order_use_case),
) -> OrderResultResponse:
    return _to_response(await use_case.mark_delivered(order_id))


@warranties_router.get("", response_model=WarrantyListResponse)
async def list_warranties(
    state: str | None = None,
    as_of: date | None = None,
    use_case: ListWarrantiesUseCase = Depends(get_list_warranties_use_case),
) -> WarrantyListResponse:
    """Completed orders with a warranty; `state` filters active/expired."""
    entries = await use_case.execute(status=state, as_of=as_of)
    return WarrantyListResponse(
        warranties=[
            WarrantyResponse(
                order_id=e.order.id,
                os_number=e.order.os_number,
                client_name=e.order.client_name,
                device=e.order.device,
                warranty_start_date=e.order.warranty_start_date,
                warranty_end_date=e.order.warranty_end_date,
                status=e.status,
                days_remaining=e.days_remaining,
            )
            for e in entries
        ],
        total=len(entries),
    )
