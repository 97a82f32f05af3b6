"""Invoice endpoints (read-only; invoices come from approved budgets)."""

from fastapi import APIRouter, Depends

from repairshop.api.dependencies import get_invoices
from repairshop.application.dto.responses import (
    ErrorResponse,
    InvoiceListResponse,
    InvoiceResponse,
)
from repairshop.core.exceptions import InvoiceNotFoundError
from repairshop.infrastructure.storage.sqlite import SQLiteInvoiceStore

router = APIRouter(prefix="/api/invoices", tags=["invoices"])


@router.get("", response_model=InvoiceListResponse)
async def list_invoices(
    limit: int = 100,
    offset: int = 0,
    os_number: str | None = None,
    store: SQLiteInvoiceStore = Depends(get_invoices),
) -> InvoiceListResponse:
    """List invoices, newest first, optionally for a single OS number."""
    if os_number is not None:
        invoice = await store.get_by_os_number(os_number)
        invoices = [invoice] if invoice else []
    else:
        invoices = await store.list_invoices(limit=limit, offset=offset)
    return InvoiceListResponse(
        invoices=[InvoiceResponse.model_validate(i) for i in invoices],
        total=len(invoices),
    )


@router.get(
    "/{invoice_id}",
    response_model=InvoiceResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_invoice(
    invoice_id: int,
    store: SQLiteInvoiceStore = Depends(get_invoices),
) -> InvoiceResponse:
    invoice = await store.get_invoice(invoice_id)
    if invoice is None:
        raise InvoiceNotFoundError(invoice_id)
    return InvoiceResponse.model_validate(invoice)
