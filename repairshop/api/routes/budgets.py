"""Budget workflow endpoints."""

from fastapi import APIRouter, Depends, status

from repairshop.api.dependencies import get_budget_workflow_use_case
from repairshop.application.dto.requests import (
    CreateBudgetRequest,
    EditBudgetItemsRequest,
    ExpireBudgetsRequest,
)
from repairshop.application.dto.responses import (
    ApproveBudgetResponse,
    BudgetResponse,
    ErrorResponse,
    ExpireBudgetsResponse,
    InvoiceResponse,
    ServiceOrderResponse,
)
from repairshop.application.use_cases.budget_workflow import BudgetWorkflowUseCase

router = APIRouter(prefix="/api/budgets", tags=["budgets"])


@router.post(
    "",
    response_model=BudgetResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_budget(
    request: CreateBudgetRequest,
    use_case: BudgetWorkflowUseCase = Depends(get_budget_workflow_use_case),
) -> BudgetResponse:
    """Quote a service order."""
    return BudgetResponse.model_validate(await use_case.create_budget(request))


@router.post("/expire", response_model=ExpireBudgetsResponse)
async def expire_budgets(
    request: ExpireBudgetsRequest,
    use_case: BudgetWorkflowUseCase = Depends(get_budget_workflow_use_case),
) -> ExpireBudgetsResponse:
    """Expire pending budgets past their validity."""
    return ExpireBudgetsResponse(expired=await use_case.expire_budgets(request.as_of))


@router.get(
    "/{budget_id}",
    response_model=BudgetResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_budget(
    budget_id: int,
    use_case: BudgetWorkflowUseCase = Depends(get_budget_workflow_use_case),
) -> BudgetResponse:
    return BudgetResponse.model_validate(await use_case.get_budget(budget_id))


@router.put(
    "/{budget_id}/items",
    response_model=BudgetResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def edit_budget_items(
    budget_id: int,
    request: EditBudgetItemsRequest,
    use_case: BudgetWorkflowUseCase = Depends(get_budget_workflow_use_case),
) -> BudgetResponse:
    """Replace the items of a pending budget."""
    budget = await use_case.edit_budget_items(budget_id, request.items)
    return BudgetResponse.model_validate(budget)


@router.post(
    "/{budget_id}/approve",
    response_model=ApproveBudgetResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def approve_budget(
    budget_id: int,
    use_case: BudgetWorkflowUseCase = Depends(get_budget_workflow_use_case),
) -> ApproveBudgetResponse:
    """Approve a budget: issue the invoice and complete the order."""
    result = await use_case.approve_budget(budget_id)
    return ApproveBudgetResponse(
        invoice=InvoiceResponse.model_validate(result.invoice),
        order=ServiceOrderResponse.model_validate(result.order),
        warnings=result.warnings,
    )


@router.post(
    "/{budget_id}/reject",
    response_model=BudgetResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def reject_budget(
    budget_id: int,
    use_case: BudgetWorkflowUseCase = Depends(get_budget_workflow_use_case),
) -> BudgetResponse:
    """Reject a budget and close its order as refused."""
    result = await use_case.reject_budget(budget_id)
    return BudgetResponse.model_validate(result.budget)
