"""Budget Workflow Use Case - quote, approve into an invoice, or reject."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, timedelta

from repairshop.application.dto.requests import BudgetItemRequest, CreateBudgetRequest
from repairshop.config import get_logger, get_settings
from repairshop.core.clock import Clock, utcnow
from repairshop.core.entities.budget import (
    Budget,
    BudgetItem,
    BudgetStatus,
    Invoice,
    InvoiceItem,
)
from repairshop.core.entities.service_order import (
    CompletionType,
    OrderStatus,
    ServiceOrder,
)
from repairshop.core.exceptions import (
    BudgetNotEditableError,
    BudgetNotFoundError,
    ValidationError,
)
from repairshop.core.interfaces.notifier import INotifier
from repairshop.core.interfaces.order_store import IOrderStore
from repairshop.core.interfaces.storage import IBudgetStore
from repairshop.core.services import warranty
from repairshop.core.services.order_state_machine import ServiceOrderStateMachine

logger = get_logger(__name__)

PAGE_SIZE = 500


@dataclass
class ApprovalResult:
    """Issued invoice and the order it completed."""

    invoice: Invoice
    order: ServiceOrder
    warnings: list[str] = field(default_factory=list)


@dataclass
class RejectionResult:
    budget: Budget
    order: ServiceOrder | None = None


def build_items(items: Sequence[BudgetItemRequest | BudgetItem]) -> list[BudgetItem]:
    """
    Validate quoted lines and compute their totals.

    Raises:
        ValidationError: empty list or a blank description
    """
    if not items:
        raise ValidationError("items", "a budget needs at least one item", [])

    built = []
    for index, item in enumerate(items):
        description = item.description.strip()
        if not description:
            raise ValidationError(f"items[{index}].description", "description is required", "")
        built.append(
            BudgetItem(
                description=description,
                quantity=item.quantity,
                unit_price=item.unit_price,
            )
        )
    return built


class BudgetWorkflowUseCase:
    """
    Budget lifecycle: pending → approved | rejected | expired.

    Approval issues an immutable invoice, completes the order with a
    warranty window and takes the budget out of the active set, all in
    one transaction. Rejection completes the order as refused.
    """

    def __init__(
        self,
        budget_store: IBudgetStore | None = None,
        order_store: IOrderStore | None = None,
        notifier: INotifier | None = None,
        state_machine: ServiceOrderStateMachine | None = None,
        clock: Clock = utcnow,
        warranty_months: int | None = None,
        validity_days: int | None = None,
        technician_name: str | None = None,
    ):
        self._budget_store = budget_store
        self._order_store = order_store
        self._notifier = notifier
        self._state_machine = state_machine
        self._clock = clock
        self._warranty_months = warranty_months
        self._validity_days = validity_days
        self._technician_name = technician_name

    async def _get_budget_store(self) -> IBudgetStore:
        if self._budget_store is None:
            from repairshop.infrastructure.storage.sqlite import get_budget_store

            self._budget_store = await get_budget_store()
        return self._budget_store

    async def _get_order_store(self) -> IOrderStore:
        if self._order_store is None:
            from repairshop.infrastructure.storage.sqlite import get_order_store

            self._order_store = await get_order_store()
        return self._order_store

    def _get_notifier(self) -> INotifier:
        if self._notifier is None:
            from repairshop.application.services import get_notifier

            self._notifier = get_notifier()
        return self._notifier

    def _get_state_machine(self) -> ServiceOrderStateMachine:
        if self._state_machine is None:
            from repairshop.application.services import get_state_machine

            self._state_machine = get_state_machine()
        return self._state_machine

    @property
    def warranty_months(self) -> int:
        if self._warranty_months is None:
            self._warranty_months = get_settings().shop.default_warranty_months
        return self._warranty_months

    @property
    def validity_days(self) -> int:
        if self._validity_days is None:
            self._validity_days = get_settings().shop.budget_validity_days
        return self._validity_days

    @property
    def default_technician_name(self) -> str:
        if self._technician_name is None:
            self._technician_name = get_settings().shop.default_technician_name
        return self._technician_name

    async def _load_pending(self, budget_id: int) -> Budget:
        store = await self._get_budget_store()
        budget = await store.get_budget(budget_id)
        if budget is None:
            raise BudgetNotFoundError(budget_id)
        if not budget.is_pending:
            raise BudgetNotEditableError(budget_id, budget.status.value)
        return budget

    async def create_budget(self, request: CreateBudgetRequest) -> Budget:
        """Quote an order. Expires after the configured validity period."""
        items = build_items(request.items)
        issue_date = request.issue_date or self._clock().date()
        now = self._clock()

        budget = Budget(
            os_number=request.os_number,
            client_name=request.client_name,
            device=request.device,
            items=items,
            issue_date=issue_date,
            expiry_date=issue_date + timedelta(days=self.validity_days),
            created_at=now,
            updated_at=now,
        )
        store = await self._get_budget_store()
        budget = await store.create_budget(budget)

        logger.info(
            "budget_created",
            budget_id=budget.id,
            os_number=budget.os_number,
            total_value=budget.total_value,
        )
        return budget

    async def edit_budget_items(
        self, budget_id: int, items: Sequence[BudgetItemRequest | BudgetItem]
    ) -> Budget:
        """Replace a pending budget's items and recompute its totals."""
        budget = await self._load_pending(budget_id)
        built = build_items(items)

        # Re-validate so total_value follows the new items
        updated = Budget.model_validate(
            {**budget.model_dump(), "items": built, "updated_at": self._clock()}
        )
        store = await self._get_budget_store()
        updated = await store.update_budget(updated)

        logger.info(
            "budget_items_edited",
            budget_id=budget_id,
            items=len(built),
            total_value=updated.total_value,
        )
        return updated

    async def approve_budget(self, budget_id: int) -> ApprovalResult:
        """
        Approve a pending budget and issue its invoice.

        Raises:
            BudgetNotFoundError: unknown budget
            BudgetNotEditableError: budget is no longer pending
        """
        budget = await self._load_pending(budget_id)
        now = self._clock()
        issue_date = now.date()
        warranty_end = warranty.end_date(issue_date, self.warranty_months)

        order_store = await self._get_order_store()
        existing = await order_store.get_by_os_number(budget.os_number)
        technician = (
            existing.technician_name if existing and existing.technician_name else None
        ) or self.default_technician_name

        completion = {
            "status": OrderStatus.COMPLETED,
            "waiting_parts": None,
            "completion_date": now,
            "delivery_date": now,
            "warranty_months": self.warranty_months,
            "warranty_start_date": issue_date,
            "warranty_end_date": warranty_end,
            "payment_amount": budget.total_value,
            "technician_name": technician,
            "updated_at": now,
        }
        if existing is not None:
            order = existing.model_copy(update=completion)
        else:
            logger.warning(
                "budget_order_missing",
                budget_id=budget_id,
                os_number=budget.os_number,
            )
            order = ServiceOrder(
                os_number=budget.os_number,
                client_name=budget.client_name,
                equipment_type=budget.device,
                defect=", ".join(i.description for i in budget.items),
                entry_date=now,
                created_at=now,
                **completion,
            )

        invoice = Invoice(
            os_number=budget.os_number,
            client_name=budget.client_name,
            device=budget.device or order.device or None,
            items=tuple(InvoiceItem(**i.model_dump()) for i in budget.items),
            total_value=budget.total_value,
            issue_date=issue_date,
            warranty_end_date=warranty_end,
            technician_name=technician,
            created_at=now,
        )

        store = await self._get_budget_store()
        invoice, order = await store.finalize_approval(invoice, order, budget_id)

        logger.info(
            "budget_approved",
            budget_id=budget_id,
            invoice_id=invoice.id,
            os_number=invoice.os_number,
            total_value=invoice.total_value,
            warranty_end_date=warranty_end.isoformat(),
        )

        warnings: list[str] = []
        try:
            await self._get_notifier().invoice_issued(invoice)
        except Exception as e:
            logger.warning("invoice_notification_failed", invoice_id=invoice.id, error=str(e))
            warnings.append(f"Invoice notification failed: {e}")

        return ApprovalResult(invoice=invoice, order=order, warnings=warnings)

    async def reject_budget(self, budget_id: int) -> RejectionResult:
        """Reject a pending budget and close its order as refused."""
        budget = await self._load_pending(budget_id)
        now = self._clock()
        rejected = budget.model_copy(update={"status": BudgetStatus.REJECTED, "updated_at": now})

        order_store = await self._get_order_store()
        order = await order_store.get_by_os_number(budget.os_number)
        if order is not None:
            order = self._get_state_machine().close_without_repair(
                order, CompletionType.REFUSED
            )
        else:
            logger.warning("budget_order_missing", budget_id=budget_id, os_number=budget.os_number)

        store = await self._get_budget_store()
        budget, order = await store.finalize_rejection(rejected, order)

        logger.info("budget_rejected", budget_id=budget_id, os_number=budget.os_number)
        return RejectionResult(budget=budget, order=order)

    async def expire_budgets(self, as_of: date | None = None) -> int:
        """Mark pending budgets past their expiry date as expired."""
        as_of = as_of or self._clock().date()
        store = await self._get_budget_store()
        # Collect every page first; expiring shifts the pending result set
        pending: list[Budget] = []
        while True:
            page = await store.list_budgets(
                status=BudgetStatus.PENDING, limit=PAGE_SIZE, offset=len(pending)
            )
            pending.extend(page)
            if len(page) < PAGE_SIZE:
                break

        expired = 0
        for budget in pending:
            if budget.expiry_date is not None and budget.expiry_date < as_of:
                await store.update_budget(
                    budget.model_copy(
                        update={"status": BudgetStatus.EXPIRED, "updated_at": self._clock()}
                    )
                )
                expired += 1

        if expired:
            logger.info("budgets_expired", count=expired, as_of=as_of.isoformat())
        return expired

    async def get_budget(self, budget_id: int) -> Budget:
        store = await self._get_budget_store()
        budget = await store.get_budget(budget_id)
        if budget is None:
            raise BudgetNotFoundError(budget_id)
        return budget
