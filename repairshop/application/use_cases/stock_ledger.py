"""Stock Ledger Use Case - record, correct and aggregate stock movements."""

from datetime import date

from repairshop.application.dto.requests import (
    AdjustStockRequest,
    EditMovementRequest,
    RecordMovementRequest,
)
from repairshop.config import get_logger
from repairshop.core.clock import today
from repairshop.core.entities.stock import AggregatedStock, StockMovement
from repairshop.core.exceptions import InvalidAdjustmentError, MovementNotFoundError
from repairshop.core.interfaces.stock_store import IPartCatalog, IStockStore
from repairshop.core.services.stock_aggregator import (
    aggregate_by_part,
    aggregate_movements,
)

logger = get_logger(__name__)

MANUAL_ADJUSTMENT_REASON = "Ajuste manual de estoque"
FULL_REMOVAL_REASON = "Remoção completa do estoque"


class StockLedgerUseCase:
    """
    Append-only stock ledger with on-read aggregation.

    Nothing is cached: every aggregate is folded again from the full set
    of the part's movements.
    """

    def __init__(
        self,
        stock_store: IStockStore | None = None,
        part_catalog: IPartCatalog | None = None,
    ):
        self._stock_store = stock_store
        self._part_catalog = part_catalog

    async def _get_stock_store(self) -> IStockStore:
        if self._stock_store is None:
            from repairshop.infrastructure.storage.sqlite import get_stock_store

            self._stock_store = await get_stock_store()
        return self._stock_store

    async def _get_part_catalog(self) -> IPartCatalog:
        if self._part_catalog is None:
            from repairshop.infrastructure.storage.sqlite import get_part_catalog

            self._part_catalog = await get_part_catalog()
        return self._part_catalog

    async def record_movement(self, request: RecordMovementRequest) -> StockMovement:
        """Append a movement. Outbound movements may drive the total negative."""
        store = await self._get_stock_store()
        movement = StockMovement(
            part_id=request.part_id,
            quantity=request.quantity,
            unit_price=request.unit_price,
            occurred_at=request.occurred_at or today(),
            description=request.description,
        )
        movement = await store.add_movement(movement)

        logger.info(
            "stock_movement_recorded",
            movement_id=movement.id,
            part_id=movement.part_id,
            quantity=movement.quantity,
        )
        return movement

    async def edit_movement(
        self, movement_id: int, request: EditMovementRequest
    ) -> StockMovement:
        """Correct a movement in place; the ledger keeps no history of edits."""
        store = await self._get_stock_store()
        existing = await store.get_movement(movement_id)
        if existing is None:
            raise MovementNotFoundError(movement_id)

        updated = existing.model_copy(
            update={
                "quantity": request.quantity,
                "unit_price": request.unit_price,
                "occurred_at": request.occurred_at,
                "description": request.description,
            }
        )
        updated = await store.update_movement(updated)

        logger.info(
            "stock_movement_edited",
            movement_id=movement_id,
            part_id=updated.part_id,
            old_quantity=existing.quantity,
            new_quantity=updated.quantity,
        )
        return updated

    async def adjust_aggregate(
        self,
        part_id: str,
        target_total_quantity: int,
        unit_price: float | None = None,
        occurred_at: date | None = None,
        reason: str | None = None,
    ) -> StockMovement | None:
        """
        Record the movement that brings the part's total to the target.

        Returns None without writing when the total already matches.

        Raises:
            InvalidAdjustmentError: target below zero (nothing is written)
        """
        if target_total_quantity < 0:
            raise InvalidAdjustmentError(part_id, target_total_quantity)

        current = await self.aggregate(part_id)
        delta = target_total_quantity - current.total_quantity
        if delta == 0:
            logger.debug("stock_adjustment_skipped", part_id=part_id)
            return None

        store = await self._get_stock_store()
        movement = StockMovement(
            part_id=part_id,
            quantity=delta,
            unit_price=unit_price,
            occurred_at=occurred_at or today(),
            is_adjustment=True,
            adjustment_reason=reason or MANUAL_ADJUSTMENT_REASON,
        )
        movement = await store.add_movement(movement)

        logger.info(
            "stock_adjusted",
            part_id=part_id,
            previous=current.total_quantity,
            target=target_total_quantity,
            delta=delta,
        )
        return movement

    async def adjust(self, part_id: str, request: AdjustStockRequest) -> StockMovement | None:
        return await self.adjust_aggregate(
            part_id,
            request.target_quantity,
            unit_price=request.unit_price,
            occurred_at=request.occurred_at,
            reason=request.reason,
        )

    async def delete_movement(self, movement_id: int) -> None:
        """Permanently remove a movement. Totals may go negative."""
        store = await self._get_stock_store()
        if not await store.delete_movement(movement_id):
            raise MovementNotFoundError(movement_id)
        logger.info("stock_movement_deleted", movement_id=movement_id)

    async def remove_all_stock(
        self, part_id: str, occurred_at: date | None = None
    ) -> StockMovement | None:
        """Zero the part's stock at its last known price."""
        current = await self.aggregate(part_id)
        return await self.adjust_aggregate(
            part_id,
            0,
            unit_price=current.last_unit_price,
            occurred_at=occurred_at,
            reason=FULL_REMOVAL_REASON,
        )

    async def aggregate(self, part_id: str) -> AggregatedStock:
        """Current on-hand view of one part (zero if it has no movements)."""
        store = await self._get_stock_store()
        movements = await store.list_by_part(part_id)
        name = await self._part_name(part_id)
        return aggregate_movements(part_id, movements, name)

    async def aggregate_all(self) -> list[AggregatedStock]:
        """Every part with a positive total, ordered by name."""
        store = await self._get_stock_store()
        catalog = await self._get_part_catalog()
        movements = await store.list_all()
        names = {p.id: p.name for p in await catalog.list_parts()}
        return aggregate_by_part(movements, names)

    async def list_movements(self, part_id: str) -> list[StockMovement]:
        """Movement history of a part, newest first."""
        store = await self._get_stock_store()
        return await store.list_by_part(part_id)

    async def _part_name(self, part_id: str) -> str | None:
        catalog = await self._get_part_catalog()
        part = await catalog.get_part(part_id)
        return part.name if part else None
