"""
Stock aggregation.

Folds a part's ledger movements into its current on-hand view. Pure:
callers load the movements, this module only computes.
"""

from collections import defaultdict
from collections.abc import Iterable, Mapping

from repairshop.core.entities.stock import AggregatedStock, StockMovement


def _recency_key(movement: StockMovement) -> tuple:
    # Unsaved movements (id None) sort before stored ones on the same date
    return (movement.occurred_at, movement.id if movement.id is not None else -1)


def aggregate_movements(
    part_id: str,
    movements: Iterable[StockMovement],
    part_name: str | None = None,
) -> AggregatedStock:
    """
    Aggregate one part's movements.

    total_quantity is the signed sum. last_unit_price and last_movement_at
    come from the movement with the latest occurred_at; ties go to the
    highest insertion order (id).
    """
    own = [m for m in movements if m.part_id == part_id]
    if not own:
        return AggregatedStock(part_id=part_id, part_name=part_name or part_id)

    latest = max(own, key=_recency_key)
    return AggregatedStock(
        part_id=part_id,
        part_name=part_name or part_id,
        total_quantity=sum(m.quantity for m in own),
        last_unit_price=latest.unit_price,
        last_movement_at=latest.occurred_at,
        movement_count=len(own),
    )


def aggregate_by_part(
    movements: Iterable[StockMovement],
    names: Mapping[str, str] | None = None,
) -> list[AggregatedStock]:
    """
    Aggregate every part that appears in the ledger.

    Only parts with a positive total are returned, ordered by display
    name (case-insensitive), falling back to part id.
    """
    names = names or {}
    grouped: dict[str, list[StockMovement]] = defaultdict(list)
    for movement in movements:
        grouped[movement.part_id].append(movement)

    aggregates = [
        aggregate_movements(part_id, part_movements, names.get(part_id))
        for part_id, part_movements in grouped.items()
    ]
    in_stock = [a for a in aggregates if a.in_stock]
    in_stock.sort(key=lambda a: (a.part_name.casefold(), a.part_id))
    return in_stock
