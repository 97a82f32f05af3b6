"""
Core business logic services.

Layer-pure services that depend only on:
- repairshop/core/entities/*
- repairshop/core/exceptions.py

NO infrastructure imports. No I/O.
"""

from repairshop.core.services import warranty
from repairshop.core.services.order_state_machine import ServiceOrderStateMachine
from repairshop.core.services.stock_aggregator import (
    aggregate_by_part,
    aggregate_movements,
)

__all__ = [
    # Stock
    "aggregate_movements",
    "aggregate_by_part",
    # Orders
    "ServiceOrderStateMachine",
    # Warranty
    "warranty",
]
