"""Tests for stock aggregation."""

from datetime import date

from repairshop.core.entities.stock import StockMovement
from repairshop.core.services.stock_aggregator import aggregate_by_part, aggregate_movements


def _movement(id, part_id="TCON-55", quantity=1, price=None, day=date(2025, 1, 1)):
    return StockMovement(
        id=id, part_id=part_id, quantity=quantity, unit_price=price, occurred_at=day
    )


class TestAggregateMovements:
    def test_signed_sum_and_latest_price(self):
        movements = [
            _movement(1, quantity=10, price=5.0, day=date(2025, 1, 1)),
            _movement(2, quantity=-3, day=date(2025, 1, 5)),
            _movement(3, quantity=2, price=7.0, day=date(2025, 1, 5)),
        ]
        stock = aggregate_movements("TCON-55", movements, "Placa T-CON")

        assert stock.total_quantity == 9
        assert stock.last_unit_price == 7.0
        assert stock.last_movement_at == date(2025, 1, 5)
        assert stock.movement_count == 3
        assert stock.part_name == "Placa T-CON"

    def test_same_day_tie_goes_to_highest_id(self):
        later = _movement(4, quantity=1, price=9.0)
        earlier = _movement(2, quantity=1, price=3.0)

        assert aggregate_movements("TCON-55", [later, earlier]).last_unit_price == 9.0
        assert aggregate_movements("TCON-55", [earlier, later]).last_unit_price == 9.0

    def test_latest_date_wins_over_insertion_order(self):
        backdated = _movement(10, quantity=1, price=1.0, day=date(2024, 12, 1))
        current = _movement(5, quantity=1, price=2.0, day=date(2025, 2, 1))

        stock = aggregate_movements("TCON-55", [backdated, current])
        assert stock.last_unit_price == 2.0
        assert stock.last_movement_at == date(2025, 2, 1)

    def test_latest_movement_without_price(self):
        movements = [
            _movement(1, quantity=5, price=10.0, day=date(2025, 1, 1)),
            _movement(2, quantity=-1, day=date(2025, 1, 2)),
        ]
        assert aggregate_movements("TCON-55", movements).last_unit_price is None

    def test_other_parts_ignored(self):
        movements = [_movement(1, quantity=5), _movement(2, part_id="OTHER", quantity=50)]
        assert aggregate_movements("TCON-55", movements).total_quantity == 5

    def test_no_movements(self):
        stock = aggregate_movements("TCON-55", [])
        assert stock.total_quantity == 0
        assert stock.part_name == "TCON-55"
        assert stock.last_unit_price is None
        assert stock.last_movement_at is None
        assert stock.movement_count == 0

    def test_total_may_be_negative(self):
        stock = aggregate_movements("TCON-55", [_movement(1, quantity=-4)])
        assert stock.total_quantity == -4
        assert not stock.in_stock


class TestAggregateByPart:
    def test_only_positive_totals_sorted_by_name(self):
        movements = [
            _movement(1, part_id="P1", quantity=2),
            _movement(2, part_id="P2", quantity=3),
            _movement(3, part_id="P3", quantity=1),
            _movement(4, part_id="P3", quantity=-1),
            _movement(5, part_id="P4", quantity=-2),
        ]
        names = {"P1": "placa principal", "P2": "Barra LED", "P3": "Fonte"}

        result = aggregate_by_part(movements, names)

        assert [a.part_id for a in result] == ["P2", "P1"]

    def test_unnamed_parts_sort_by_id(self):
        movements = [
            _movement(1, part_id="B", quantity=1),
            _movement(2, part_id="A", quantity=1),
        ]
        assert [a.part_name for a in aggregate_by_part(movements)] == ["A", "B"]

    def test_empty_ledger(self):
        assert aggregate_by_part([]) == []
