"""Tests for stock domain entities."""

from datetime import date

from repairshop.core.entities.stock import AggregatedStock, Part, StockMovement


class TestStockMovement:
    def test_inbound_and_outbound(self):
        assert StockMovement(part_id="TCON-55", quantity=5).is_inbound is True
        assert StockMovement(part_id="TCON-55", quantity=-2).is_inbound is False

    def test_defaults(self):
        movement = StockMovement(part_id="TCON-55", quantity=1)
        assert movement.id is None
        assert movement.is_adjustment is False
        assert movement.adjustment_reason is None
        assert isinstance(movement.occurred_at, date)
        assert movement.created_at.tzinfo is not None


class TestAggregatedStock:
    def test_in_stock_only_when_positive(self):
        assert AggregatedStock(part_id="A", part_name="A", total_quantity=1).in_stock
        assert not AggregatedStock(part_id="A", part_name="A", total_quantity=0).in_stock
        assert not AggregatedStock(part_id="A", part_name="A", total_quantity=-3).in_stock

    def test_total_value_uses_last_price(self):
        stock = AggregatedStock(
            part_id="A", part_name="A", total_quantity=3, last_unit_price=12.5
        )
        assert stock.total_value == 37.5

    def test_total_value_zero_without_price_or_stock(self):
        assert AggregatedStock(part_id="A", part_name="A", total_quantity=3).total_value == 0.0
        negative = AggregatedStock(
            part_id="A", part_name="A", total_quantity=-1, last_unit_price=10.0
        )
        assert negative.total_value == 0.0


def test_part_optional_fields():
    part = Part(id="TCON-55", name="Placa T-CON")
    assert part.part_type is None
    assert part.serial_number is None
