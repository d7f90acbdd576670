from decimal import Decimal
from types import SimpleNamespace

from tshirtshop.services.pricing import price_cart, price_line, round_money, to_minor_units


def _product(pid=1, price="100.00", discounted="0.00", name="Shirt"):
    return SimpleNamespace(product_id=pid, name=name, price=Decimal(price), discounted_price=Decimal(discounted))


class TestPriceLine:
    def test_discounted_price_wins_when_positive(self):
        line = price_line(_product(price="100", discounted="80"), 2)
        assert line.unit_cost == Decimal("80")
        assert line.line_subtotal == Decimal("160")

    def test_zero_discount_falls_back_to_list_price(self):
        line = price_line(_product(price="100", discounted="0"), 1)
        assert line.unit_cost == Decimal("100")

    def test_missing_discount_falls_back_to_list_price(self):
        product = SimpleNamespace(product_id=1, name="x", price=Decimal("12.50"), discounted_price=None)
        assert price_line(product, 3).line_subtotal == Decimal("37.50")


class TestPriceCart:
    def test_total_is_exact_sum_of_lines(self):
        items = [
            SimpleNamespace(product=_product(1, "100", "80"), quantity=2, attributes="L, Red"),
            SimpleNamespace(product=_product(2, "50", "0"), quantity=1, attributes=""),
        ]
        priced = price_cart(items)
        assert priced.total_amount == Decimal("210.00")
        assert [line.attributes for line in priced.lines] == ["L, Red", ""]
        assert sum(line.unit_cost * line.quantity for line in priced.lines) == priced.total_amount

    def test_empty_cart_totals_zero(self):
        assert price_cart([]).total_amount == Decimal("0")


def test_minor_units_round_half_up():
    assert to_minor_units(Decimal("210.00")) == 21000
    assert to_minor_units(Decimal("16.955")) == 1696
    assert to_minor_units("0.1") == 10


def test_round_money():
    assert round_money(Decimal("33.905")) == Decimal("33.91")
