"""Unit cost and order total calculation.

Every total in the shop (cart display and order creation) goes through
:func:`price_line`, so the discount precedence lives in exactly one place.
"""

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable, List

CENT = Decimal("0.01")


def to_decimal(value: Any) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value: Decimal) -> Decimal:
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def to_minor_units(amount: Any) -> int:
    """Convert a money amount into integer cents."""
    return int((to_decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class PricedLine:
    product_id: int
    product_name: str
    attributes: str
    quantity: int
    unit_cost: Decimal
    line_subtotal: Decimal


@dataclass(frozen=True)
class PricedCart:
    lines: List[PricedLine] = field(default_factory=list)
    total_amount: Decimal = Decimal("0")


def unit_cost_for(product: Any) -> Decimal:
    discounted = to_decimal(getattr(product, "discounted_price", None))
    if discounted > 0:
        return discounted
    return to_decimal(getattr(product, "price", None))


def price_line(product: Any, quantity: int, attributes: str = "") -> PricedLine:
    unit_cost = unit_cost_for(product)
    return PricedLine(
        product_id=product.product_id,
        product_name=product.name,
        attributes=attributes or "",
        quantity=int(quantity),
        unit_cost=unit_cost,
        line_subtotal=unit_cost * int(quantity),
    )


def price_cart(cart_items: Iterable[Any]) -> PricedCart:
    """Price cart rows (anything with ``product``, ``quantity`` and ``attributes``)."""
    lines = [price_line(it.product, it.quantity, it.attributes) for it in cart_items]
    total = sum((line.line_subtotal for line in lines), Decimal("0"))
    return PricedCart(lines=lines, total_amount=total)
