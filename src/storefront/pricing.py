"""Money arithmetic for carts and orders.

Amounts are stored as floats; all arithmetic happens on ``Decimal`` and every
figure that leaves this module is rounded half-up to cents.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value) -> Decimal:
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class PriceBreakdown:
    subtotal: Decimal
    tax: Decimal
    total: Decimal


def price_lines(lines: Iterable[tuple], tax_rate) -> PriceBreakdown:
    """Price ``(unit_price, quantity)`` pairs.

    Tax is computed on the rounded subtotal and the total is the sum of the
    two rounded figures, so ``subtotal + tax == total`` always holds.
    """
    subtotal = round_money(sum((to_decimal(price) * quantity for price, quantity in lines), Decimal("0")))
    tax = round_money(subtotal * to_decimal(tax_rate))
    return PriceBreakdown(subtotal=subtotal, tax=tax, total=subtotal + tax)


def shipping_for(subtotal, free_shipping_threshold, shipping_fee) -> Decimal:
    """Display-only shipping surcharge: free at or above the threshold, flat fee otherwise.

    An empty cart ships nothing and costs nothing.
    """
    subtotal = to_decimal(subtotal)
    if subtotal == 0 or subtotal >= to_decimal(free_shipping_threshold):
        return round_money(0)
    return round_money(shipping_fee)
