"""Cart totals for display.

The shipping surcharge shown here is not part of any persisted order: an
order's total is subtotal plus tax (see ``storefront.order.placement``).
"""

from dataclasses import dataclass
from decimal import Decimal

from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.config import CheckoutSettings
from storefront.pricing import price_lines, round_money, shipping_for, to_decimal
from storefront.product.product import Product


@dataclass(frozen=True)
class CartLine:
    item_id: str
    product: Product
    quantity: int

    @property
    def line_total(self) -> Decimal:
        return round_money(to_decimal(self.product.price) * self.quantity)


@dataclass(frozen=True)
class CartSummary:
    subtotal: Decimal
    tax: Decimal
    shipping: Decimal
    total: Decimal
    item_count: int


def cart_lines(cart: Cart) -> list[CartLine]:
    """Pair each cart line with its product, in the order lines were added."""
    repo = current_domain.repository_for(Product)
    items = sorted(cart.items, key=lambda i: i.added_at.timestamp() if i.added_at else 0.0)
    return [CartLine(item_id=str(item.id), product=repo.get(item.product_id), quantity=item.quantity) for item in items]


def summarize(lines: list[CartLine], settings: CheckoutSettings) -> CartSummary:
    pricing = price_lines(((line.product.price, line.quantity) for line in lines), settings.tax_rate)
    shipping = shipping_for(pricing.subtotal, settings.free_shipping_threshold, settings.shipping_fee)
    return CartSummary(
        subtotal=pricing.subtotal,
        tax=pricing.tax,
        shipping=shipping,
        total=pricing.total + shipping,
        item_count=sum(line.quantity for line in lines),
    )
