"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderCreated:
    """An order was opened from a cart, priced and awaiting placement."""

    __version__ = 1

    order_id = Identifier(required=True)
    session_id = String(required=True)
    items = Text(required=True)  # JSON: list of {product_id, quantity, price}
    subtotal = Float(required=True)
    tax = Float(required=True)
    total = Float(required=True)


@storefront.event(part_of="Order")
class OrderPlaced:
    """Stock was committed and the cart cleared; the order is final."""

    __version__ = 1

    order_id = Identifier(required=True)
    session_id = String(required=True)
    item_count = Integer(required=True)
    total = Float(required=True)
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
