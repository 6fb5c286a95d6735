"""Order aggregate: a placed purchase and its line items.

Amounts are computed once, at creation, and each line keeps the unit price the
product had at that moment, so later catalogue price changes never alter a
past order.

State Machine:
    PENDING → PLACED → SHIPPED → DELIVERED
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.domain import storefront
from storefront.order.events import OrderCreated, OrderPlaced, OrderStatusChanged


class OrderStatus(Enum):
    PENDING = "pending"
    PLACED = "placed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"


_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PLACED},
    OrderStatus.PLACED: {OrderStatus.SHIPPED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
}


@storefront.entity(part_of="Order")
class OrderItem:
    """A purchased line: product, quantity and the unit price paid."""

    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)


@storefront.aggregate
class Order:
    session_id = String(required=True, max_length=255)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    items = HasMany(OrderItem)
    subtotal = Float(required=True, min_value=0.0)
    tax = Float(required=True, min_value=0.0)
    total = Float(required=True, min_value=0.0)
    created_at = DateTime()
    placed_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, session_id, lines, pricing):
        """Open a pending order.

        Args:
            lines: iterable of ``(product_id, quantity, unit_price)``.
            pricing: a ``PriceBreakdown`` for those lines.
        """
        now = datetime.now(UTC)
        order = cls(
            session_id=session_id,
            status=OrderStatus.PENDING.value,
            subtotal=float(pricing.subtotal),
            tax=float(pricing.tax),
            total=float(pricing.total),
            created_at=now,
            updated_at=now,
        )
        for product_id, quantity, price in lines:
            order.add_items(OrderItem(product_id=str(product_id), quantity=quantity, price=float(price)))

        order.raise_(
            OrderCreated(
                order_id=str(order.id),
                session_id=session_id,
                items=json.dumps(
                    [{"product_id": str(i.product_id), "quantity": i.quantity, "price": i.price} for i in order.items]
                ),
                subtotal=order.subtotal,
                tax=order.tax,
                total=order.total,
            )
        )
        return order

    # -------------------------------------------------------------------
    # State machine
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_state: OrderStatus) -> None:
        current = OrderStatus(self.status)
        if target_state not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_state.value}"]})

    def _transition_to(self, target_state: OrderStatus, at=None) -> None:
        self._assert_can_transition(target_state)
        previous = self.status
        self.status = target_state.value
        self.updated_at = at or datetime.now(UTC)

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=self.status,
            )
        )

    def place(self):
        now = datetime.now(UTC)
        self._transition_to(OrderStatus.PLACED, at=now)
        self.placed_at = now

        self.raise_(
            OrderPlaced(
                order_id=str(self.id),
                session_id=self.session_id,
                item_count=sum(item.quantity for item in self.items),
                total=self.total,
                placed_at=now,
            )
        )

    def mark_shipped(self):
        self._transition_to(OrderStatus.SHIPPED)

    def mark_delivered(self):
        self._transition_to(OrderStatus.DELIVERED)
