"""Order placement: turning a session's cart into a placed order.

The handler runs inside the unit of work protean opens for every command:
either the order, its items, the stock decrements and the emptied cart are all
committed, or none of them is.

``place_order`` wraps the command with the locking and retry policy:

1. take the session's cart lock, so the cart cannot change underneath us;
2. take the stock lock of every product in the cart (sorted order);
3. run the unit of work, retrying it from scratch on a storage conflict;
4. reload the committed order.
"""

import structlog
from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain
from sqlalchemy.exc import SQLAlchemyError

from storefront.cart.cart import Cart
from storefront.cart.management import load_cart, validate_session_id
from storefront.config import CheckoutSettings
from storefront.domain import storefront
from storefront.errors import EmptyCart, InsufficientStock, StorageFailure
from storefront.order.order import Order
from storefront.order.retrieval import get_order
from storefront.pricing import price_lines
from storefront.product.product import Product
from storefront.product.stock import cart_locks, product_locks, try_reserve
from storefront.utils.retry import retry_on_conflict

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    session_id = String(required=True, max_length=255)
    tax_rate = String(required=True, max_length=20)  # Decimal as text, e.g. "0.08"


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart_repo = current_domain.repository_for(Cart)
        product_repo = current_domain.repository_for(Product)
        order_repo = current_domain.repository_for(Order)

        cart = cart_repo.find_by_session(command.session_id)
        if cart is None or not cart.items:
            raise EmptyCart(command.session_id)

        # Validate every line before writing anything
        lines = []
        for item in cart.items:
            reserved = try_reserve(item.product_id, item.quantity)
            product = product_repo.get(item.product_id)
            if not reserved:
                logger.warning(
                    "Insufficient stock at checkout",
                    session_id=command.session_id,
                    product_id=str(product.id),
                    requested=item.quantity,
                    available=product.stock,
                )
                raise InsufficientStock(
                    product_id=str(product.id),
                    product_name=product.name,
                    requested=item.quantity,
                    available=product.stock,
                )
            lines.append((product, item.quantity))

        pricing = price_lines(((product.price, quantity) for product, quantity in lines), command.tax_rate)
        order = Order.create(
            session_id=command.session_id,
            lines=[(product.id, quantity, product.price) for product, quantity in lines],
            pricing=pricing,
        )

        for product, quantity in lines:
            product.decrement_stock(quantity, order_id=order.id)
            product_repo.add(product)

        cart.clear()
        cart_repo.add(cart)

        order.place()
        order_repo.add(order)

        return str(order.id)


def place_order(session_id, settings: CheckoutSettings) -> Order:
    """Place an order for everything in the session's cart.

    Raises:
        EmptyCart: the session has no cart, or an empty one.
        InsufficientStock: a line asks for more than the product has.
        NotFound: a cart line refers to a product that no longer exists.
        StorageFailure: the storage layer failed; nothing was written.
    """
    validate_session_id(session_id)

    @retry_on_conflict(max_attempts=settings.max_attempts, backoff=settings.retry_backoff)
    def _place():
        return current_domain.process(
            PlaceOrder(session_id=session_id, tax_rate=str(settings.tax_rate)),
            asynchronous=False,
        )

    with cart_locks.hold(session_id):
        cart = load_cart(session_id)
        product_ids = [str(item.product_id) for item in cart.items] if cart else []

        with product_locks.hold(*product_ids):
            try:
                order_id = _place()
            except SQLAlchemyError as exc:
                logger.error("Order placement failed in storage", session_id=session_id, error=str(exc))
                raise StorageFailure("Order could not be placed, please try again") from exc

    order = get_order(order_id)
    logger.info(
        "Order created",
        order_id=order_id,
        session_id=session_id,
        total=order.total,
        item_count=len(order.items),
    )
    return order
