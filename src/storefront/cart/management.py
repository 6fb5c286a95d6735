"""Cart management: opening a cart for a session and reading it back."""

import structlog
from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.cart.cart import MAX_SESSION_ID_LENGTH, Cart
from storefront.domain import storefront
from storefront.errors import InvalidInput
from storefront.product.stock import cart_locks

logger = structlog.get_logger(__name__)


def validate_session_id(session_id) -> str:
    if not session_id or not isinstance(session_id, str) or len(session_id) > MAX_SESSION_ID_LENGTH:
        raise InvalidInput(f"Validation error: Session ID must be 1-{MAX_SESSION_ID_LENGTH} characters")
    return session_id


@storefront.command(part_of="Cart")
class OpenCart:
    """Return the session's cart, creating an empty one on first access."""

    session_id = String(required=True, max_length=MAX_SESSION_ID_LENGTH)


@storefront.command_handler(part_of=Cart)
class OpenCartHandler:
    @handle(OpenCart)
    def open_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.find_by_session(command.session_id)
        if cart is None:
            cart = Cart.create(session_id=command.session_id)
            repo.add(cart)
            logger.info("Cart created", session_id=command.session_id, cart_id=str(cart.id))
        return str(cart.id)


def load_cart(session_id) -> Cart | None:
    return current_domain.repository_for(Cart).find_by_session(session_id)


def get_or_create_cart(session_id) -> Cart:
    validate_session_id(session_id)

    with cart_locks.hold(session_id):
        cart = load_cart(session_id)
        if cart is None:
            current_domain.process(OpenCart(session_id=session_id), asynchronous=False)
            cart = load_cart(session_id)

    logger.info("Cart fetched", session_id=session_id, item_count=len(cart.items))
    return cart
