"""Cart line management: commands, handler and the session-level operations.

Every operation serializes on the session's cart lock, runs one command and
returns the refreshed cart.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.cart.cart import MAX_SESSION_ID_LENGTH, Cart
from storefront.cart.management import load_cart, validate_session_id
from storefront.domain import storefront
from storefront.errors import InsufficientStock, InvalidInput, NotFound
from storefront.product.catalog import get_product
from storefront.product.stock import cart_locks, try_reserve

logger = structlog.get_logger(__name__)

MAX_LINE_QUANTITY = 100


@storefront.command(part_of="Cart")
class AddToCart:
    session_id = String(required=True, max_length=MAX_SESSION_ID_LENGTH)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1, max_value=MAX_LINE_QUANTITY)


@storefront.command(part_of="Cart")
class UpdateCartItemQuantity:
    session_id = String(required=True, max_length=MAX_SESSION_ID_LENGTH)
    item_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=0, max_value=MAX_LINE_QUANTITY)


@storefront.command(part_of="Cart")
class RemoveCartItem:
    session_id = String(required=True, max_length=MAX_SESSION_ID_LENGTH)
    item_id = Identifier(required=True)


def _insufficient(product_id, requested):
    product = get_product(product_id)
    return InsufficientStock(
        product_id=str(product.id),
        product_name=product.name,
        requested=requested,
        available=product.stock,
    )


def _existing_cart(session_id) -> Cart:
    cart = current_domain.repository_for(Cart).find_by_session(session_id)
    if cart is None:
        raise NotFound("Cart not found", session_id=session_id)
    return cart


@storefront.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.find_by_session(command.session_id)
        if cart is None:
            cart = Cart.create(session_id=command.session_id)

        requested = cart.quantity_of(command.product_id) + command.quantity
        if not try_reserve(command.product_id, requested):
            raise _insufficient(command.product_id, requested)

        item = cart.add_item(product_id=command.product_id, quantity=command.quantity)
        repo.add(cart)
        return str(item.id)

    @handle(UpdateCartItemQuantity)
    def update_cart_item_quantity(self, command):
        repo = current_domain.repository_for(Cart)
        cart = _existing_cart(command.session_id)
        item = cart.item(command.item_id)

        if command.quantity > 0 and not try_reserve(item.product_id, command.quantity):
            raise _insufficient(item.product_id, command.quantity)

        cart.update_item_quantity(item_id=command.item_id, new_quantity=command.quantity)
        repo.add(cart)

    @handle(RemoveCartItem)
    def remove_cart_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = _existing_cart(command.session_id)
        cart.remove_item(item_id=command.item_id)
        repo.add(cart)


def _check_quantity(quantity, minimum):
    if isinstance(quantity, bool) or not isinstance(quantity, int) or not minimum <= quantity <= MAX_LINE_QUANTITY:
        raise InvalidInput(f"Validation error: Quantity must be between {minimum} and {MAX_LINE_QUANTITY}")


def add_item(session_id, product_id, quantity) -> Cart:
    validate_session_id(session_id)
    _check_quantity(quantity, 1)

    with cart_locks.hold(session_id):
        current_domain.process(
            AddToCart(session_id=session_id, product_id=str(product_id), quantity=quantity),
            asynchronous=False,
        )
        cart = load_cart(session_id)

    logger.info("Item added to cart", session_id=session_id, product_id=str(product_id), quantity=quantity)
    return cart


def update_item_quantity(session_id, item_id, quantity) -> Cart:
    validate_session_id(session_id)
    _check_quantity(quantity, 0)

    with cart_locks.hold(session_id):
        current_domain.process(
            UpdateCartItemQuantity(session_id=session_id, item_id=str(item_id), quantity=quantity),
            asynchronous=False,
        )
        cart = load_cart(session_id)

    if quantity == 0:
        logger.info("Item removed from cart", session_id=session_id, item_id=str(item_id))
    else:
        logger.info("Cart item updated", session_id=session_id, item_id=str(item_id), quantity=quantity)
    return cart


def remove_item(session_id, item_id) -> Cart:
    validate_session_id(session_id)

    with cart_locks.hold(session_id):
        current_domain.process(
            RemoveCartItem(session_id=session_id, item_id=str(item_id)),
            asynchronous=False,
        )
        cart = load_cart(session_id)

    logger.info("Item removed from cart", session_id=session_id, item_id=str(item_id))
    return cart
