"""Order lookup."""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.errors import NotFound
from storefront.order.order import Order

logger = structlog.get_logger(__name__)


def get_order(order_id) -> Order:
    try:
        order = current_domain.repository_for(Order).get(str(order_id))
    except ObjectNotFoundError:
        raise NotFound("Order not found", order_id=str(order_id)) from None

    logger.info("Order fetched", order_id=str(order_id))
    return order
