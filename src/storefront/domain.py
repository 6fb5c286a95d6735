"""Storefront bounded context: catalogue, shopping cart and order placement.

Products, session carts and orders live in a single domain so that order
placement can create the order, decrement stock and clear the cart inside one
unit of work.
"""

import logging

from protean.domain import Domain

from storefront.utils.logging import configure_logging

# Configure logging for the application
configure_logging()

# Suppress noisy library loggers
logging.getLogger("protean").setLevel(logging.WARNING)

# Domain Composition Root
storefront = Domain(name="storefront")
