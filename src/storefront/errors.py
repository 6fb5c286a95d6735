"""Storefront error taxonomy.

Every error carries a stable machine-readable ``kind`` and a human-readable
message. The HTTP layer maps kinds to status codes; nothing below it knows
about HTTP beyond the ``status_code`` hint carried here.
"""


class StorefrontError(Exception):
    kind = "storefront_error"
    status_code = 500

    def __init__(self, message: str, **context):
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message}


class NotFound(StorefrontError):
    """A product, cart, cart item or order does not exist."""

    kind = "not_found"
    status_code = 404


class InsufficientStock(StorefrontError):
    """Requested quantity exceeds the stock available for a product."""

    kind = "insufficient_stock"
    status_code = 400

    def __init__(self, product_id: str, product_name: str, requested: int, available: int):
        super().__init__(
            f"Insufficient stock for {product_name}: requested {requested}, available {available}",
            product_id=product_id,
            requested=requested,
            available=available,
        )
        self.product_id = product_id
        self.product_name = product_name
        self.requested = requested
        self.available = available


class EmptyCart(StorefrontError):
    kind = "empty_cart"
    status_code = 400

    def __init__(self, session_id: str):
        super().__init__("Cart is empty", session_id=session_id)
        self.session_id = session_id


class InvalidInput(StorefrontError):
    """Malformed input rejected at the boundary."""

    kind = "validation_error"
    status_code = 400


class StorageFailure(StorefrontError):
    """The storage layer failed; the surrounding transaction was rolled back."""

    kind = "storage_failure"
    status_code = 500
