"""Checkout settings.

Read from the environment once, at the application boundary, and handed to
the cart summary and order placement explicitly.
"""

import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation


def _decimal_from_env(environ, key: str, default: str) -> Decimal:
    raw = environ.get(key, default)
    try:
        value = Decimal(raw)
    except InvalidOperation:
        raise ValueError(f"{key} must be a decimal number, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{key} must not be negative, got {raw!r}")
    return value


@dataclass(frozen=True)
class CheckoutSettings:
    tax_rate: Decimal = Decimal("0.08")
    free_shipping_threshold: Decimal = Decimal("500.00")
    shipping_fee: Decimal = Decimal("25.00")
    max_attempts: int = 3
    retry_backoff: float = 0.05

    @classmethod
    def from_env(cls, environ=None) -> "CheckoutSettings":
        environ = os.environ if environ is None else environ
        return cls(
            tax_rate=_decimal_from_env(environ, "TAX_RATE", "0.08"),
            free_shipping_threshold=_decimal_from_env(environ, "FREE_SHIPPING_THRESHOLD", "500.00"),
            shipping_fee=_decimal_from_env(environ, "SHIPPING_FEE", "25.00"),
            max_attempts=max(1, int(environ.get("CHECKOUT_MAX_ATTEMPTS", "3"))),
            retry_backoff=float(environ.get("CHECKOUT_RETRY_BACKOFF", "0.05")),
        )


def cors_origins(environ=None) -> list[str]:
    environ = os.environ if environ is None else environ
    raw = environ.get("CORS_ORIGINS", "http://localhost:3000")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
