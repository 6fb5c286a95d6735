"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state, no cross-user sharing.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """Tracks one simulated shopper: their session, cart lines and orders."""

    session_id: str
    product_ids: list[str] = field(default_factory=list)
    item_ids: list[str] = field(default_factory=list)
    order_ids: list[str] = field(default_factory=list)
