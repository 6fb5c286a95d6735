"""Faker-based data generators for Locust load test scenarios.

Payloads match the field names and bounds of the storefront API's request
schemas (quantity 1-100, session id up to 255 characters).
"""

import random

from faker import Faker

fake = Faker()

CATEGORIES = ["solar-panels", "inverters", "batteries", "accessories"]

SEARCH_TERMS = ["panel", "inverter", "battery", "solar", "charge", "monitor", "kWh", "hybrid"]


def session_id() -> str:
    """Generate an opaque shopper session like 'sess-lt-1f0c...'."""
    return f"sess-lt-{fake.uuid4()}"


def listing_params() -> dict:
    """Random catalogue query mixing search, category and price filters."""
    params = {"page": random.randint(1, 2), "limit": random.choice([6, 12, 24])}
    if random.random() < 0.4:
        params["search"] = random.choice(SEARCH_TERMS)
    if random.random() < 0.4:
        params["category"] = random.choice(CATEGORIES)
    if random.random() < 0.2:
        low = random.choice([0, 100, 500])
        params["minPrice"] = low
        params["maxPrice"] = low + random.choice([200, 1000, 5000])
    return params


def cart_item_data(product_id: str, max_quantity: int = 3) -> dict:
    return {"productId": product_id, "quantity": random.randint(1, max_quantity)}


def order_data(session: str) -> dict:
    return {"sessionId": session}
