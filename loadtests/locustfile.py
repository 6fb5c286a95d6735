"""Storefront Load Testing: Locust entry point.

Discovers all user classes from the scenarios package.
Run specific scenarios with Locust's class selection.

Usage:
    # All scenarios (web UI):
    locust -f loadtests/locustfile.py

    # Browsing only:
    locust -f loadtests/locustfile.py BrowsingUser

    # Many shoppers racing for the same scarce product:
    locust -f loadtests/locustfile.py LastUnitRushUser

    # Headless (CI mode):
    locust -f loadtests/locustfile.py ShopperUser --headless \
           -u 50 -r 5 -t 300s --csv=results/loadtest
"""

import logging
import time

from locust import events

# Import all user classes so Locust discovers them
from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.storefront import BrowsingUser, LastUnitRushUser, ShopperUser  # noqa: F401

logger = logging.getLogger("loadtest")

# Rejections the storefront is expected to produce under contention
_EXPECTED_KINDS = {"insufficient_stock", "empty_cart"}


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log error details for every failed request.

    Fires globally for all scenarios, no per-task wiring needed.
    Stock rejections are normal under load and logged at info level.
    """
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 400:
        detail = extract_error_detail(response)
        level = logging.INFO if detail.split(":", 1)[0] in _EXPECTED_KINDS else logging.ERROR
        logger.log(level, "[%s] %s %s: %s", response.status_code, request_type, name, detail)


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    """Log a marker when load test begins."""
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}")
    print()


@events.test_stop.add_listener
def on_test_stop(environment, **_kwargs):
    """Print a short summary of order placement when the test ends."""
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}")
    stats = environment.stats.get("POST /api/orders", "POST")
    print(f"[LOADTEST] Orders attempted: {stats.num_requests}, failed: {stats.num_failures}")
    print()
