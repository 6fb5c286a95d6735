"""Storefront load test scenarios.

BrowsingUser pages through the catalogue. ShopperUser runs the full journey
from browsing to a placed order. LastUnitRushUser sends many shoppers after
the same product so concurrent checkouts compete for its stock.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, constant_pacing, task

from loadtests.data_generators import cart_item_data, listing_params, order_data, session_id
from loadtests.helpers.response import error_kind, extract_error_detail
from loadtests.helpers.state import ShopperState


def _catalogue_ids(client) -> list[str]:
    with client.get("/api/products", params={"limit": 100}, catch_response=True, name="GET /api/products") as resp:
        if resp.status_code != 200:
            resp.failure(f"List products failed: {resp.status_code}: {extract_error_detail(resp)}")
            return []
        return [p["id"] for p in resp.json()["data"]]


class BrowsingUser(HttpUser):
    """Read-only traffic: filtered listings and product pages."""

    wait_time = between(0.5, 2)

    def on_start(self):
        self.product_ids = _catalogue_ids(self.client)

    @task(5)
    def list_products(self):
        self.client.get("/api/products", params=listing_params(), name="GET /api/products")

    @task(2)
    def view_product(self):
        if not self.product_ids:
            return
        self.client.get(f"/api/products/{random.choice(self.product_ids)}", name="GET /api/products/{id}")


class CheckoutJourney(SequentialTaskSet):
    """Open Cart -> Add Items -> Adjust Quantity -> Place Order -> View Order."""

    def on_start(self):
        self.state = ShopperState(session_id=session_id())
        self.state.product_ids = _catalogue_ids(self.client)
        if not self.state.product_ids:
            self.interrupt()

    @task
    def open_cart(self):
        self.client.get(f"/api/cart/{self.state.session_id}", name="GET /api/cart/{session}")

    @task
    def add_items(self):
        for product_id in random.sample(self.state.product_ids, k=min(2, len(self.state.product_ids))):
            with self.client.post(
                f"/api/cart/{self.state.session_id}",
                json=cart_item_data(product_id),
                catch_response=True,
                name="POST /api/cart/{session}",
            ) as resp:
                if resp.status_code == 200:
                    self.state.item_ids = [i["id"] for i in resp.json()["data"]["items"]]
                elif error_kind(resp) == "insufficient_stock":
                    resp.success()
                else:
                    resp.failure(f"Add to cart failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def adjust_quantity(self):
        if not self.state.item_ids:
            return
        item_id = self.state.item_ids[0]
        with self.client.put(
            f"/api/cart/{self.state.session_id}/items/{item_id}",
            json={"quantity": 1},
            catch_response=True,
            name="PUT /api/cart/{session}/items/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Update item failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def place_order(self):
        with self.client.post(
            "/api/orders",
            json=order_data(self.state.session_id),
            catch_response=True,
            name="POST /api/orders",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_ids.append(resp.json()["data"]["id"])
            elif error_kind(resp) in ("insufficient_stock", "empty_cart"):
                resp.success()
            else:
                resp.failure(f"Place order failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def view_order(self):
        for order_id in self.state.order_ids[-1:]:
            self.client.get(f"/api/orders/{order_id}", name="GET /api/orders/{id}")
        self.interrupt()


class ShopperUser(HttpUser):
    wait_time = between(1, 3)
    tasks = [CheckoutJourney]


class LastUnitRushUser(HttpUser):
    """Every user buys one unit of the same product as fast as possible.

    Watch for: orders placed never exceed the product's starting stock, and
    every other checkout is answered with ``insufficient_stock``.
    """

    wait_time = constant_pacing(0.2)

    def on_start(self):
        ids = _catalogue_ids(self.client)
        self.product_id = ids[0] if ids else None

    @task
    def rush(self):
        if self.product_id is None:
            return
        session = session_id()
        with self.client.post(
            f"/api/cart/{session}",
            json={"productId": self.product_id, "quantity": 1},
            catch_response=True,
            name="POST /api/cart/{session}",
        ) as resp:
            if resp.status_code != 200:
                if error_kind(resp) == "insufficient_stock":
                    resp.success()
                return
        with self.client.post(
            "/api/orders",
            json=order_data(session),
            catch_response=True,
            name="POST /api/orders",
        ) as resp:
            if resp.status_code != 201 and error_kind(resp) == "insufficient_stock":
                resp.success()
