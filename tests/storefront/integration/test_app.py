"""The assembled application: middleware, routers and health check."""

import pytest
from app import create_app
from fastapi.testclient import TestClient


@pytest.fixture()
def app_client(settings):
    return TestClient(create_app(settings))


class TestHealth:
    def test_health_reports_status_and_timestamp(self, app_client):
        response = app_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["domain"] == "storefront"
        assert "T" in body["timestamp"]


class TestRequestMiddleware:
    def test_cart_call_runs_through_the_application(self, app_client, make_product):
        product = make_product(name="Panel", price=100.0, stock=5)

        added = app_client.post("/api/cart/sess-001", json={"productId": str(product.id), "quantity": 2})
        fetched = app_client.get("/api/cart/sess-001")

        assert added.status_code == 200
        assert fetched.status_code == 200
        assert fetched.json()["data"]["summary"]["itemCount"] == 2

    def test_order_placement_through_the_application(self, app_client, make_product):
        product = make_product(price=50.0, stock=5)
        app_client.post("/api/cart/sess-001", json={"productId": str(product.id), "quantity": 2})

        response = app_client.post("/api/orders", json={"sessionId": "sess-001"})

        assert response.status_code == 201
        assert response.json()["data"]["total"] == 108.0

    def test_request_id_is_echoed(self, app_client):
        response = app_client.get("/health", headers={"x-request-id": "req-42"})

        assert response.headers["x-request-id"] == "req-42"

    def test_request_id_is_generated_when_absent(self, app_client):
        response = app_client.get("/health")

        assert response.headers["x-request-id"]

    def test_errors_keep_the_envelope(self, app_client):
        response = app_client.get("/api/orders/does-not-exist")

        assert response.status_code == 404
        assert response.json()["success"] is False
        assert response.headers["x-request-id"]
