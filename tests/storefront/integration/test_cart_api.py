"""Integration tests for the cart endpoints."""

import pytest


def _add(client, session_id, product_id, quantity=1):
    return client.post(f"/api/cart/{session_id}", json={"productId": str(product_id), "quantity": quantity})


class TestGetCartEndpoint:
    def test_new_session_gets_empty_cart(self, client):
        response = client.get("/api/cart/sess-001")
        assert response.status_code == 200

        data = response.json()["data"]
        assert data["sessionId"] == "sess-001"
        assert data["items"] == []
        assert data["summary"] == {"subtotal": 0.0, "tax": 0.0, "shipping": 0.0, "total": 0.0, "itemCount": 0}

    def test_overlong_session_is_400(self, client):
        response = client.get(f"/api/cart/{'s' * 256}")
        assert response.status_code == 400


class TestAddToCartEndpoint:
    def test_add(self, client, make_product):
        product = make_product(name="Panel", price=100.0, stock=5)

        response = _add(client, "sess-001", product.id, 2)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Item added to cart"
        line = body["data"]["items"][0]
        assert line["productId"] == str(product.id)
        assert line["quantity"] == 2
        assert line["lineTotal"] == 200.0
        assert line["product"]["name"] == "Panel"

    def test_summary_below_free_shipping(self, client, make_product):
        product = make_product(price=100.0, stock=5)

        summary = _add(client, "sess-001", product.id, 2).json()["data"]["summary"]

        assert summary == {"subtotal": 200.0, "tax": 16.0, "shipping": 25.0, "total": 241.0, "itemCount": 2}

    def test_summary_free_shipping_from_threshold(self, client, make_product):
        product = make_product(price=250.0, stock=5)

        summary = _add(client, "sess-001", product.id, 2).json()["data"]["summary"]

        assert summary["shipping"] == 0.0
        assert summary["total"] == 540.0

    def test_insufficient_stock_is_400(self, client, make_product):
        product = make_product(name="Battery", stock=1)

        response = _add(client, "sess-001", product.id, 2)

        assert response.status_code == 400
        assert response.json()["error"] == {
            "kind": "insufficient_stock",
            "message": "Insufficient stock for Battery: requested 2, available 1",
        }

    def test_unknown_product_is_404(self, client):
        response = _add(client, "sess-001", "prod-404")
        assert response.status_code == 404

    @pytest.mark.parametrize("body", [{"productId": "p1", "quantity": 0}, {"productId": "p1"}, {"quantity": 1}])
    def test_invalid_body_is_400(self, client, body):
        response = client.post("/api/cart/sess-001", json=body)
        assert response.status_code == 400
        assert response.json()["error"]["kind"] == "validation_error"


class TestUpdateCartItemEndpoint:
    def test_update(self, client, make_product):
        product = make_product(stock=10)
        item_id = _add(client, "sess-001", product.id).json()["data"]["items"][0]["id"]

        response = client.put(f"/api/cart/sess-001/items/{item_id}", json={"quantity": 4})

        assert response.status_code == 200
        assert response.json()["data"]["items"][0]["quantity"] == 4

    def test_update_to_zero_removes(self, client, make_product):
        product = make_product(stock=10)
        item_id = _add(client, "sess-001", product.id).json()["data"]["items"][0]["id"]

        response = client.put(f"/api/cart/sess-001/items/{item_id}", json={"quantity": 0})

        assert response.json()["data"]["items"] == []

    def test_unknown_item_is_404(self, client, make_product):
        product = make_product(stock=10)
        _add(client, "sess-001", product.id)

        response = client.put("/api/cart/sess-001/items/item-404", json={"quantity": 2})

        assert response.status_code == 404


class TestRemoveCartItemEndpoint:
    def test_remove(self, client, make_product):
        product = make_product(stock=10)
        item_id = _add(client, "sess-001", product.id).json()["data"]["items"][0]["id"]

        response = client.delete(f"/api/cart/sess-001/items/{item_id}")

        assert response.status_code == 200
        assert response.json()["data"]["items"] == []
        assert response.json()["message"] == "Item removed from cart"
