"""Integration tests for the product endpoints."""

import pytest


@pytest.fixture()
def products(make_product):
    return [
        make_product(name="SolarMax Pro 400W Panel", price=299.99, category="solar-panels", images=["/panel.png"]),
        make_product(name="EnergyStore 10kWh Battery", price=4999.99, category="batteries"),
    ]


class TestListProductsEndpoint:
    def test_list(self, client, products):
        response = client.get("/api/products")
        assert response.status_code == 200

        body = response.json()
        assert body["success"] is True
        assert {p["name"] for p in body["data"]} == {p.name for p in products}
        assert body["pagination"] == {"page": 1, "limit": 12, "total": 2, "totalPages": 1}

    def test_product_fields_are_camel_case(self, client, products):
        body = client.get("/api/products", params={"search": "SolarMax"}).json()
        product = body["data"][0]
        assert product["images"] == ["/panel.png"]
        assert "createdAt" in product
        assert product["category"] == "solar-panels"

    def test_filter_params(self, client, products):
        response = client.get("/api/products", params={"category": "batteries", "minPrice": 1000})
        assert [p["name"] for p in response.json()["data"]] == ["EnergyStore 10kWh Battery"]

    @pytest.mark.parametrize(
        "params",
        [{"page": 0}, {"limit": 101}, {"category": "wind"}, {"minPrice": -5}, {"page": "abc"}],
    )
    def test_invalid_query_is_400(self, client, params):
        response = client.get("/api/products", params=params)
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"]["kind"] == "validation_error"


class TestGetProductEndpoint:
    def test_get(self, client, products):
        response = client.get(f"/api/products/{products[0].id}")
        assert response.status_code == 200
        assert response.json()["data"]["id"] == str(products[0].id)

    def test_unknown_is_404(self, client):
        response = client.get("/api/products/prod-404")
        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "error": {"kind": "not_found", "message": "Product not found"},
        }
