"""Tests for the Product aggregate: creation, validation and stock decrement."""

import pytest
from protean.exceptions import ValidationError
from storefront.errors import InsufficientStock
from storefront.product.events import ProductAdded, StockDecremented
from storefront.product.product import Product, ProductCategory


def _make_product(**overrides):
    data = {
        "name": "SolarMax Pro 400W Panel",
        "price": 299.99,
        "category": ProductCategory.SOLAR_PANELS.value,
        "stock": 5,
    }
    data.update(overrides)
    return Product.create(**data)


class TestProductCreation:
    def test_create_sets_fields(self):
        product = _make_product(description="Monocrystalline", images=["/a.png", "/b.png"])
        assert product.name == "SolarMax Pro 400W Panel"
        assert product.price == 299.99
        assert product.category == "solar-panels"
        assert product.stock == 5
        assert product.description == "Monocrystalline"

    def test_images_round_trip_as_list(self):
        product = _make_product(images=["/a.png"])
        assert product.image_list == ["/a.png"]

    def test_no_images_is_empty_list(self):
        assert _make_product().image_list == []

    def test_price_is_rounded_to_cents(self):
        assert _make_product(price=10.005).price == 10.01

    def test_create_sets_timestamps(self):
        product = _make_product()
        assert product.created_at is not None
        assert product.updated_at == product.created_at

    def test_create_raises_product_added(self):
        product = _make_product()
        events = [e for e in product._events if isinstance(e, ProductAdded)]
        assert len(events) == 1
        assert events[0].product_id == str(product.id)
        assert events[0].stock == 5


class TestProductValidation:
    def test_unknown_category_is_rejected(self):
        with pytest.raises(ValidationError):
            _make_product(category="wind-turbines")

    def test_negative_price_is_rejected(self):
        with pytest.raises(ValidationError):
            _make_product(price=-1.0)

    def test_negative_stock_is_rejected(self):
        with pytest.raises(ValidationError):
            _make_product(stock=-1)

    def test_missing_name_is_rejected(self):
        with pytest.raises(ValidationError):
            _make_product(name="")


class TestStockDecrement:
    def test_has_stock_for(self):
        product = _make_product(stock=3)
        assert product.has_stock_for(3)
        assert not product.has_stock_for(4)

    def test_decrement_reduces_stock(self):
        product = _make_product(stock=5)
        product.decrement_stock(2, order_id="ord-1")
        assert product.stock == 3

    def test_decrement_to_zero_is_allowed(self):
        product = _make_product(stock=2)
        product.decrement_stock(2, order_id="ord-1")
        assert product.stock == 0

    def test_decrement_beyond_stock_raises(self):
        product = _make_product(stock=2)
        with pytest.raises(InsufficientStock) as exc:
            product.decrement_stock(3, order_id="ord-1")

        assert exc.value.requested == 3
        assert exc.value.available == 2
        assert product.stock == 2

    def test_decrement_raises_stock_decremented(self):
        product = _make_product(stock=5)
        product._events.clear()
        product.decrement_stock(2, order_id="ord-1")

        assert len(product._events) == 1
        event = product._events[0]
        assert isinstance(event, StockDecremented)
        assert event.order_id == "ord-1"
        assert event.quantity == 2
        assert event.remaining == 3
