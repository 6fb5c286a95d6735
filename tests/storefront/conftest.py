"""Shared fixtures for storefront tests."""

from decimal import Decimal

import pytest
from protean import current_domain

from storefront.config import CheckoutSettings
from storefront.product.product import Product, ProductCategory


@pytest.fixture()
def settings():
    return CheckoutSettings(
        tax_rate=Decimal("0.08"),
        free_shipping_threshold=Decimal("500.00"),
        shipping_fee=Decimal("25.00"),
        max_attempts=3,
        retry_backoff=0.0,
    )


@pytest.fixture()
def make_product():
    """Factory that persists a product and returns it."""

    def _make(name="Test Panel", price=100.0, stock=10, category=ProductCategory.SOLAR_PANELS.value, **kwargs):
        product = Product.create(name=name, price=price, category=category, stock=stock, **kwargs)
        current_domain.repository_for(Product).add(product)
        return product

    return _make


@pytest.fixture()
def stock_of():
    """Current persisted stock of a product."""

    def _stock(product):
        return current_domain.repository_for(Product).get(product.id).stock

    return _stock
