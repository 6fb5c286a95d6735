"""Product aggregate: an item of energy equipment offered in the catalogue.

Stock is the only attribute that changes in the normal course of business, and
only through order placement. Price is kept as a float rounded to cents; see
``storefront.pricing`` for the arithmetic.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Integer, String, Text

from storefront.domain import storefront
from storefront.errors import InsufficientStock
from storefront.pricing import round_money
from storefront.product.events import ProductAdded, StockDecremented


class ProductCategory(Enum):
    SOLAR_PANELS = "solar-panels"
    INVERTERS = "inverters"
    BATTERIES = "batteries"
    ACCESSORIES = "accessories"


@storefront.aggregate
class Product:
    name = String(required=True, max_length=255)
    description = Text(default="")
    price = Float(required=True, min_value=0.0)
    category = String(required=True, max_length=50, choices=ProductCategory)
    stock = Integer(default=0, min_value=0)
    images = Text()  # JSON array of image paths
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def name_must_not_be_blank(self):
        if not self.name or not self.name.strip():
            raise ValidationError({"name": ["Product name must not be blank"]})

    @invariant.post
    def stock_must_not_be_negative(self):
        if self.stock is not None and self.stock < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, name, price, category, description="", stock=0, images=None, created_at=None):
        now = created_at or datetime.now(UTC)
        product = cls(
            name=name,
            description=description or "",
            price=float(round_money(price)),
            category=category,
            stock=stock,
            images=json.dumps(list(images or [])),
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=product.name,
                category=product.category,
                price=product.price,
                stock=product.stock,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Stock
    # -------------------------------------------------------------------
    @property
    def image_list(self) -> list[str]:
        return json.loads(self.images) if self.images else []

    def has_stock_for(self, quantity: int) -> bool:
        return quantity <= self.stock

    def decrement_stock(self, quantity: int, order_id: str):
        """Take ``quantity`` units out of stock for ``order_id``."""
        if not self.has_stock_for(quantity):
            raise InsufficientStock(
                product_id=str(self.id),
                product_name=self.name,
                requested=quantity,
                available=self.stock,
            )

        self.stock -= quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            StockDecremented(
                product_id=str(self.id),
                order_id=str(order_id),
                quantity=quantity,
                remaining=self.stock,
            )
        )
