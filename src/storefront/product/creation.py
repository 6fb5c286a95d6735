"""Product creation: command and handler.

Used by catalogue seeding; there is no public endpoint for it.
"""

import json

from protean import handle
from protean.fields import DateTime, Float, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.product.product import Product


@storefront.command(part_of="Product")
class AddProduct:
    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.0)
    category = String(required=True, max_length=50)
    stock = Integer(default=0, min_value=0)
    images = Text()  # JSON array of image paths
    created_at = DateTime()


@storefront.command_handler(part_of=Product)
class AddProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        images = json.loads(command.images) if command.images else []
        product = Product.create(
            name=command.name,
            description=command.description,
            price=command.price,
            category=command.category,
            stock=command.stock or 0,
            images=images,
            created_at=command.created_at,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)
