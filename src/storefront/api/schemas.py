"""Pydantic request/response schemas for the Storefront API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands. Field names travel in camelCase on the wire.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True)


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(CamelModel):
    product_id: str = Field(min_length=1)
    quantity: int = Field(ge=1, le=100)


class UpdateCartItemRequest(CamelModel):
    quantity: int = Field(ge=0, le=100)


class PlaceOrderRequest(CamelModel):
    session_id: str = Field(min_length=1, max_length=255)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ProductSchema(CamelModel):
    id: str
    name: str
    description: str
    price: float
    category: str
    stock: int
    images: list[str] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_product(cls, product) -> "ProductSchema":
        return cls(
            id=str(product.id),
            name=product.name,
            description=product.description or "",
            price=product.price,
            category=product.category,
            stock=product.stock,
            images=product.image_list,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class PaginationSchema(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int


class ProductListResponse(CamelModel):
    success: bool = True
    data: list[ProductSchema]
    pagination: PaginationSchema


class ProductResponse(CamelModel):
    success: bool = True
    data: ProductSchema


class CartItemSchema(CamelModel):
    id: str
    product_id: str
    quantity: int
    line_total: float
    product: ProductSchema


class CartSummarySchema(CamelModel):
    subtotal: float
    tax: float
    shipping: float
    total: float
    item_count: int


class CartSchema(CamelModel):
    id: str
    session_id: str
    items: list[CartItemSchema]
    summary: CartSummarySchema
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CartResponse(CamelModel):
    success: bool = True
    data: CartSchema
    message: str | None = None


class OrderItemSchema(CamelModel):
    id: str
    product_id: str
    quantity: int
    price: float
    product: ProductSchema | None = None


class OrderSchema(CamelModel):
    id: str
    session_id: str
    status: str
    subtotal: float
    tax: float
    total: float
    items: list[OrderItemSchema]
    created_at: datetime | None = None
    placed_at: datetime | None = None


class OrderResponse(CamelModel):
    success: bool = True
    data: OrderSchema
    message: str | None = None


class ErrorSchema(BaseModel):
    kind: str
    message: str


class ErrorResponse(BaseModel):
    success: bool = False
    error: ErrorSchema
