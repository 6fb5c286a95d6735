"""FastAPI routes for the storefront: products, carts and orders."""

from fastapi import APIRouter, Depends, Query, Request
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.api.schemas import (
    AddToCartRequest,
    CartItemSchema,
    CartResponse,
    CartSchema,
    CartSummarySchema,
    OrderItemSchema,
    OrderResponse,
    OrderSchema,
    PaginationSchema,
    PlaceOrderRequest,
    ProductListResponse,
    ProductResponse,
    ProductSchema,
    UpdateCartItemRequest,
)
from storefront.cart import items as cart_items
from storefront.cart.management import get_or_create_cart
from storefront.cart.summary import cart_lines, summarize
from storefront.config import CheckoutSettings
from storefront.order.placement import place_order
from storefront.order.retrieval import get_order
from storefront.product.catalog import DEFAULT_PAGE_SIZE, ProductFilters, get_product, list_products
from storefront.product.product import Product


def get_settings(request: Request) -> CheckoutSettings:
    return getattr(request.app.state, "settings", None) or CheckoutSettings()


def _cart_schema(cart, settings: CheckoutSettings) -> CartSchema:
    lines = cart_lines(cart)
    summary = summarize(lines, settings)
    return CartSchema(
        id=str(cart.id),
        session_id=cart.session_id,
        items=[
            CartItemSchema(
                id=line.item_id,
                product_id=str(line.product.id),
                quantity=line.quantity,
                line_total=float(line.line_total),
                product=ProductSchema.from_product(line.product),
            )
            for line in lines
        ],
        summary=CartSummarySchema(
            subtotal=float(summary.subtotal),
            tax=float(summary.tax),
            shipping=float(summary.shipping),
            total=float(summary.total),
            item_count=summary.item_count,
        ),
        created_at=cart.created_at,
        updated_at=cart.updated_at,
    )


def _order_schema(order) -> OrderSchema:
    repo = current_domain.repository_for(Product)
    items = []
    for item in order.items:
        try:
            product = ProductSchema.from_product(repo.get(item.product_id))
        except ObjectNotFoundError:
            product = None
        items.append(
            OrderItemSchema(
                id=str(item.id),
                product_id=str(item.product_id),
                quantity=item.quantity,
                price=item.price,
                product=product,
            )
        )
    return OrderSchema(
        id=str(order.id),
        session_id=order.session_id,
        status=order.status,
        subtotal=order.subtotal,
        tax=order.tax,
        total=order.total,
        items=items,
        created_at=order.created_at,
        placed_at=order.placed_at,
    )


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/api/products", tags=["products"])


@product_router.get("", response_model=ProductListResponse)
async def list_products_endpoint(
    search: str | None = None,
    category: str | None = None,
    min_price: float | None = Query(None, alias="minPrice"),
    max_price: float | None = Query(None, alias="maxPrice"),
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
) -> ProductListResponse:
    filters = ProductFilters(
        search=search,
        category=category,
        min_price=min_price,
        max_price=max_price,
        page=page,
        limit=limit,
    )
    result = list_products(filters)
    return ProductListResponse(
        data=[ProductSchema.from_product(product) for product in result.items],
        pagination=PaginationSchema(
            page=result.page,
            limit=result.limit,
            total=result.total,
            total_pages=result.total_pages,
        ),
    )


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product_endpoint(product_id: str) -> ProductResponse:
    return ProductResponse(data=ProductSchema.from_product(get_product(product_id)))


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/api/cart", tags=["cart"])


@cart_router.get("/{session_id}", response_model=CartResponse, response_model_exclude_none=True)
async def get_cart(session_id: str, settings: CheckoutSettings = Depends(get_settings)) -> CartResponse:
    cart = get_or_create_cart(session_id)
    return CartResponse(data=_cart_schema(cart, settings))


@cart_router.post("/{session_id}", response_model=CartResponse, response_model_exclude_none=True)
async def add_cart_item(
    session_id: str,
    body: AddToCartRequest,
    settings: CheckoutSettings = Depends(get_settings),
) -> CartResponse:
    cart = cart_items.add_item(session_id, body.product_id, body.quantity)
    return CartResponse(data=_cart_schema(cart, settings), message="Item added to cart")


@cart_router.put("/{session_id}/items/{item_id}", response_model=CartResponse, response_model_exclude_none=True)
async def update_cart_item(
    session_id: str,
    item_id: str,
    body: UpdateCartItemRequest,
    settings: CheckoutSettings = Depends(get_settings),
) -> CartResponse:
    cart = cart_items.update_item_quantity(session_id, item_id, body.quantity)
    return CartResponse(data=_cart_schema(cart, settings), message="Cart item updated")


@cart_router.delete("/{session_id}/items/{item_id}", response_model=CartResponse, response_model_exclude_none=True)
async def remove_cart_item(
    session_id: str,
    item_id: str,
    settings: CheckoutSettings = Depends(get_settings),
) -> CartResponse:
    cart = cart_items.remove_item(session_id, item_id)
    return CartResponse(data=_cart_schema(cart, settings), message="Item removed from cart")


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/api/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderResponse, response_model_exclude_none=True)
async def create_order(body: PlaceOrderRequest, settings: CheckoutSettings = Depends(get_settings)) -> OrderResponse:
    order = place_order(body.session_id, settings)
    return OrderResponse(data=_order_schema(order), message="Order placed successfully")


@order_router.get("/{order_id}", response_model=OrderResponse, response_model_exclude_none=True)
async def get_order_endpoint(order_id: str) -> OrderResponse:
    return OrderResponse(data=_order_schema(get_order(order_id)))
