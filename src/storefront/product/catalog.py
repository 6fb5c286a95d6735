"""Catalogue read path: product listing with filters and pagination."""

import math
from dataclasses import dataclass, field

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.query import Q

from storefront.domain import storefront
from storefront.errors import InvalidInput, NotFound
from storefront.product.product import Product, ProductCategory

logger = structlog.get_logger(__name__)

DEFAULT_PAGE_SIZE = 12
MAX_PAGE_SIZE = 100
MAX_SEARCH_LENGTH = 100


@dataclass(frozen=True)
class ProductFilters:
    search: str | None = None
    category: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    def validate(self):
        problems = []
        if self.page < 1:
            problems.append("Page must be a positive integer")
        if not 1 <= self.limit <= MAX_PAGE_SIZE:
            problems.append(f"Limit must be between 1 and {MAX_PAGE_SIZE}")
        if self.search is not None and not 1 <= len(self.search) <= MAX_SEARCH_LENGTH:
            problems.append(f"Search must be 1-{MAX_SEARCH_LENGTH} characters")
        if self.category is not None and self.category not in {c.value for c in ProductCategory}:
            problems.append("Invalid category")
        if self.min_price is not None and self.min_price < 0:
            problems.append("Min price must be non-negative")
        if self.max_price is not None and self.max_price < 0:
            problems.append("Max price must be non-negative")
        if problems:
            raise InvalidInput(f"Validation error: {', '.join(problems)}")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class ProductPage:
    items: list = field(default_factory=list)
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE
    total: int = 0

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.total else 0


@storefront.repository(part_of=Product)
class ProductRepository:
    def search(self, filters: ProductFilters):
        """Products matching ``filters``, newest first, one page at a time."""
        query = self._dao.query

        if filters.search:
            query = query.filter(Q(name__icontains=filters.search) | Q(description__icontains=filters.search))
        if filters.category:
            query = query.filter(category=filters.category)
        if filters.min_price is not None:
            query = query.filter(price__gte=filters.min_price)
        if filters.max_price is not None:
            query = query.filter(price__lte=filters.max_price)

        return query.order_by("-created_at").offset(filters.offset).limit(filters.limit).all()


def list_products(filters: ProductFilters) -> ProductPage:
    filters.validate()

    results = current_domain.repository_for(Product).search(filters)
    page = ProductPage(items=list(results.items), page=filters.page, limit=filters.limit, total=results.total)

    logger.info(
        "Products fetched",
        page=page.page,
        limit=page.limit,
        total=page.total,
        search=filters.search,
        category=filters.category,
        min_price=filters.min_price,
        max_price=filters.max_price,
    )
    return page


def get_product(product_id: str) -> Product:
    try:
        return current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        raise NotFound("Product not found", product_id=product_id) from None
