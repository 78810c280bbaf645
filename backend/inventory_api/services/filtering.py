"""
Product listing criteria and the in-process filter/pagination engine.

`ProductFilters.from_query` turns raw query-string values into typed criteria
(rejecting malformed numbers); `filter_products` and `paginate` apply them to an
in-memory collection. The SQL store translates the same criteria into a query,
and both build their metadata with `build_pagination`.
"""
import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from inventory_api.config import settings
from inventory_api.exceptions import ProductValidationError
from inventory_api.schemas.product_schema import Pagination, ProductRecord

# largest value a 64-bit signed INTEGER column can hold
MAX_INT64 = 2**63 - 1


@dataclass(frozen=True)
class ProductFilters:
    category: Optional[str] = None
    price_min: Optional[float] = None
    price_max: Optional[float] = None
    stock_min: Optional[int] = None
    search: Optional[str] = None
    page: int = 1
    limit: int = 10

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_query(
        cls,
        categoria: Optional[str] = None,
        precio_min: Optional[str] = None,
        precio_max: Optional[str] = None,
        stock_min: Optional[str] = None,
        search: Optional[str] = None,
        page: Optional[str] = None,
        limit: Optional[str] = None,
    ) -> "ProductFilters":
        """
        Build criteria from query-string values. Blank values count as absent;
        every malformed value is reported at once as a validation error.
        """
        errors: List[str] = []

        def number(raw, label):
            if raw is None or raw.strip() == "":
                return None
            try:
                value = float(raw)
            except ValueError:
                value = None
            if value is None or not math.isfinite(value):
                errors.append(f"El parámetro {label} debe ser un número")
                return None
            return value

        def integer(raw, label, minimum):
            if raw is None or raw.strip() == "":
                return None
            try:
                value = int(raw)
            except ValueError:
                errors.append(f"El parámetro {label} debe ser un número entero")
                return None
            if value < minimum:
                errors.append(f"El parámetro {label} debe ser mayor o igual a {minimum}")
                return None
            return value

        price_min = number(precio_min, "precio_min")
        price_max = number(precio_max, "precio_max")
        stock = integer(stock_min, "stock_min", 0)
        if stock is not None:
            # stored stock never exceeds this
            stock = min(stock, MAX_INT64)
        page_no = integer(page, "page", 1)
        size = integer(limit, "limit", 1)
        if size is not None:
            size = min(size, settings.MAX_PAGE_SIZE)
        if errors:
            raise ProductValidationError(errors)

        return cls(
            category=categoria or None,
            price_min=price_min,
            price_max=price_max,
            stock_min=stock,
            search=search or None,
            page=page_no or 1,
            limit=size or settings.DEFAULT_PAGE_SIZE,
        )

    def echo(self) -> Dict[str, Optional[object]]:
        """The criteria in wire naming, returned alongside listings."""
        return {
            "categoria": self.category,
            "precio_min": self.price_min,
            "precio_max": self.price_max,
            "stock_min": self.stock_min,
            "search": self.search,
        }

    def matches(self, product: ProductRecord) -> bool:
        if self.category and self.category.lower() not in product.category.lower():
            return False
        if self.price_min is not None and product.price < self.price_min:
            return False
        if self.price_max is not None and product.price > self.price_max:
            return False
        if self.stock_min is not None and product.stock < self.stock_min:
            return False
        if self.search:
            term = self.search.lower()
            if term not in product.name.lower() and term not in product.description.lower():
                return False
        return True


def filter_products(
    products: Iterable[ProductRecord], filters: ProductFilters
) -> List[ProductRecord]:
    return [p for p in products if filters.matches(p)]


def paginate(items: Sequence, page: int, limit: int) -> List:
    offset = (page - 1) * limit
    return list(items[offset : offset + limit])


def build_pagination(total: int, page: int, limit: int) -> Pagination:
    return Pagination(
        current_page=page,
        total_pages=math.ceil(total / limit),
        total_items=total,
        items_per_page=limit,
    )


def select_page(
    products: Iterable[ProductRecord], filters: ProductFilters
) -> Tuple[List[ProductRecord], int]:
    """Filter then slice; returns the page and the total number of matches."""
    matching = filter_products(products, filters)
    return paginate(matching, filters.page, filters.limit), len(matching)
