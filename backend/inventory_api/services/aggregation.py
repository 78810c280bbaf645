from typing import Dict, Iterable, List

from inventory_api.schemas.product_schema import (
    CategoryCount,
    PriceExtreme,
    ProductRecord,
    ProductStats,
)

LOW_STOCK_THRESHOLD = 10


def category_counts(products: Iterable[ProductRecord]) -> List[CategoryCount]:
    """Distinct categories in first-seen order, each with its product count."""
    counts: Dict[str, int] = {}
    for p in products:
        counts[p.category] = counts.get(p.category, 0) + 1
    return [CategoryCount(name=name, count=n) for name, n in counts.items()]


def _extreme(p: ProductRecord) -> PriceExtreme:
    return PriceExtreme(id=p.id, name=p.name, price=p.price)


def summarize(products: Iterable[ProductRecord]) -> ProductStats:
    items = list(products)
    if not items:
        return ProductStats(
            total_products=0,
            total_stock=0,
            average_price=0,
            low_stock_products=0,
            total_categories=0,
        )

    # max()/min() keep the first of several equal candidates
    most_expensive = max(items, key=lambda p: p.price)
    cheapest = min(items, key=lambda p: p.price)
    return ProductStats(
        total_products=len(items),
        total_stock=sum(p.stock for p in items),
        average_price=round(sum(p.price for p in items) / len(items), 2),
        low_stock_products=sum(1 for p in items if p.stock < LOW_STOCK_THRESHOLD),
        total_categories=len({p.category for p in items}),
        most_expensive=_extreme(most_expensive),
        cheapest=_extreme(cheapest),
    )
