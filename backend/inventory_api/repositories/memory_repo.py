from datetime import datetime
from typing import List, Optional, Tuple

from inventory_api.repositories.base import ProductStore
from inventory_api.schemas.product_schema import (
    CategoryCount,
    ProductCreate,
    ProductRecord,
    ProductStats,
)
from inventory_api.services.aggregation import category_counts, summarize
from inventory_api.services.filtering import ProductFilters, select_page


class MemoryProductStore(ProductStore):
    """
    Products kept in a process-local list, in insertion order.
    Ids come from a counter and are never handed out twice, even after deletes.
    Not safe against concurrent writers.
    """

    backend = "memory"

    def __init__(self):
        self._products: List[ProductRecord] = []
        self._next_id = 1

    def _index(self, product_id: int) -> Optional[int]:
        return next(
            (i for i, p in enumerate(self._products) if p.id == product_id), None
        )

    def find(self, filters: ProductFilters) -> Tuple[List[ProductRecord], int]:
        items, total = select_page(self._products, filters)
        return [p.model_copy() for p in items], total

    def get(self, product_id: int) -> Optional[ProductRecord]:
        i = self._index(product_id)
        return self._products[i].model_copy() if i is not None else None

    def get_by_barcode(self, barcode: str) -> Optional[ProductRecord]:
        p = next((p for p in self._products if p.barcode == barcode), None)
        return p.model_copy() if p else None

    def insert(self, data: ProductCreate, now: datetime) -> ProductRecord:
        record = ProductRecord(
            id=self._next_id,
            created_at=now,
            updated_at=now,
            **data.model_dump(),
        )
        self._next_id += 1
        self._products.append(record)
        return record.model_copy()

    def update(self, record: ProductRecord) -> Optional[ProductRecord]:
        i = self._index(record.id)
        if i is None:
            return None
        self._products[i] = record.model_copy()
        return record.model_copy()

    def delete(self, product_id: int) -> Optional[ProductRecord]:
        i = self._index(product_id)
        if i is None:
            return None
        return self._products.pop(i)

    def categories(self) -> List[CategoryCount]:
        return category_counts(self._products)

    def stats(self) -> ProductStats:
        return summarize(self._products)

    def count(self) -> int:
        return len(self._products)
