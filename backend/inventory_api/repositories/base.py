from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple

from inventory_api.schemas.product_schema import (
    CategoryCount,
    ProductCreate,
    ProductRecord,
    ProductStats,
)
from inventory_api.services.filtering import ProductFilters


class ProductStore(ABC):
    """
    Storage capability shared by the in-memory and relational backends.

    Records are handed out as `ProductRecord` copies; mutating one never
    changes stored state; use `update` for that.
    """

    backend = "abstract"

    @abstractmethod
    def find(self, filters: ProductFilters) -> Tuple[List[ProductRecord], int]:
        """Return the requested page of matching products and the total match count."""

    @abstractmethod
    def get(self, product_id: int) -> Optional[ProductRecord]: ...

    @abstractmethod
    def get_by_barcode(self, barcode: str) -> Optional[ProductRecord]: ...

    @abstractmethod
    def insert(self, data: ProductCreate, now: datetime) -> ProductRecord:
        """Persist a new product, assigning its id and both timestamps."""

    @abstractmethod
    def update(self, record: ProductRecord) -> Optional[ProductRecord]:
        """Replace the stored state of `record.id`; None when it no longer exists."""

    @abstractmethod
    def delete(self, product_id: int) -> Optional[ProductRecord]:
        """Remove a product and return its last state."""

    @abstractmethod
    def categories(self) -> List[CategoryCount]: ...

    @abstractmethod
    def stats(self) -> ProductStats: ...

    @abstractmethod
    def count(self) -> int: ...

    def ping(self) -> bool:
        return True

    def close(self):
        pass
