from datetime import datetime, timezone
from typing import Any, Callable, List, Tuple

from pydantic import ValidationError

from inventory_api.exceptions import (
    DuplicateBarcode,
    InvalidProductId,
    ProductNotFound,
    ProductValidationError,
)
from inventory_api.log import get_logger
from inventory_api.repositories.base import ProductStore
from inventory_api.schemas.product_schema import (
    CategoryCount,
    ProductCreate,
    ProductRecord,
    ProductStats,
    ProductUpdate,
)
from inventory_api.services.filtering import MAX_INT64, ProductFilters
from inventory_api.services.validation import validate_product, validate_product_update

log = get_logger("products")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_product_id(raw: Any) -> int:
    """Path ids must be positive integers."""
    try:
        product_id = int(str(raw).strip())
    except ValueError:
        raise InvalidProductId()
    if product_id <= 0:
        raise InvalidProductId()
    if product_id > MAX_INT64:
        # never assigned by any store
        raise ProductNotFound(f"No existe un producto con ID {product_id}")
    return product_id


def merge_update(existing: ProductRecord, changes: dict, now: datetime) -> ProductRecord:
    """
    New record state for `existing` with `changes` applied.

    `changes` holds only the fields the caller supplied (see
    ProductUpdate.changes); everything else is kept. id and created_at are
    never taken from `changes`.
    """
    changes = {k: v for k, v in changes.items() if k not in ("id", "created_at", "updated_at")}
    return existing.model_copy(update={**changes, "updated_at": now})


def _build(model, payload: dict):
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        # only reachable for inputs the field rules let through
        raise ProductValidationError([err["msg"] for err in e.errors()]) from e


class ProductService:
    def __init__(self, store: ProductStore, clock: Callable[[], datetime] = _utcnow):
        self.store = store
        self.clock = clock

    def list_products(self, filters: ProductFilters) -> Tuple[List[ProductRecord], int]:
        return self.store.find(filters)

    def get(self, product_id: int) -> ProductRecord:
        p = self.store.get(product_id)
        if not p:
            raise ProductNotFound(f"No existe un producto con ID {product_id}")
        return p

    def get_by_barcode(self, barcode: str) -> ProductRecord:
        p = self.store.get_by_barcode(barcode)
        if not p:
            raise ProductNotFound(f"No existe un producto con código de barras {barcode}")
        return p

    def create(self, payload: dict) -> ProductRecord:
        errors = validate_product(payload)
        if errors:
            raise ProductValidationError(errors)
        data = _build(ProductCreate, payload)
        if self.store.get_by_barcode(data.barcode):
            raise DuplicateBarcode(data.barcode)
        p = self.store.insert(data, self.clock())
        log.info("created product id=%s barcode=%s", p.id, p.barcode)
        return p

    def update(self, product_id: int, payload: dict) -> Tuple[ProductRecord, bool]:
        """
        Apply a sparse update. Returns the resulting record and whether
        anything was applied; a payload without recognized fields leaves the
        record (and its timestamp) untouched.
        """
        errors = validate_product_update(payload)
        if errors:
            raise ProductValidationError(errors)
        changes = _build(ProductUpdate, payload).changes()

        existing = self.get(product_id)
        if not changes:
            return existing, False

        barcode = changes.get("barcode")
        if barcode and barcode != existing.barcode:
            holder = self.store.get_by_barcode(barcode)
            if holder and holder.id != product_id:
                raise DuplicateBarcode(barcode, other=True)

        updated = self.store.update(merge_update(existing, changes, self.clock()))
        if updated is None:
            # deleted between the read and the write
            raise ProductNotFound(f"No existe un producto con ID {product_id}")
        log.info("updated product id=%s fields=%s", product_id, sorted(changes))
        return updated, True

    def delete(self, product_id: int) -> ProductRecord:
        p = self.store.delete(product_id)
        if not p:
            raise ProductNotFound(f"No existe un producto con ID {product_id}")
        log.info("deleted product id=%s", product_id)
        return p

    def categories(self) -> List[CategoryCount]:
        return self.store.categories()

    def stats(self) -> ProductStats:
        return self.store.stats()
