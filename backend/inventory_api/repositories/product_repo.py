from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, List, Optional, Tuple

from sqlalchemy import case, func, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from inventory_api.db import Database
from inventory_api.exceptions import DuplicateBarcode, StoreError
from inventory_api.log import get_logger
from inventory_api.models.product import Product
from inventory_api.repositories.base import ProductStore
from inventory_api.schemas.product_schema import (
    CategoryCount,
    PriceExtreme,
    ProductCreate,
    ProductRecord,
    ProductStats,
)
from inventory_api.services.aggregation import LOW_STOCK_THRESHOLD
from inventory_api.services.filtering import ProductFilters

log = get_logger("store")

_MUTABLE = ("name", "description", "barcode", "price", "stock", "category", "image", "updated_at")


class SqlProductStore(ProductStore):
    """
    Products in the relational `products` table.

    Every call runs in its own short-lived session; SQLAlchemy failures are
    re-raised as StoreError so the API reports them as internal errors.
    """

    backend = "sql"

    def __init__(self, database: Database):
        self.database = database

    @contextmanager
    def _session(self) -> Iterator[Session]:
        session = self.database.session()
        try:
            yield session
            session.commit()
        except IntegrityError:
            session.rollback()
            raise
        except SQLAlchemyError as e:
            session.rollback()
            log.error("store operation failed: %s", e)
            raise StoreError(str(e)) from e
        finally:
            session.close()

    def _conditions(self, filters: ProductFilters) -> list:
        conds = []
        if filters.category:
            conds.append(Product.category.icontains(filters.category, autoescape=True))
        if filters.price_min is not None:
            conds.append(Product.price >= filters.price_min)
        if filters.price_max is not None:
            conds.append(Product.price <= filters.price_max)
        if filters.stock_min is not None:
            conds.append(Product.stock >= filters.stock_min)
        if filters.search:
            conds.append(
                or_(
                    Product.name.icontains(filters.search, autoescape=True),
                    Product.description.icontains(filters.search, autoescape=True),
                )
            )
        return conds

    def find(self, filters: ProductFilters) -> Tuple[List[ProductRecord], int]:
        with self._session() as db:
            query = db.query(Product).filter(*self._conditions(filters))
            total = query.with_entities(func.count(Product.id)).scalar() or 0
            if filters.offset >= total:
                return [], total
            rows = (
                query.order_by(Product.id)
                .offset(filters.offset)
                .limit(filters.limit)
                .all()
            )
            return [ProductRecord.model_validate(p) for p in rows], total

    def get(self, product_id: int) -> Optional[ProductRecord]:
        with self._session() as db:
            p = db.get(Product, product_id)
            return ProductRecord.model_validate(p) if p else None

    def get_by_barcode(self, barcode: str) -> Optional[ProductRecord]:
        with self._session() as db:
            p = db.query(Product).filter(Product.barcode == barcode).first()
            return ProductRecord.model_validate(p) if p else None

    def insert(self, data: ProductCreate, now: datetime) -> ProductRecord:
        try:
            with self._session() as db:
                p = Product(created_at=now, updated_at=now, **data.model_dump())
                db.add(p)
                db.flush()
                record = ProductRecord.model_validate(p)
        except IntegrityError as e:
            # lost a race with another insert of the same barcode
            raise DuplicateBarcode(data.barcode) from e
        return record

    def update(self, record: ProductRecord) -> Optional[ProductRecord]:
        try:
            with self._session() as db:
                p = db.get(Product, record.id)
                if p is None:
                    return None
                for attr in _MUTABLE:
                    setattr(p, attr, getattr(record, attr))
                db.flush()
                updated = ProductRecord.model_validate(p)
        except IntegrityError as e:
            raise DuplicateBarcode(record.barcode, other=True) from e
        return updated

    def delete(self, product_id: int) -> Optional[ProductRecord]:
        with self._session() as db:
            p = db.get(Product, product_id)
            if p is None:
                return None
            snapshot = ProductRecord.model_validate(p)
            db.delete(p)
            return snapshot

    def categories(self) -> List[CategoryCount]:
        with self._session() as db:
            rows = (
                db.query(Product.category, func.count(Product.id))
                .group_by(Product.category)
                .order_by(func.min(Product.id))
                .all()
            )
            return [CategoryCount(name=name, count=n) for name, n in rows]

    def stats(self) -> ProductStats:
        with self._session() as db:
            total, stock, avg, low, cats = db.query(
                func.count(Product.id),
                func.coalesce(func.sum(Product.stock), 0),
                func.avg(Product.price),
                func.coalesce(
                    func.sum(case((Product.stock < LOW_STOCK_THRESHOLD, 1), else_=0)), 0
                ),
                func.count(func.distinct(Product.category)),
            ).one()
            top = db.query(Product).order_by(Product.price.desc(), Product.id).first()
            bottom = db.query(Product).order_by(Product.price.asc(), Product.id).first()

            def extreme(p):
                return PriceExtreme(id=p.id, name=p.name, price=p.price) if p else None

            return ProductStats(
                total_products=total,
                total_stock=int(stock),
                average_price=round(float(avg), 2) if avg is not None else 0,
                low_stock_products=int(low),
                total_categories=cats,
                most_expensive=extreme(top),
                cheapest=extreme(bottom),
            )

    def count(self) -> int:
        with self._session() as db:
            return db.query(func.count(Product.id)).scalar() or 0

    def ping(self) -> bool:
        try:
            return self.database.ping()
        except SQLAlchemyError:
            return False

    def close(self):
        self.database.dispose()
