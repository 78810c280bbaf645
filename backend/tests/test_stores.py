from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import OperationalError

from inventory_api.config import Settings
from inventory_api.db import Database
from inventory_api.exceptions import DuplicateBarcode, StoreError
from inventory_api.repositories import MemoryProductStore, SqlProductStore, build_store
from inventory_api.schemas.product_schema import ProductCreate
from inventory_api.seed import SAMPLE_PRODUCTS, seed_products
from tests.conftest import product_payload

NOW = datetime(2026, 3, 1, tzinfo=timezone.utc)


@pytest.fixture
def sql_store(tmp_path):
    db = Database(f"sqlite:///{tmp_path / 'store.db'}")
    db.init_schema()
    store = SqlProductStore(db)
    yield store
    store.close()


def test_sql_unique_barcode_becomes_duplicate_error(sql_store):
    data = ProductCreate.model_validate(product_payload())
    sql_store.insert(data, NOW)
    with pytest.raises(DuplicateBarcode):
        sql_store.insert(data, NOW)
    assert sql_store.count() == 1


def test_sql_round_trip_keeps_utc_timestamps(sql_store):
    p = sql_store.insert(ProductCreate.model_validate(product_payload()), NOW)
    fetched = sql_store.get(p.id)
    assert fetched.created_at == NOW
    assert fetched.created_at.tzinfo is not None
    assert fetched == p


def test_sql_failures_are_wrapped(sql_store, monkeypatch):
    def broken_session():
        raise OperationalError("SELECT 1", {}, Exception("database is gone"))

    s = sql_store.database.session()
    monkeypatch.setattr(s, "query", lambda *a, **kw: broken_session())
    monkeypatch.setattr(sql_store.database, "session", lambda: s)
    with pytest.raises(StoreError):
        sql_store.count()


def test_memory_store_hands_out_copies():
    store = MemoryProductStore()
    p = store.insert(ProductCreate.model_validate(product_payload()), NOW)
    p.stock = 1
    assert store.get(p.id).stock == 100


def test_build_store_selects_backend(tmp_path):
    memory = build_store(Settings(STORE_BACKEND="memory"))
    assert isinstance(memory, MemoryProductStore)

    sql = build_store(Settings(STORE_BACKEND="SQL", DATABASE_URL=f"sqlite:///{tmp_path / 'b.db'}"))
    try:
        assert isinstance(sql, SqlProductStore)
        assert sql.ping() is True
    finally:
        sql.close()

    with pytest.raises(ValueError):
        build_store(Settings(STORE_BACKEND="redis"))


def test_seed_is_idempotent():
    store = MemoryProductStore()
    assert seed_products(store) == len(SAMPLE_PRODUCTS)
    assert seed_products(store) == 0
    assert store.get_by_barcode("1234567890123").name == "Laptop HP Pavilion"
