from inventory_api.config import Settings
from inventory_api.db import Database
from inventory_api.log import get_logger
from inventory_api.repositories.base import ProductStore
from inventory_api.repositories.memory_repo import MemoryProductStore
from inventory_api.repositories.product_repo import SqlProductStore

log = get_logger("store")


def build_store(settings: Settings) -> ProductStore:
    """Create the store selected by STORE_BACKEND ("memory" or "sql")."""
    backend = settings.STORE_BACKEND.lower()
    if backend == "sql":
        database = Database(settings.DATABASE_URL)
        database.init_schema(reset=settings.RESET_DB)
        store = SqlProductStore(database)
    elif backend == "memory":
        store = MemoryProductStore()
    else:
        raise ValueError(f"Unknown STORE_BACKEND {settings.STORE_BACKEND!r}")
    log.info("using %s product store", store.backend)
    return store


__all__ = ["ProductStore", "MemoryProductStore", "SqlProductStore", "build_store"]
