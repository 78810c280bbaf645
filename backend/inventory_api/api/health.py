from fastapi import APIRouter, Depends

from inventory_api.api.deps import get_store
from inventory_api.log import get_logger
from inventory_api.repositories.base import ProductStore

router = APIRouter()

log = get_logger("health")


@router.get("/health", tags=["health"])
def health(store: ProductStore = Depends(get_store)):
    store_ok = False
    try:
        store_ok = store.ping()
    except Exception:
        log.exception("store health check failed")
        store_ok = False

    return {
        "status": "ok" if store_ok else "degraded",
        "store": store_ok,
        "backend": store.backend,
    }
