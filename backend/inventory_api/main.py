import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from inventory_api.api.health import router as health_router
from inventory_api.api.responses import error_envelope
from inventory_api.api.routes_products import router as products_router
from inventory_api.config import settings
from inventory_api.exceptions import ProductServiceException
from inventory_api.log import get_logger
from inventory_api.repositories import build_store
from inventory_api.seed import seed_products

log = get_logger("http")

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    store = build_store(settings)
    if settings.SEED_SAMPLE_DATA and store.count() == 0:
        seed_products(store)
    app.state.store = store

    try:
        yield
    finally:
        store.close()
        log.info("product store closed")


app = FastAPI(title="API de Productos - Sistema de Inventario", version=VERSION, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    log.info("%s %s -> %s (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
    return response


@app.exception_handler(ProductServiceException)
async def product_error_handler(request: Request, exc: ProductServiceException):
    message = exc.message
    if exc.status_code >= 500:
        log.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        if settings.ENVIRONMENT == "production":
            message = "Algo salió mal"
    return error_envelope(exc.status_code, exc.error, message, exc.details)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = []
    for err in exc.errors():
        where = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        details.append(f"{where}: {err['msg']}" if where else err["msg"])
    return error_envelope(
        400, "Datos de entrada inválidos", "Por favor, corrija los siguientes errores:", details
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return error_envelope(404, "Ruta no encontrada", f"La ruta {request.url.path} no existe")
    return error_envelope(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    log.exception("unhandled error on %s %s", request.method, request.url.path)
    message = str(exc) if settings.ENVIRONMENT != "production" else "Algo salió mal"
    return error_envelope(500, "Error interno del servidor", message)


@app.get("/", tags=["root"])
def root():
    return {
        "message": "API de Productos - Sistema de Inventario",
        "version": VERSION,
        "endpoints": {
            "productos": "/api/productos",
            "documentacion": "/api/productos/docs",
        },
    }


app.include_router(health_router, prefix="/api", tags=["health"])

app.include_router(products_router, prefix="/api/productos", tags=["productos"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("inventory_api.main:app", host=settings.APP_HOST, port=settings.APP_PORT)
