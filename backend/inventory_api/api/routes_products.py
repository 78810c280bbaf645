from typing import Optional

from fastapi import APIRouter, Body, Depends, Query

from inventory_api.api.deps import get_service
from inventory_api.api.responses import envelope
from inventory_api.services.filtering import ProductFilters, build_pagination
from inventory_api.services.product_service import ProductService, parse_product_id

router = APIRouter(tags=["productos"])

API_DOCS = {
    "title": "API de Productos - Documentación",
    "version": "1.0.0",
    "endpoints": [
        {
            "method": "GET",
            "path": "/api/productos",
            "description": "Obtener todos los productos",
            "query_params": {
                "categoria": "Filtrar por categoría",
                "precio_min": "Precio mínimo",
                "precio_max": "Precio máximo",
                "stock_min": "Stock mínimo",
                "search": "Buscar por nombre o descripción",
                "page": "Número de página (por defecto 1)",
                "limit": "Productos por página (por defecto 10)",
            },
        },
        {"method": "GET", "path": "/api/productos/:id", "description": "Obtener un producto por ID"},
        {
            "method": "GET",
            "path": "/api/productos/codigo/:codigoBarras",
            "description": "Obtener un producto por código de barras",
        },
        {
            "method": "POST",
            "path": "/api/productos",
            "description": "Crear un nuevo producto",
            "body": {
                "nombre": "string (requerido)",
                "descripcion": "string (requerido)",
                "codigoBarras": "string (requerido, único)",
                "precio": "number (requerido, > 0)",
                "stock": "number (requerido, >= 0)",
                "categoria": "string (requerido)",
                "imagen": "string (URL opcional)",
            },
        },
        {"method": "PUT", "path": "/api/productos/:id", "description": "Actualizar un producto existente"},
        {"method": "DELETE", "path": "/api/productos/:id", "description": "Eliminar un producto"},
        {
            "method": "GET",
            "path": "/api/productos/categorias",
            "description": "Obtener todas las categorías disponibles",
        },
        {"method": "GET", "path": "/api/productos/stats", "description": "Obtener estadísticas de productos"},
    ],
}


@router.get("", summary="List products")
def list_products(
    categoria: Optional[str] = Query(None, description="category substring"),
    precio_min: Optional[str] = Query(None),
    precio_max: Optional[str] = Query(None),
    stock_min: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="search term for name or description"),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    svc: ProductService = Depends(get_service),
):
    filters = ProductFilters.from_query(
        categoria=categoria,
        precio_min=precio_min,
        precio_max=precio_max,
        stock_min=stock_min,
        search=search,
        page=page,
        limit=limit,
    )
    items, total = svc.list_products(filters)
    pagination = build_pagination(total, filters.page, filters.limit)
    return envelope(
        [p.to_wire() for p in items],
        pagination=pagination.model_dump(by_alias=True),
        filters=filters.echo(),
    )


@router.get("/docs", summary="Endpoint reference")
def api_docs():
    return API_DOCS


@router.get("/stats", summary="Product statistics")
def product_stats(svc: ProductService = Depends(get_service)):
    return envelope(svc.stats().model_dump(by_alias=True))


@router.get("/categorias", summary="Categories with product counts")
def list_categories(svc: ProductService = Depends(get_service)):
    return envelope([c.model_dump(by_alias=True) for c in svc.categories()])


@router.get("/codigo/{codigo_barras}", summary="Get product by barcode")
def get_product_by_barcode(codigo_barras: str, svc: ProductService = Depends(get_service)):
    return envelope(svc.get_by_barcode(codigo_barras).to_wire())


@router.get("/{product_id}", summary="Get product by id")
def get_product(product_id: str, svc: ProductService = Depends(get_service)):
    return envelope(svc.get(parse_product_id(product_id)).to_wire())


@router.post("", summary="Create product", status_code=201)
def create_product(payload: dict = Body(...), svc: ProductService = Depends(get_service)):
    p = svc.create(payload)
    return envelope(p.to_wire(), message="Producto creado exitosamente", status_code=201)


@router.put("/{product_id}", summary="Partially update product")
def update_product(
    product_id: str,
    payload: Optional[dict] = Body(None),
    svc: ProductService = Depends(get_service),
):
    pid = parse_product_id(product_id)
    p, changed = svc.update(pid, payload or {})
    message = (
        "Producto actualizado exitosamente"
        if changed
        else "No se proporcionaron campos para actualizar"
    )
    return envelope(p.to_wire(), message=message)


@router.delete("/{product_id}", summary="Delete product")
def delete_product(product_id: str, svc: ProductService = Depends(get_service)):
    p = svc.delete(parse_product_id(product_id))
    return envelope(p.to_wire(), message="Producto eliminado exitosamente")
