from datetime import datetime, timezone
from typing import Iterable, Mapping

from inventory_api.exceptions import ProductValidationError
from inventory_api.log import get_logger
from inventory_api.repositories.base import ProductStore
from inventory_api.schemas.product_schema import ProductCreate
from inventory_api.services.validation import validate_product

log = get_logger("seed")

SAMPLE_PRODUCTS = [
    {
        "nombre": "Laptop HP Pavilion",
        "descripcion": "Laptop para uso profesional con procesador Intel i7",
        "codigoBarras": "1234567890123",
        "precio": 899.99,
        "stock": 15,
        "categoria": "Electrónicos",
        "imagen": "https://example.com/laptop.jpg",
    },
    {
        "nombre": "Mouse Logitech MX",
        "descripcion": "Mouse inalámbrico ergonómico para oficina",
        "codigoBarras": "2345678901234",
        "precio": 79.99,
        "stock": 50,
        "categoria": "Accesorios",
        "imagen": "https://example.com/mouse.jpg",
    },
    {
        "nombre": "Teclado Mecánico",
        "descripcion": "Teclado mecánico RGB para gaming",
        "codigoBarras": "3456789012345",
        "precio": 129.99,
        "stock": 25,
        "categoria": "Gaming",
        "imagen": "https://example.com/teclado.jpg",
    },
]


def seed_products(store: ProductStore, entries: Iterable[Mapping] = SAMPLE_PRODUCTS) -> int:
    """
    Insert entries whose barcode is not stored yet. Entries use the wire keys
    and go through the same validation as the create endpoint.
    Returns the number of products created.
    """
    created = 0
    for entry in entries:
        errors = validate_product(dict(entry))
        if errors:
            raise ProductValidationError(errors)
        data = ProductCreate.model_validate(dict(entry))
        if store.get_by_barcode(data.barcode):
            continue
        store.insert(data, datetime.now(timezone.utc))
        created += 1
    if created:
        log.info("seeded %d products", created)
    return created
