"""
Field rules for product payloads.

Each check appends human-readable messages to a shared list so that every
violated rule is reported together, in field order.
"""
import math
import re
from typing import Any, List, NamedTuple

BARCODE_RE = re.compile(r"^[0-9]{10,15}$")
IMAGE_URL_RE = re.compile(r"^https?://.+\.(jpg|jpeg|png|gif|webp)$", re.IGNORECASE)

MAX_PRICE = 999999.99
MAX_STOCK = 999999

_MISSING = object()


class TextRule(NamedTuple):
    key: str
    label: str
    min_len: int
    max_len: int
    required_msg: str
    empty_msg: str


NAME = TextRule("nombre", "El nombre", 2, 100, "El nombre es requerido", "El nombre no puede estar vacío")
DESCRIPTION = TextRule(
    "descripcion",
    "La descripción",
    10,
    500,
    "La descripción es requerida",
    "La descripción no puede estar vacía",
)
CATEGORY = TextRule(
    "categoria",
    "La categoría",
    2,
    50,
    "La categoría es requerida",
    "La categoría no puede estar vacía",
)


def _check_text(value: Any, rule: TextRule, partial: bool, errors: List[str]):
    if not isinstance(value, str) or value.strip() == "":
        errors.append(rule.empty_msg if partial else rule.required_msg)
        return
    length = len(value.strip())
    if length < rule.min_len:
        errors.append(f"{rule.label} debe tener al menos {rule.min_len} caracteres")
    elif length > rule.max_len:
        errors.append(f"{rule.label} no puede exceder {rule.max_len} caracteres")


def _check_barcode(value: Any, partial: bool, errors: List[str]):
    if not partial and (value is None or (isinstance(value, str) and value.strip() == "")):
        errors.append("El código de barras es requerido")
    elif not isinstance(value, str) or not BARCODE_RE.match(value.strip()):
        errors.append("El código de barras debe contener entre 10 y 15 dígitos")


def _as_number(value: Any):
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return None
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def _check_price(value: Any, errors: List[str]):
    price = _as_number(value)
    if price is None or price <= 0:
        errors.append("El precio debe ser un número mayor que 0")
    elif price > MAX_PRICE:
        errors.append("El precio no puede exceder $999,999.99")
    elif round(price, 2) != price:
        errors.append("El precio no puede tener más de 2 decimales")


def _check_stock(value: Any, errors: List[str]):
    stock = _as_number(value)
    if stock is None or stock < 0:
        errors.append("El stock debe ser un número mayor o igual a 0")
    elif not stock.is_integer() or (isinstance(value, str) and not value.strip().isdigit()):
        errors.append("El stock debe ser un número entero")
    elif stock > MAX_STOCK:
        errors.append("El stock no puede exceder 999,999 unidades")


def _check_image(value: Any, errors: List[str]):
    if value is None:
        return
    if not isinstance(value, str):
        errors.append("La imagen debe ser una URL válida que termine en .jpg, .jpeg, .png, .gif o .webp")
        return
    if value.strip() and not IMAGE_URL_RE.match(value.strip()):
        errors.append("La imagen debe ser una URL válida que termine en .jpg, .jpeg, .png, .gif o .webp")


def _validate(payload: dict, partial: bool) -> List[str]:
    errors: List[str] = []

    def field(key):
        value = payload.get(key, _MISSING)
        # in update mode an explicit null means "not supplied"
        if partial and value is None:
            return _MISSING
        return value

    for rule in (NAME, DESCRIPTION):
        value = field(rule.key)
        if value is not _MISSING or not partial:
            _check_text(None if value is _MISSING else value, rule, partial, errors)

    barcode = field("codigoBarras")
    if barcode is not _MISSING or not partial:
        _check_barcode(None if barcode is _MISSING else barcode, partial, errors)

    price = field("precio")
    if price is _MISSING or price is None:
        if not partial:
            errors.append("El precio es requerido")
    else:
        _check_price(price, errors)

    stock = field("stock")
    if stock is _MISSING or stock is None:
        if not partial:
            errors.append("El stock es requerido")
    else:
        _check_stock(stock, errors)

    category = field(CATEGORY.key)
    if category is not _MISSING or not partial:
        _check_text(None if category is _MISSING else category, CATEGORY, partial, errors)

    _check_image(payload.get("imagen"), errors)
    return errors


def validate_product(payload: dict) -> List[str]:
    """Create mode: every field but `imagen` is required."""
    return _validate(payload, partial=False)


def validate_product_update(payload: dict) -> List[str]:
    """Update mode: fields are optional, but checked when supplied."""
    return _validate(payload, partial=True)
