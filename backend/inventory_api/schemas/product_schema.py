from datetime import datetime, timezone
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _wire(name: str, alias: str):
    """Field accepting either the Python name or the wire key, dumped as the wire key."""
    return Field(
        validation_alias=AliasChoices(alias, name),
        serialization_alias=alias,
    )


class ProductRecord(BaseModel):
    """Stored state of one product, as returned by every store backend."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    name: str = _wire("name", "nombre")
    description: str = _wire("description", "descripcion")
    barcode: str = _wire("barcode", "codigoBarras")
    price: float = _wire("price", "precio")
    stock: int
    category: str = _wire("category", "categoria")
    image: Optional[str] = Field(
        None, validation_alias=AliasChoices("imagen", "image"), serialization_alias="imagen"
    )
    created_at: datetime = _wire("created_at", "fechaCreacion")
    updated_at: datetime = _wire("updated_at", "fechaActualizacion")

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, v: datetime) -> datetime:
        # sqlite hands back naive datetimes
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class ProductCreate(BaseModel):
    """Creation payload; run through services.validation before building one."""

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    name: str = Field(validation_alias=AliasChoices("nombre", "name"))
    description: str = Field(validation_alias=AliasChoices("descripcion", "description"))
    barcode: str = Field(validation_alias=AliasChoices("codigoBarras", "barcode"))
    price: float = Field(validation_alias=AliasChoices("precio", "price"))
    stock: int
    category: str = Field(validation_alias=AliasChoices("categoria", "category"))
    image: Optional[str] = Field(None, validation_alias=AliasChoices("imagen", "image"))

    @field_validator("image")
    @classmethod
    def _blank_image_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class ProductUpdate(BaseModel):
    """
    Sparse update payload. Presence is tracked by pydantic (`model_fields_set`),
    so a field that was never sent is distinguishable from one sent as null.
    """

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    name: Optional[str] = Field(None, validation_alias=AliasChoices("nombre", "name"))
    description: Optional[str] = Field(
        None, validation_alias=AliasChoices("descripcion", "description")
    )
    barcode: Optional[str] = Field(None, validation_alias=AliasChoices("codigoBarras", "barcode"))
    price: Optional[float] = Field(None, validation_alias=AliasChoices("precio", "price"))
    stock: Optional[int] = None
    category: Optional[str] = Field(None, validation_alias=AliasChoices("categoria", "category"))
    image: Optional[str] = Field(None, validation_alias=AliasChoices("imagen", "image"))

    @field_validator("image")
    @classmethod
    def _blank_image_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    def changes(self) -> dict:
        """
        Fields to apply: everything explicitly sent and non-null.
        `image` is the exception, an explicit null (or blank) clears it.
        """
        out = {}
        for name in self.model_fields_set:
            value = getattr(self, name)
            if value is not None or name == "image":
                out[name] = value
        return out


class PriceExtreme(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str = Field(serialization_alias="nombre")
    price: float = Field(serialization_alias="precio")


class CategoryCount(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(serialization_alias="nombre")
    count: int = Field(serialization_alias="cantidad")


class ProductStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_products: int = Field(serialization_alias="totalProducts")
    total_stock: int = Field(serialization_alias="totalStock")
    average_price: float = Field(serialization_alias="averagePrice")
    low_stock_products: int = Field(serialization_alias="lowStockProducts")
    total_categories: int = Field(serialization_alias="totalCategories")
    most_expensive: Optional[PriceExtreme] = Field(None, serialization_alias="mostExpensive")
    cheapest: Optional[PriceExtreme] = None


class Pagination(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_page: int = Field(serialization_alias="currentPage")
    total_pages: int = Field(serialization_alias="totalPages")
    total_items: int = Field(serialization_alias="totalItems")
    items_per_page: int = Field(serialization_alias="itemsPerPage")


class ProductPage(BaseModel):
    items: List[ProductRecord]
    pagination: Pagination
