from datetime import datetime, timezone

import pytest

from inventory_api.exceptions import ProductValidationError
from inventory_api.schemas.product_schema import ProductRecord
from inventory_api.services.filtering import (
    MAX_INT64,
    ProductFilters,
    build_pagination,
    paginate,
    select_page,
)

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _product(id, name, category, price, stock, description="Una descripción cualquiera"):
    return ProductRecord(
        id=id,
        name=name,
        description=description,
        barcode=str(1000000000 + id),
        price=price,
        stock=stock,
        category=category,
        created_at=NOW,
        updated_at=NOW,
    )


PRODUCTS = [
    _product(1, "Laptop", "Electrónicos", 899.99, 15),
    _product(2, "Mouse", "Accesorios", 79.99, 50, description="Mouse ÓPTICO inalámbrico"),
    _product(3, "Teclado", "Gaming", 129.99, 9),
]


def test_defaults():
    f = ProductFilters.from_query()
    assert f == ProductFilters(page=1, limit=10)
    assert f.offset == 0
    assert all(f.matches(p) for p in PRODUCTS)


def test_from_query_parses_numbers():
    f = ProductFilters.from_query(precio_min="10.5", precio_max="20", stock_min=" 3 ", page="2", limit="5")
    assert f.price_min == 10.5
    assert f.price_max == 20.0
    assert f.stock_min == 3
    assert (f.page, f.limit, f.offset) == (2, 5, 5)


def test_from_query_collects_every_error():
    with pytest.raises(ProductValidationError) as exc:
        ProductFilters.from_query(precio_min="x", stock_min="-1", limit="0")
    assert exc.value.details == [
        "El parámetro precio_min debe ser un número",
        "El parámetro stock_min debe ser mayor o igual a 0",
        "El parámetro limit debe ser mayor o igual a 1",
    ]


def test_category_match_ignores_case_including_accents():
    f = ProductFilters(category="ELECTRÓNICOS")
    assert [p.id for p in PRODUCTS if f.matches(p)] == [1]


def test_search_looks_at_name_or_description():
    f = ProductFilters(search="óptico")
    assert [p.id for p in PRODUCTS if f.matches(p)] == [2]
    f = ProductFilters(search="tecl")
    assert [p.id for p in PRODUCTS if f.matches(p)] == [3]


def test_bounds_are_inclusive():
    f = ProductFilters(price_min=79.99, price_max=129.99, stock_min=9)
    assert [p.id for p in PRODUCTS if f.matches(p)] == [2, 3]


def test_zero_bounds_still_apply():
    f = ProductFilters(price_min=0, stock_min=0)
    assert len([p for p in PRODUCTS if f.matches(p)]) == 3
    f = ProductFilters(price_max=0)
    assert [p for p in PRODUCTS if f.matches(p)] == []


def test_paginate_clips_to_bounds():
    items = list(range(7))
    assert paginate(items, 1, 3) == [0, 1, 2]
    assert paginate(items, 3, 3) == [6]
    assert paginate(items, 4, 3) == []


def test_select_page_reports_total_matches():
    page, total = select_page(PRODUCTS, ProductFilters(price_min=50, page=2, limit=1))
    assert [p.id for p in page] == [2]
    assert total == 3


def test_build_pagination():
    p = build_pagination(21, 3, 10)
    assert p.model_dump(by_alias=True) == {
        "currentPage": 3,
        "totalPages": 3,
        "totalItems": 21,
        "itemsPerPage": 10,
    }
    assert build_pagination(0, 1, 10).total_pages == 0


def test_from_query_clamps_oversized_values():
    f = ProductFilters.from_query(stock_min="9" * 30, limit="500", page="9" * 30)
    assert f.stock_min == MAX_INT64
    assert f.limit == 100
    assert f.page == int("9" * 30)
