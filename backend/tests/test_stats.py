import pytest

from tests.conftest import product_payload


def test_categories_with_counts(catalogue_client):
    res = catalogue_client.get("/api/productos/categorias")
    assert res.status_code == 200
    assert res.json()["data"] == [
        {"nombre": "Electronicos", "cantidad": 1},
        {"nombre": "Accesorios", "cantidad": 2},
        {"nombre": "Gaming", "cantidad": 1},
        {"nombre": "Gaming Gear", "cantidad": 1},
    ]


def test_stats_over_catalogue(catalogue_client):
    res = catalogue_client.get("/api/productos/stats")
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["totalProducts"] == 5
    assert data["totalStock"] == 295
    assert data["averagePrice"] == pytest.approx(283.99)
    assert data["lowStockProducts"] == 1
    assert data["totalCategories"] == 4
    assert data["mostExpensive"] == {"id": 1, "nombre": "Laptop HP Pavilion", "precio": 899.99}
    assert data["cheapest"] == {"id": 5, "nombre": "Cable USB", "precio": 9.99}


def test_stats_on_empty_store(client):
    data = client.get("/api/productos/stats").json()["data"]
    assert data == {
        "totalProducts": 0,
        "totalStock": 0,
        "averagePrice": 0,
        "lowStockProducts": 0,
        "totalCategories": 0,
        "mostExpensive": None,
        "cheapest": None,
    }
    assert client.get("/api/productos/categorias").json()["data"] == []


def test_price_ties_pick_the_first_product(client):
    for n, price in enumerate((5.0, 20.0, 20.0, 5.0)):
        client.post("/api/productos", json=product_payload(n, precio=price))
    data = client.get("/api/productos/stats").json()["data"]
    assert data["mostExpensive"]["nombre"] == "Test Product 1"
    assert data["cheapest"]["nombre"] == "Test Product 0"


def test_average_is_rounded_to_cents(client):
    for n, price in enumerate((1.0, 1.0, 1.01)):
        client.post("/api/productos", json=product_payload(n, precio=price))
    data = client.get("/api/productos/stats").json()["data"]
    assert data["averagePrice"] == 1.0


def test_stats_follow_deletes(client):
    a = client.post("/api/productos", json=product_payload(1, stock=3)).json()["data"]
    client.post("/api/productos", json=product_payload(2, stock=30, categoria="Other"))
    client.delete(f"/api/productos/{a['id']}")
    data = client.get("/api/productos/stats").json()["data"]
    assert data["totalProducts"] == 1
    assert data["lowStockProducts"] == 0
    assert data["totalCategories"] == 1
