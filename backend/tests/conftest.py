import pytest
from fastapi.testclient import TestClient

from inventory_api.config import settings
from inventory_api.main import app

CATALOGUE = [
    {
        "nombre": "Laptop HP Pavilion",
        "descripcion": "Laptop para uso profesional",
        "codigoBarras": "1234567890123",
        "precio": 899.99,
        "stock": 15,
        "categoria": "Electronicos",
        "imagen": "https://example.com/laptop.jpg",
    },
    {
        "nombre": "Mouse Logitech MX",
        "descripcion": "Mouse inalambrico ergonomico",
        "codigoBarras": "2345678901234",
        "precio": 79.99,
        "stock": 50,
        "categoria": "Accesorios",
    },
    {
        "nombre": "Teclado Mecanico",
        "descripcion": "Teclado mecanico RGB para gaming",
        "codigoBarras": "3456789012345",
        "precio": 129.99,
        "stock": 25,
        "categoria": "Gaming",
    },
    {
        "nombre": "Monitor Gamer",
        "descripcion": "Monitor 144Hz para juegos",
        "codigoBarras": "4567890123456",
        "precio": 299.99,
        "stock": 5,
        "categoria": "Gaming Gear",
    },
    {
        "nombre": "Cable USB",
        "descripcion": "Cable USB-C de un metro",
        "codigoBarras": "5678901234567",
        "precio": 9.99,
        "stock": 200,
        "categoria": "Accesorios",
    },
]


def product_payload(n: int = 0, **overrides) -> dict:
    payload = {
        "nombre": f"Test Product {n}",
        "descripcion": "This is a test product",
        "codigoBarras": str(100000000000 + n),
        "precio": 10.99,
        "stock": 100,
        "categoria": "Test",
        "imagen": "http://example.com/test.jpg",
    }
    payload.update(overrides)
    return payload


@pytest.fixture(params=["memory", "sql"])
def client(request, monkeypatch, tmp_path):
    """A TestClient over an empty store, once per backend."""
    monkeypatch.setattr(settings, "STORE_BACKEND", request.param)
    monkeypatch.setattr(settings, "DATABASE_URL", f"sqlite:///{tmp_path / 'test.db'}")
    monkeypatch.setattr(settings, "RESET_DB", True)
    monkeypatch.setattr(settings, "SEED_SAMPLE_DATA", False)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def memory_client(monkeypatch):
    monkeypatch.setattr(settings, "STORE_BACKEND", "memory")
    monkeypatch.setattr(settings, "SEED_SAMPLE_DATA", False)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def catalogue_client(client):
    for entry in CATALOGUE:
        res = client.post("/api/productos", json=entry)
        assert res.status_code == 201, res.json()
    return client
