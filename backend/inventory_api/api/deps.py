from fastapi import Depends, Request

from inventory_api.repositories.base import ProductStore
from inventory_api.services.product_service import ProductService


def get_store(request: Request) -> ProductStore:
    return request.app.state.store


def get_service(store: ProductStore = Depends(get_store)) -> ProductService:
    return ProductService(store)
