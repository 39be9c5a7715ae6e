"""
Food API — Dependency providers

Clients live on app.state (set up in the lifespan, or by tests); services
are built per request around them.
"""
from fastapi import Depends, Request

from food_api.db.document_store import DocumentStore
from food_api.services.basket import BasketService
from food_api.services.dishes import DishCatalogService
from food_api.services.identity import IdentityGateway
from food_api.services.orders import OrderService


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


def get_identity(request: Request) -> IdentityGateway:
    return request.app.state.identity


def get_dish_service(store: DocumentStore = Depends(get_store)) -> DishCatalogService:
    return DishCatalogService(store)


def get_basket_service(store: DocumentStore = Depends(get_store)) -> BasketService:
    return BasketService(store)


def get_order_service(store: DocumentStore = Depends(get_store)) -> OrderService:
    return OrderService(store)
