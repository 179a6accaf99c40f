# app/api/dependencies.py
import asyncio

from fastapi import Request

from app.services.cart_store import CartStore
from app.services.cart_view import CartViewService
from app.services.catalog_service import CatalogService
from app.services.product_client import ProductClient


# wszystko zyje w app.state, budowane w create_app
def get_cart_store(request: Request) -> CartStore:
    return request.app.state.cart_store


def get_product_client(request: Request) -> ProductClient:
    return request.app.state.product_client


def get_catalog_service(request: Request) -> CatalogService:
    return request.app.state.catalog_service


def get_cart_view_service(request: Request) -> CartViewService:
    return request.app.state.cart_view_service


def get_cart_lock(request: Request) -> asyncio.Lock:
    return request.app.state.cart_lock
