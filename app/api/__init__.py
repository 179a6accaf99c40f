# app/api/__init__.py
from fastapi import FastAPI
from app.api.routers import cart, health, products


def include_routers(app: FastAPI) -> None:
    app.include_router(health.router)
    app.include_router(products.router)
    app.include_router(cart.router)
