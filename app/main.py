# app/main.py
import asyncio

from fastapi import FastAPI
import uvicorn

from app.api import include_routers
from app.api.error_handlers import register_error_handlers
from app.services.cart_storage import CartStorage, build_storage
from app.services.cart_store import CartStore
from app.services.cart_view import CartViewService
from app.services.catalog_service import CatalogService
from app.services.product_client import ProductClient
from app.utils.logging import get_logger

logger = get_logger(__name__)


def create_app(
    storage: CartStorage | None = None,
    product_client: ProductClient | None = None,
) -> FastAPI:
    """
    Jedna instancja koszyka na sesje aplikacji, trzymana w app.state
    i wstrzykiwana do routow przez Depends.
    """
    app = FastAPI(
        title="Storefront",
        version="1.0.0",
    )

    client = product_client or ProductClient()

    app.state.cart_store = CartStore.load(storage or build_storage())
    app.state.cart_lock = asyncio.Lock()
    app.state.product_client = client
    app.state.catalog_service = CatalogService(client)
    app.state.cart_view_service = CartViewService(client)

    logger.info(
        f"Storefront ready: product API {client.base_url}, "
        f"{app.state.cart_store.total_items} items in cart"
    )

    include_routers(app)
    register_error_handlers(app)

    return app


if __name__ == "__main__":
    uvicorn.run("app.main:create_app", factory=True, host="0.0.0.0", port=8000)
