# app/api/routers/cart.py
import asyncio

from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from app.api.dependencies import get_cart_lock, get_cart_store, get_cart_view_service
from app.domain.errors import NetworkFailure
from app.domain.schemas import AddItemIn, CartItemStatus, CartOut, CartView, QuantityIn
from app.services.cart_store import CartStore
from app.services.cart_view import CartViewService
from app.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/cart", tags=["cart"])


async def _mutate(lock: asyncio.Lock, store: CartStore, command, *args):
    # jeden pisarz: blokada trzyma kolejnosc, zapis (plik/redis) idzie do threadpoola
    # zeby nie blokowac petli zdarzen
    async with lock:
        await run_in_threadpool(command, *args)
        return store.snapshot()


@router.get("", response_model=CartOut)
async def get_cart(store: CartStore = Depends(get_cart_store)):
    return store.snapshot()


@router.get(
    "/details",
    response_model=CartView,
    responses={503: {"description": "Product API failed, client may retry"}},
)
async def get_cart_details(
    store: CartStore = Depends(get_cart_store),
    service: CartViewService = Depends(get_cart_view_service),
):
    try:
        # requests blokuje, wiec do threadpoola
        return await run_in_threadpool(service.resolve, store)
    except NetworkFailure as e:
        logger.error(f"Failed to load cart items: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "Failed to load cart items", "retry": True},
        )


@router.post("/items", response_model=CartOut)
async def add_item(
    payload: AddItemIn,
    store: CartStore = Depends(get_cart_store),
    lock: asyncio.Lock = Depends(get_cart_lock),
):
    return await _mutate(lock, store, store.add_to_cart, payload.product_id)


@router.get("/items/{product_id}", response_model=CartItemStatus)
async def get_item(product_id: str, store: CartStore = Depends(get_cart_store)):
    return CartItemStatus(
        product_id=product_id,
        in_cart=store.is_in_cart(product_id),
        quantity=store.get_quantity(product_id),
    )


@router.patch("/items/{product_id}", response_model=CartOut)
async def update_item(
    product_id: str,
    payload: QuantityIn,
    store: CartStore = Depends(get_cart_store),
    lock: asyncio.Lock = Depends(get_cart_lock),
):
    return await _mutate(lock, store, store.update_quantity, product_id, payload.quantity)


@router.delete("/items/{product_id}", response_model=CartOut)
async def remove_item(
    product_id: str,
    store: CartStore = Depends(get_cart_store),
    lock: asyncio.Lock = Depends(get_cart_lock),
):
    return await _mutate(lock, store, store.remove_from_cart, product_id)


@router.delete("", response_model=CartOut)
async def clear_cart(
    store: CartStore = Depends(get_cart_store),
    lock: asyncio.Lock = Depends(get_cart_lock),
):
    return await _mutate(lock, store, store.clear_cart)
