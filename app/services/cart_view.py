# app/services/cart_view.py
import threading
from typing import List

from app.domain.errors import NetworkFailure, StaleResponse
from app.domain.schemas import CartItem, CartLine, CartView, Product
from app.services.cart_store import CartStore
from app.services.product_client import ProductClient
from app.utils.logging import get_logger

logger = get_logger(__name__)


class FetchGeneration:
    """
    Licznik generacji zapytan. Kazde nowe zapytanie dostaje wiekszy numer,
    wynik starszej generacji jest odrzucany.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._current = 0

    def begin(self) -> int:
        with self._lock:
            self._current += 1
            return self._current

    @property
    def current(self) -> int:
        with self._lock:
            return self._current

    def is_current(self, generation: int) -> bool:
        return generation == self.current


def build_cart_view(items: List[CartItem], products: List[Product]) -> CartView:
    """Laczy pozycje koszyka z produktami; brak produktu = pozycja niedostepna."""
    by_id = {p.id: p for p in products}

    lines = []
    for item in items:
        product = by_id.get(item.product_id)
        subtotal = round(product.price * item.quantity, 2) if product else 0.0
        lines.append(
            CartLine(
                product_id=item.product_id,
                quantity=item.quantity,
                product=product,
                available=product is not None,
                subtotal=subtotal,
            )
        )

    return CartView(
        lines=lines,
        total_items=sum(item.quantity for item in items),
        total_price=round(sum(line.subtotal for line in lines), 2),
        unavailable=[line.product_id for line in lines if not line.available],
    )


class CartViewService:
    """Rozwiazywanie pozycji koszyka na produkty (szuflada koszyka)."""

    def __init__(self, product_client: ProductClient):
        self.product_client = product_client
        self.generations = FetchGeneration()

    def _drop_if_superseded(self, generation: int) -> None:
        if not self.generations.is_current(generation):
            logger.info(f"Dropping cart resolution {generation}, newer one started")
            raise StaleResponse(
                f"Cart resolution {generation} superseded by {self.generations.current}",
                generation,
            )

    def resolve(self, store: CartStore) -> CartView:
        generation = self.generations.begin()
        items = store.items
        requested = [item.product_id for item in items]

        try:
            products = self.product_client.get_products_by_ids(requested)
        except NetworkFailure:
            # blad nieaktualnego zapytania tez jest nieaktualny
            self._drop_if_superseded(generation)
            raise

        self._drop_if_superseded(generation)

        if set(store.product_ids()) != set(requested):
            logger.info(f"Dropping cart resolution {generation}, cart changed meanwhile")
            raise StaleResponse(f"Cart changed during resolution {generation}", generation)

        # ilosci z aktualnego stanu, produkty z tej generacji
        return build_cart_view(store.items, products)
