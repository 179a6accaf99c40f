# app/services/cart_store.py
import json
from typing import Any, Dict, List

from pydantic import ValidationError
from redis.exceptions import RedisError

from app.domain.errors import ParseFailure
from app.domain.schemas import CartItem, MAX_QUANTITY
from app.services.cart_storage import CartStorage
from app.utils.logging import get_logger

logger = get_logger(__name__)

CART_STORAGE_KEY = "cart"


def _clamp(quantity: int) -> int:
    return max(1, min(quantity, MAX_QUANTITY))


def decode_cart(raw: str) -> List[CartItem]:
    """
    Parsuje zapisany koszyk: lista {productId, quantity}.
    Rzuca ParseFailure przy zlym JSON-ie albo zlym ksztalcie rekordu.
    Duplikaty product_id sa scalane, ilosci przycinane do [1, 99].
    """
    try:
        parsed = json.loads(raw)
    except ValueError as e:
        raise ParseFailure(f"Cart data is not valid JSON: {e}") from e

    if not isinstance(parsed, list):
        raise ParseFailure("Cart data is not a list")

    merged: Dict[str, int] = {}
    for record in parsed:
        if not isinstance(record, dict):
            raise ParseFailure(f"Cart record is not an object: {record!r}")

        quantity = record.get("quantity")
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise ParseFailure(f"Cart record has invalid quantity: {record!r}")

        try:
            item = CartItem(product_id=record.get("productId"), quantity=_clamp(quantity))
        except ValidationError as e:
            raise ParseFailure(f"Cart record has invalid shape: {record!r}") from e

        # dict zachowuje kolejnosc wstawiania
        merged[item.product_id] = _clamp(merged.get(item.product_id, 0) + item.quantity)

    return [CartItem(product_id=pid, quantity=qty) for pid, qty in merged.items()]


def encode_cart(items: List[CartItem]) -> str:
    return json.dumps([item.model_dump(by_alias=True) for item in items])


class CartStore:
    """
    Stan koszyka jednej sesji aplikacji.

    - jeden pisarz: mutacje ida po kolei pod blokada (app.state.cart_lock)
    - kazda mutacja jawnie zapisuje caly koszyk przez CartStorage
    - nowy stan liczony na kopii, podmieniany dopiero po udanym zapisie
      (blad zapisu = stary stan w pamieci i w magazynie)
    """

    def __init__(self, storage: CartStorage, items: List[CartItem] | None = None):
        self.storage = storage
        self._items: List[CartItem] = list(items or [])

    @classmethod
    def load(cls, storage: CartStorage) -> "CartStore":
        """Odtwarza koszyk z magazynu; brak lub uszkodzone dane -> pusty koszyk."""
        try:
            raw = storage.load(CART_STORAGE_KEY)
        except (RedisError, OSError) as e:
            logger.warning(f"Cart storage unavailable, starting empty: {e}")
            return cls(storage)

        if not raw:
            return cls(storage)

        try:
            items = decode_cart(raw)
        except ParseFailure as e:
            logger.warning(f"Failed to parse cart data, starting empty: {e}")
            return cls(storage)

        logger.info(f"Loaded cart with {len(items)} items")
        return cls(storage, items)

    # =====================================================
    # QUERY
    # =====================================================
    @property
    def items(self) -> List[CartItem]:
        return [item.model_copy() for item in self._items]

    @property
    def total_items(self) -> int:
        return sum(item.quantity for item in self._items)

    def is_in_cart(self, product_id: str) -> bool:
        return any(item.product_id == product_id for item in self._items)

    def get_quantity(self, product_id: str) -> int:
        for item in self._items:
            if item.product_id == product_id:
                return item.quantity
        return 0

    def product_ids(self) -> List[str]:
        return [item.product_id for item in self._items]

    # =====================================================
    # COMMANDS
    # =====================================================
    def add_to_cart(self, product_id: str) -> None:
        updated = self.items

        for item in updated:
            if item.product_id == product_id:
                item.quantity = _clamp(item.quantity + 1)
                break
        else:
            updated.append(CartItem(product_id=product_id, quantity=1))

        self._commit(updated)

    def remove_from_cart(self, product_id: str) -> None:
        updated = [item for item in self.items if item.product_id != product_id]
        self._commit(updated)

    def update_quantity(self, product_id: str, quantity: int) -> None:
        if quantity < 1:
            self.remove_from_cart(product_id)
            return

        # nieznany product_id - ignorujemy, update nie dodaje pozycji
        updated = self.items
        for item in updated:
            if item.product_id == product_id:
                item.quantity = _clamp(quantity)

        self._commit(updated)

    def clear_cart(self) -> None:
        self._commit([])

    def _commit(self, updated: List[CartItem]) -> None:
        self._persist(updated)
        self._items = updated

    def _persist(self, items: List[CartItem]) -> None:
        self.storage.save(CART_STORAGE_KEY, encode_cart(items))

    def snapshot(self) -> Dict[str, Any]:
        return {"items": self.items, "total_items": self.total_items}
