# app/services/product_client.py
import math
from typing import Any, Dict, List, Tuple
from urllib.parse import quote

import requests
from pydantic import ValidationError
from requests import RequestException

from app.domain.errors import NetworkFailure, NotFound, ParseFailure
from app.domain.schemas import ALL_CATEGORIES, FilterState, Product, ProductPage
from app.utils.settings import HTTP_TIMEOUT, PAGE_SIZE, PRODUCT_API_URL
from app.utils.logging import get_logger

logger = get_logger(__name__)


def normalize_product(record: Any) -> Product:
    """
    Jeden kanoniczny typ id (str) na granicy z upstreamem,
    rowniez dla reviews[].id. Product.id musi sie porownywac z CartItem.product_id.
    """
    if not isinstance(record, dict):
        raise ParseFailure(f"Product record is not an object: {record!r}")
    try:
        return Product.model_validate(record)
    except ValidationError as e:
        raise ParseFailure(f"Invalid product record {record.get('id')!r}: {e}") from e


def normalize_products(records: List[Any]) -> List[Product]:
    products = []
    for record in records:
        try:
            products.append(normalize_product(record))
        except ParseFailure as e:
            logger.warning(f"Skipping malformed product: {e}")
    return products


def filter_params(filters: FilterState | None) -> List[Tuple[str, str]]:
    """FilterState -> parametry json-server (category, title_like, price_gte, price_lte)."""
    if filters is None:
        return []

    params: List[Tuple[str, str]] = []
    if filters.category and filters.category != ALL_CATEGORIES:
        params.append(("category", filters.category))
    if filters.search:
        params.append(("title_like", filters.search))
    if filters.min_price is not None:
        params.append(("price_gte", str(filters.min_price)))
    if filters.max_price is not None:
        params.append(("price_lte", str(filters.max_price)))
    return params


class ProductClient:
    """
    Gateway do REST-owego zrodla produktow.
    Bez retry: blad sieci ma trafic do uzytkownika jako NetworkFailure.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ):
        self.base_url = (base_url or PRODUCT_API_URL).rstrip("/")
        self.timeout = timeout or HTTP_TIMEOUT
        self.session = session or requests.Session()

    def _get(self, path: str, params: List[Tuple[str, str]] | None = None):
        url = f"{self.base_url}{path}"
        logger.info(f"ProductClient GET {url} params={params or []}")

        try:
            return self.session.get(url, params=params, timeout=self.timeout)
        except RequestException as e:
            logger.error(f"ProductClient GET {url} failed: {e}")
            raise NetworkFailure(f"Product API unreachable: {e}") from e

    @staticmethod
    def _ensure_success(resp, what: str) -> None:
        if not 200 <= resp.status_code < 300:
            logger.error(f"Failed to {what}: HTTP {resp.status_code}")
            raise NetworkFailure(f"Failed to {what}", status_code=resp.status_code)

    @staticmethod
    def _json(resp, what: str) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            raise ParseFailure(f"Failed to {what}: body is not JSON") from e

    def _list(self, params: List[Tuple[str, str]], what: str) -> List[Dict[str, Any]]:
        resp = self._get("/products", params)
        self._ensure_success(resp, what)
        body = self._json(resp, what)
        if not isinstance(body, list):
            raise ParseFailure(f"Failed to {what}: expected a list")
        return body

    @staticmethod
    def _total_count(resp) -> int | None:
        raw = resp.headers.get("X-Total-Count")
        if raw is None:
            return None
        try:
            return int(raw)
        except ValueError:
            return None

    def list_products(
        self,
        page: int = 1,
        page_size: int | None = None,
        filters: FilterState | None = None,
    ) -> ProductPage:
        page_size = page_size or PAGE_SIZE
        params = filter_params(filters)

        resp = self._get("/products", [("_page", str(page)), ("_limit", str(page_size))] + params)
        self._ensure_success(resp, "fetch products")
        body = self._json(resp, "fetch products")
        if not isinstance(body, list):
            raise ParseFailure("Failed to fetch products: expected a list")

        total = self._total_count(resp)
        if total is None:
            # brak licznika - liczymy caly przefiltrowany zbior
            logger.info("X-Total-Count missing, counting filtered set")
            total = len(self._list(params, "count products"))

        return ProductPage(
            products=normalize_products(body),
            total_pages=math.ceil(total / page_size),
            page=page,
        )

    def get_product_by_id(self, product_id: str) -> Product:
        resp = self._get(f"/products/{quote(str(product_id), safe='')}")

        if not 200 <= resp.status_code < 300:
            logger.info(f"Product {product_id} not found (HTTP {resp.status_code})")
            raise NotFound(product_id)

        return normalize_product(self._json(resp, "fetch product"))

    def get_products_by_ids(self, product_ids: List[str]) -> List[Product]:
        if not product_ids:
            return []

        body = self._list([("id", str(pid)) for pid in product_ids], "fetch cart products")
        by_id = {p.id: p for p in normalize_products(body)}

        # kolejnosc jak w zapytaniu; brakujace po prostu pomijamy
        return [by_id[str(pid)] for pid in product_ids if str(pid) in by_id]

    def search_products(self, query: str) -> List[Product]:
        resp = self._get("/products", [("q", query)])
        self._ensure_success(resp, "search products")

        try:
            body = resp.json()
        except ValueError:
            return []
        if not isinstance(body, list):
            return []
        return normalize_products(body)
