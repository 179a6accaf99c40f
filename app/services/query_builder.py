# app/services/query_builder.py
"""
Filtry katalogu <-> query string w URL-u.

Kolejnosc parametrow jest stala: search, category, minPrice, maxPrice, page.
category == "All" nigdy nie trafia do URL-a.
"""
import math
from typing import List, Tuple
from urllib.parse import parse_qsl, urlencode

from app.domain.schemas import ALL_CATEGORIES, FilterState

CATEGORIES = ["All", "Electronics", "Home", "Kitchen", "Sports", "Outdoor", "Books"]

PAGE_WINDOW = 5


def format_price(value: float) -> str:
    # 10.0 -> "10", 9.99 -> "9.99"
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _parse_price(raw: str | None) -> float | None:
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _parse_page(raw: str | None) -> int:
    try:
        page = int(raw) if raw is not None else 1
    except ValueError:
        return 1
    return page if page >= 1 else 1


def query_params(filters: FilterState) -> List[Tuple[str, str]]:
    params: List[Tuple[str, str]] = []

    if filters.search:
        params.append(("search", filters.search))
    if filters.category and filters.category != ALL_CATEGORIES:
        params.append(("category", filters.category))
    if filters.min_price is not None:
        params.append(("minPrice", format_price(filters.min_price)))
    if filters.max_price is not None:
        params.append(("maxPrice", format_price(filters.max_price)))
    params.append(("page", str(filters.page)))

    return params


def build_query(filters: FilterState) -> str:
    return urlencode(query_params(filters))


def parse_query(query: str) -> FilterState:
    """
    Odwrotnosc build_query. Pierwsze wystapienie parametru wygrywa,
    nieczytelne ceny i strony wracaja do wartosci domyslnych.
    """
    values = {}
    for key, value in parse_qsl(query.lstrip("?"), keep_blank_values=True):
        values.setdefault(key, value)

    return FilterState(
        category=values.get("category") or ALL_CATEGORIES,
        search=values.get("search") or None,
        min_price=_parse_price(values.get("minPrice")),
        max_price=_parse_price(values.get("maxPrice")),
        page=_parse_page(values.get("page")),
    )


def page_query(filters: FilterState, page: int) -> str:
    """Query string innej strony z zachowaniem pozostalych filtrow."""
    return build_query(filters.model_copy(update={"page": page}))


def page_window(current: int, total: int, size: int = PAGE_WINDOW) -> List[int]:
    """
    Numery stron widoczne w paginacji: max `size` stron wokol biezacej.
    Pusta lista gdy jest tylko jedna strona.
    """
    if total <= 1:
        return []
    if total <= size:
        return list(range(1, total + 1))

    half = size // 2
    if current <= half + 1:
        start = 1
    elif current >= total - half:
        start = total - size + 1
    else:
        start = current - half

    return list(range(start, start + size))
