# app/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, field_validator
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List

MAX_QUANTITY = 99
ALL_CATEGORIES = "All"


class StorefrontModel(BaseModel):
    """Wspolna konfiguracja: camelCase na wejsciu/wyjsciu, snake_case w kodzie."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _as_str(value: Any) -> Any:
    # upstream potrafi zwrocic id jako liczbe
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class Review(StorefrontModel):
    id: str
    user_name: str = ""
    rating: int = Field(0, ge=0, le=5)
    comment: str = ""
    date: str = ""

    normalize_id = field_validator("id", mode="before")(_as_str)


class Product(StorefrontModel):
    id: str
    title: str
    description: str = ""
    price: float
    images: List[str] = Field(default_factory=list)
    category: str = ""
    specifications: Dict[str, str] = Field(default_factory=dict)
    reviews: List[Review] = Field(default_factory=list)

    normalize_id = field_validator("id", mode="before")(_as_str)

    @field_validator("specifications", mode="before")
    @classmethod
    def specs_as_str(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {str(k): str(v) for k, v in value.items()}
        return value


class CartItem(StorefrontModel):
    """Pozycja koszyka - product_id unikalne w koszyku."""

    product_id: str
    quantity: int = Field(..., ge=1, le=MAX_QUANTITY)

    normalize_id = field_validator("product_id", mode="before")(_as_str)


class FilterState(StorefrontModel):
    """Filtry katalogu + numer strony. category == "All" oznacza brak filtra."""

    category: str = ALL_CATEGORIES
    search: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    page: int = Field(1, ge=1)


class ProductPage(StorefrontModel):
    products: List[Product]
    total_pages: int
    page: int


class CatalogPage(ProductPage):
    """Strona katalogu razem z metadanymi paginacji."""

    filters: FilterState
    query: str
    pages: List[int]
    prev: str | None = None
    next: str | None = None


class CartOut(StorefrontModel):
    items: List[CartItem]
    total_items: int


class CartItemStatus(StorefrontModel):
    product_id: str
    in_cart: bool
    quantity: int


class AddItemIn(StorefrontModel):
    product_id: str = Field(..., min_length=1)

    normalize_id = field_validator("product_id", mode="before")(_as_str)


class QuantityIn(StorefrontModel):
    # < 1 usuwa pozycje, wiec bez dolnego ograniczenia
    quantity: int


class CartLine(StorefrontModel):
    product_id: str
    quantity: int
    product: Product | None = None
    available: bool
    subtotal: float


class CartView(StorefrontModel):
    lines: List[CartLine]
    total_items: int
    total_price: float
    unavailable: List[str]
