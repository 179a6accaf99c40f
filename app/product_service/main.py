# product_service/main.py
# dev mock zrodla produktow, kontrakt jak json-server
from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException, Query, Response

PRODUCTS: List[Dict[str, Any]] = [
    {
        "id": 1,
        "title": "Mechanical Keyboard",
        "description": "Tenkeyless keyboard with brown switches.",
        "price": 199.99,
        "images": ["/images/keyboard-1.jpg", "/images/keyboard-2.jpg"],
        "category": "Electronics",
        "specifications": {"Switches": "Brown", "Layout": "TKL"},
        "reviews": [
            {"id": 1, "userName": "anna", "rating": 5, "comment": "Great feel.", "date": "2024-03-02"},
            {"id": 2, "userName": "marek", "rating": 4, "comment": "A bit loud.", "date": "2024-04-11"},
        ],
    },
    {
        "id": 2,
        "title": "Wireless Mouse",
        "description": "Ergonomic mouse, 3 months on one battery.",
        "price": 49.5,
        "images": ["/images/mouse-1.jpg"],
        "category": "Electronics",
        "specifications": {"DPI": "1600", "Connection": "2.4 GHz"},
        "reviews": [],
    },
    {
        "id": 3,
        "title": "27in Monitor",
        "description": "IPS panel, 1440p.",
        "price": 899.0,
        "images": ["/images/monitor-1.jpg"],
        "category": "Electronics",
        "specifications": {"Size": "27in", "Resolution": "2560x1440"},
        "reviews": [
            {"id": 3, "userName": "ola", "rating": 5, "comment": "Sharp.", "date": "2024-01-20"},
        ],
    },
    {
        "id": 4,
        "title": "Desk Lamp",
        "description": "LED lamp with dimmer.",
        "price": 35.0,
        "images": ["/images/lamp-1.jpg"],
        "category": "Home",
        "specifications": {"Power": "8 W"},
        "reviews": [],
    },
    {
        "id": 5,
        "title": "Throw Blanket",
        "description": "Wool blend, 130x170 cm.",
        "price": 59.0,
        "images": ["/images/blanket-1.jpg"],
        "category": "Home",
        "specifications": {"Material": "Wool blend"},
        "reviews": [],
    },
    {
        "id": 6,
        "title": "Chef Knife",
        "description": "8 inch stainless steel.",
        "price": 79.0,
        "images": ["/images/knife-1.jpg"],
        "category": "Kitchen",
        "specifications": {"Blade": "8in", "Steel": "X50CrMoV15"},
        "reviews": [
            {"id": 4, "userName": "tomek", "rating": 4, "comment": "Holds an edge.", "date": "2024-02-14"},
        ],
    },
    {
        "id": 7,
        "title": "Cast Iron Pan",
        "description": "Pre-seasoned, 26 cm.",
        "price": 45.0,
        "images": ["/images/pan-1.jpg"],
        "category": "Kitchen",
        "specifications": {"Diameter": "26 cm"},
        "reviews": [],
    },
    {
        "id": 8,
        "title": "Yoga Mat",
        "description": "Non-slip, 6 mm.",
        "price": 25.0,
        "images": ["/images/mat-1.jpg"],
        "category": "Sports",
        "specifications": {"Thickness": "6 mm"},
        "reviews": [],
    },
    {
        "id": 9,
        "title": "Running Shoes",
        "description": "Lightweight road shoes.",
        "price": 120.0,
        "images": ["/images/shoes-1.jpg"],
        "category": "Sports",
        "specifications": {"Drop": "8 mm"},
        "reviews": [],
    },
    {
        "id": 10,
        "title": "Camping Tent",
        "description": "Two person, three season.",
        "price": 249.0,
        "images": ["/images/tent-1.jpg"],
        "category": "Outdoor",
        "specifications": {"Capacity": "2", "Weight": "1.9 kg"},
        "reviews": [],
    },
    {
        "id": 11,
        "title": "Headlamp",
        "description": "300 lumen, USB rechargeable.",
        "price": 29.99,
        "images": ["/images/headlamp-1.jpg"],
        "category": "Outdoor",
        "specifications": {"Output": "300 lm"},
        "reviews": [],
    },
    {
        "id": 12,
        "title": "Python Cookbook",
        "description": "Recipes for mastering Python 3.",
        "price": 39.99,
        "images": ["/images/book-1.jpg"],
        "category": "Books",
        "specifications": {"Pages": "706"},
        "reviews": [],
    },
]


def _matches_text(product: Dict[str, Any], text: str) -> bool:
    text = text.lower()
    haystack = " ".join(
        str(product.get(field, "")) for field in ("title", "description", "category")
    )
    return text in haystack.lower()


def create_product_app(products: List[Dict[str, Any]] | None = None) -> FastAPI:
    catalog = PRODUCTS if products is None else products
    app = FastAPI(title="Product Service (dev mock)")

    @app.get("/products")
    def list_products(
        response: Response,
        category: str | None = None,
        title_like: str | None = None,
        price_gte: float | None = None,
        price_lte: float | None = None,
        q: str | None = None,
        id: List[str] | None = Query(None),
        page: int | None = Query(None, alias="_page", ge=1),
        limit: int | None = Query(None, alias="_limit", ge=1),
    ):
        result = list(catalog)

        if id:
            wanted = set(id)
            result = [p for p in result if str(p["id"]) in wanted]
        if category:
            result = [p for p in result if p.get("category") == category]
        if title_like:
            result = [p for p in result if title_like.lower() in str(p.get("title", "")).lower()]
        if price_gte is not None:
            result = [p for p in result if p.get("price", 0) >= price_gte]
        if price_lte is not None:
            result = [p for p in result if p.get("price", 0) <= price_lte]
        if q:
            result = [p for p in result if _matches_text(p, q)]

        # licznik przefiltrowanego zbioru, nie calego katalogu
        response.headers["X-Total-Count"] = str(len(result))

        if page is not None:
            size = limit or 10
            start = (page - 1) * size
            result = result[start:start + size]
        elif limit is not None:
            result = result[:limit]

        return result

    @app.get("/products/{product_id}")
    def get_product(product_id: str):
        for product in catalog:
            if str(product["id"]) == product_id:
                return product
        raise HTTPException(status_code=404, detail="Product not found")

    return app


app = create_product_app()
