# app/api/routers/products.py
from typing import List

from fastapi import APIRouter, Depends, Query, Request

from app.api.dependencies import get_catalog_service, get_product_client
from app.domain.schemas import CatalogPage, Product
from app.services.catalog_service import CatalogService
from app.services.product_client import ProductClient
from app.services.query_builder import CATEGORIES, parse_query

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=CatalogPage)
def list_products(
    request: Request,
    catalog: CatalogService = Depends(get_catalog_service),
):
    # page, category, search, minPrice, maxPrice - ta sama semantyka co URL sklepu
    filters = parse_query(request.url.query)
    return catalog.browse(filters)


@router.get("/categories", response_model=List[str])
def list_categories():
    return CATEGORIES


@router.get("/search", response_model=List[Product])
def search_products(
    q: str = Query(..., min_length=1),
    client: ProductClient = Depends(get_product_client),
):
    return client.search_products(q)


@router.get("/{product_id}", response_model=Product)
def get_product(
    product_id: str,
    client: ProductClient = Depends(get_product_client),
):
    # NotFound -> 404 w error_handlers
    return client.get_product_by_id(product_id)
