# app/services/catalog_service.py
from app.domain.schemas import CatalogPage, FilterState
from app.services.product_client import ProductClient
from app.services.query_builder import build_query, page_query, page_window
from app.utils.settings import PAGE_SIZE


class CatalogService:
    """Strona katalogu: produkty z gatewaya + paginacja gotowa do wyrenderowania."""

    def __init__(self, product_client: ProductClient, page_size: int | None = None):
        self.product_client = product_client
        self.page_size = page_size or PAGE_SIZE

    def browse(self, filters: FilterState) -> CatalogPage:
        result = self.product_client.list_products(
            page=filters.page,
            page_size=self.page_size,
            filters=filters,
        )

        page = filters.page
        total_pages = result.total_pages

        return CatalogPage(
            products=result.products,
            total_pages=total_pages,
            page=page,
            filters=filters,
            query=build_query(filters),
            pages=page_window(page, total_pages),
            prev=page_query(filters, page - 1) if page > 1 else None,
            next=page_query(filters, page + 1) if page < total_pages else None,
        )
