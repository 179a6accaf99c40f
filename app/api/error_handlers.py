# app/api/error_handlers.py
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.domain.errors import NetworkFailure, NotFound, ParseFailure, StaleResponse
from app.utils.logging import get_logger

logger = get_logger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(NotFound)
    async def not_found_handler(request: Request, exc: NotFound):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": str(exc), "productId": exc.product_id},
        )

    @app.exception_handler(NetworkFailure)
    async def network_failure_handler(request: Request, exc: NetworkFailure):
        logger.error(f"Network failure on {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": str(exc), "upstreamStatus": exc.status_code},
        )

    @app.exception_handler(ParseFailure)
    async def parse_failure_handler(request: Request, exc: ParseFailure):
        logger.error(f"Unexpected upstream data on {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": str(exc)},
        )

    @app.exception_handler(StaleResponse)
    async def stale_response_handler(request: Request, exc: StaleResponse):
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": str(exc), "stale": True},
        )
