"""
Error translation for the product API.

Every failure that escapes a route, a dependency, or the router itself ends
up here and leaves as ``{"error": {"name", "message", "statusCode"}}``.
Unexpected exceptions become a plain 500; their details only reach the log.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .errors import ProductApiError, route_not_found
from .models import ErrorBody, ErrorResponse

logger = logging.getLogger(__name__)

INTERNAL_ERROR_NAME = "InternalServerError"
INTERNAL_ERROR_MESSAGE = "Internal Server Error"


def error_response(name: str, message: str, status_code: int) -> JSONResponse:
    body = ErrorResponse(error=ErrorBody(name=name, message=message, status_code=status_code))
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


def translate(exc: ProductApiError) -> JSONResponse:
    return error_response(exc.name, exc.message, exc.status_code)


def register_error_handlers(app: FastAPI) -> None:
    """Register the error translator on ``app``."""

    @app.exception_handler(ProductApiError)
    async def handle_api_error(_request: Request, exc: ProductApiError) -> JSONResponse:
        logger.warning("Error: %s", exc.message)
        return translate(exc)

    @app.exception_handler(StarletteHTTPException)
    async def handle_unmatched_route(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # the router only raises these for unknown paths (404) and methods (405)
        err = route_not_found(request.method, request.url.path)
        logger.warning("Error: %s", err.message)
        return translate(err)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unexpected error: %s", type(exc).__name__, exc_info=exc)
        return error_response(INTERNAL_ERROR_NAME, INTERNAL_ERROR_MESSAGE, 500)
