"""Map URL shortener exceptions onto JSON error responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from lib.exceptions import (
    URLShortenerError,
    InvalidURLError,
    CodeAlreadyExistsError,
    URLNotFoundError,
    CodeGenerationError,
    StoreError,
)

logger = logging.getLogger("tinylinks.web")

# status code, client-facing message
ERROR_RESPONSES = {
    InvalidURLError: (400, "Invalid URL"),
    CodeAlreadyExistsError: (409, "Code already exists"),
    URLNotFoundError: (404, "URL not found"),
    CodeGenerationError: (500, "Unable to generate short code"),
    StoreError: (500, "Storage error"),
}


def _lookup(exc: Exception):
    for cls in type(exc).__mro__:
        if cls in ERROR_RESPONSES:
            return ERROR_RESPONSES[cls]
    return 500, "Internal server error"


async def handle_shortener_error(request: Request, exc: URLShortenerError) -> JSONResponse:
    status_code, message = _lookup(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {status_code}: {exc}")
    return JSONResponse(status_code=status_code, content={"error": message})


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(f"{request.method} {request.url.path} -> 400: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Invalid request"})


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers for the shortener error taxonomy."""
    app.add_exception_handler(URLShortenerError, handle_shortener_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
