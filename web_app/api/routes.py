"""API routes implementation."""

import json
from typing import Dict

from fastapi import APIRouter, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from datetime import datetime, timezone

from .schemas import (
    ShortenRequest,
    ShortenResponse,
    UrlRecordResponse,
    DeleteResponse,
    HealthResponse,
    ErrorResponse,
)
from lib.common.url_builder import build_short_url
from lib.common.headers import build_base_url

router = APIRouter()

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def parse_shorten_request(request: Request) -> ShortenRequest:
    """Parse a JSON or form-encoded shorten request.

    An empty body (or JSON null) is an empty request, so the service
    reports it as an invalid URL.

    Raises:
        RequestValidationError: If the body is malformed or has wrong types
    """
    content_type = request.headers.get("content-type", "").lower()

    try:
        if content_type.startswith(FORM_CONTENT_TYPES):
            form = await request.form()
            # File uploads are not fields of a shorten request
            data = {key: value for key, value in form.items() if isinstance(value, str)}
        else:
            raw = await request.body()
            data = json.loads(raw) if raw.strip() else None

        return ShortenRequest.model_validate(data if data is not None else {})

    except (ValueError, ValidationError) as e:
        raise RequestValidationError(
            [{"type": "body_invalid", "loc": ("body",), "msg": str(e)}]
        ) from e


@router.get(
    "/urls",
    response_model=Dict[str, UrlRecordResponse],
    summary="List short URLs",
    description="Return every short URL keyed by code.",
)
async def list_urls(request: Request):
    """List all short URLs."""
    service = request.app.state.service

    records = await service.list_all()

    return {code: record.to_dict() for code, record in records.items()}


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid URL"},
        409: {"model": ErrorResponse, "description": "Short code already exists"},
        500: {"model": ErrorResponse, "description": "Storage error"},
    },
    summary="Create short URL",
    description=(
        "Create a shortened URL. Optionally provide a custom short code. "
        "Accepts a JSON or form-encoded body."
    ),
    openapi_extra={
        "requestBody": {
            "content": {
                "application/json": {"schema": ShortenRequest.model_json_schema()},
                "application/x-www-form-urlencoded": {
                    "schema": ShortenRequest.model_json_schema()
                },
            },
        },
    },
)
async def shorten_url(request: Request):
    """Create a shortened URL."""
    service = request.app.state.service
    config = request.app.state.config

    body = await parse_shorten_request(request)

    result = await service.shorten(url=body.url, custom_code=body.custom_code)

    base_url = build_base_url(
        headers=dict(request.headers),
        fallback_base_url=config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )

    return ShortenResponse(
        code=result.code,
        short_url=build_short_url(result.code, base_url),
    )


@router.delete(
    "/urls/{short_code}",
    response_model=DeleteResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Short code not found"},
    },
    summary="Delete short URL",
)
async def delete_url(request: Request, short_code: str):
    """Delete a short URL."""
    service = request.app.state.service

    await service.delete_code(short_code)

    return DeleteResponse(success=True)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service can read and write its store.",
)
async def health_check(request: Request):
    """Health check endpoint for monitoring."""
    service = request.app.state.service

    health = await service.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        store="healthy" if health["store"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
