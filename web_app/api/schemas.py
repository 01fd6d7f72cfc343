"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ShortenRequest(BaseModel):
    """Request to shorten a URL.

    The URL is validated by the service so that a missing or malformed
    URL yields the same ``Invalid URL`` error.
    """

    url: Optional[str] = Field(None, description="The URL to shorten (http or https)")
    custom_code: Optional[str] = Field(
        None,
        alias="customCode",
        description="Optional custom short code; empty means generate one",
    )

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {"url": "https://example.com/very/long/path/to/resource"},
                {"url": "https://github.com/user/repo", "customCode": "myrepo"},
            ]
        },
    }


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""

    code: str = Field(..., description="The short code")
    short_url: str = Field(..., alias="shortUrl", description="The complete short URL")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {"code": "aB3xY9", "shortUrl": "http://localhost:3000/aB3xY9"}
            ]
        },
    }


class UrlRecordResponse(BaseModel):
    """A stored short URL as returned by the list endpoint."""

    url: str
    created: str = Field(..., description="Creation time, ISO-8601 UTC")
    clicks: int


class DeleteResponse(BaseModel):
    """Response after deleting a short URL."""

    success: bool = True


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    store: str = Field(..., description="Store status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error message")
