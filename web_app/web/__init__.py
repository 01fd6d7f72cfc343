"""Homepage and short link redirects."""

from .routes import router as web_router

__all__ = ["web_router"]
