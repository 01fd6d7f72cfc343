"""Core business logic for URL shortener."""

from .shortcode import ShortCodeGenerator
from .service import URLShortenerService, ShortenResult

__all__ = ["ShortCodeGenerator", "URLShortenerService", "ShortenResult"]
