"""Storage layer for URL shortener."""

from .base import URLStoreBase
from .json_store import JSONFileStore
from .models import UrlRecord

__all__ = ["URLStoreBase", "JSONFileStore", "UrlRecord"]
