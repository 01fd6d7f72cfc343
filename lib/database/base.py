"""Abstract base class for URL shortener store implementations."""

from abc import ABC, abstractmethod
from typing import Dict, Optional

from .models import UrlRecord


class URLStoreBase(ABC):
    """Abstract base class for short code -> UrlRecord storage."""

    @abstractmethod
    async def initialize(self) -> None:
        """Prepare the backing storage (create it if absent)."""
        pass

    @abstractmethod
    async def load(self) -> Dict[str, UrlRecord]:
        """Read the whole store.

        Returns:
            Mapping of short code to record
        """
        pass

    @abstractmethod
    async def save(self, records: Dict[str, UrlRecord]) -> None:
        """Replace the whole store with ``records``."""
        pass

    @abstractmethod
    async def list_all(self) -> Dict[str, UrlRecord]:
        """Return every stored record keyed by short code."""
        pass

    @abstractmethod
    async def get(self, short_code: str) -> Optional[UrlRecord]:
        """Get the record for a short code.

        Args:
            short_code: The short code to lookup

        Returns:
            The record if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, short_code: str, record: UrlRecord) -> bool:
        """Insert a record unless the short code is already taken.

        Args:
            short_code: The short code to use
            record: The record to store

        Returns:
            True if created, False if short_code already exists
        """
        pass

    @abstractmethod
    async def delete(self, short_code: str) -> bool:
        """Delete a record.

        Returns:
            True if deleted, False if not found
        """
        pass

    @abstractmethod
    async def increment(self, short_code: str) -> Optional[UrlRecord]:
        """Increment the click count for a short code.

        Returns:
            The updated record, or None if not found
        """
        pass

    async def exists(self, short_code: str) -> bool:
        """Check if a short code is taken."""
        return await self.get(short_code) is not None

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is usable."""
        pass

    async def close(self) -> None:
        """Release store resources."""
        pass
