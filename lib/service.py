"""Business logic service for URL shortener."""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from .shortcode import ShortCodeGenerator
from .database.base import URLStoreBase
from .database.models import UrlRecord, utc_now
from .common.validators import is_valid_url
from .exceptions import (
    CodeAlreadyExistsError,
    CodeGenerationError,
    InvalidURLError,
    URLNotFoundError,
)


@dataclass
class ShortenResult:
    """Outcome of a successful shorten call."""

    code: str
    record: UrlRecord


class URLShortenerService:
    """Service layer for URL shortening business logic."""

    def __init__(
        self,
        store: URLStoreBase,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        max_collision_retries: int = 10,
        fallback_code_length: int = 8,
    ):
        """Initialize URL shortener service.

        Args:
            store: Store instance
            short_code_generator: Optional short code generator
            logger: Optional logger
            max_collision_retries: Random codes to try before the UUID fallback
            fallback_code_length: Length of the UUID-derived fallback code
        """
        self.store = store
        self.generator = short_code_generator or ShortCodeGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.max_collision_retries = max_collision_retries
        self.fallback_code_length = fallback_code_length

    async def list_all(self) -> Dict[str, UrlRecord]:
        """Return every short URL keyed by code."""
        return await self.store.list_all()

    async def shorten(
        self,
        url: str,
        custom_code: Optional[str] = None,
    ) -> ShortenResult:
        """Create a new short URL.

        Args:
            url: The original long URL
            custom_code: Optional custom short code; an empty string means
                "generate one"

        Returns:
            ShortenResult with the code and the stored record

        Raises:
            InvalidURLError: If url is empty or not http(s)
            CodeAlreadyExistsError: If custom_code is taken
            CodeGenerationError: If no free code could be generated
        """
        is_valid, error = is_valid_url(url)
        if not is_valid:
            self.logger.info(f"Rejected URL {url!r}: {error}")
            raise InvalidURLError(error)

        record = UrlRecord(url=url, created=utc_now(), clicks=0)

        if custom_code:
            if not await self.store.create(custom_code, record):
                self.logger.info(f"Custom code already exists: {custom_code}")
                raise CodeAlreadyExistsError(f"Short code '{custom_code}' already exists")
            code = custom_code
        else:
            code = await self._create_with_generated_code(record)

        self.logger.info(f"Created short URL: {code} -> {url}")
        return ShortenResult(code=code, record=record)

    async def delete_code(self, short_code: str) -> None:
        """Delete a short URL.

        Raises:
            URLNotFoundError: If the code does not exist
        """
        if not await self.store.delete(short_code):
            self.logger.warning(f"Cannot delete, short code not found: {short_code}")
            raise URLNotFoundError(f"Short code '{short_code}' not found")

        self.logger.info(f"Deleted short URL: {short_code}")

    async def resolve(self, short_code: str) -> Optional[str]:
        """Get the destination for a short code and count the visit.

        Args:
            short_code: The short code to lookup

        Returns:
            Original URL or None if not found
        """
        record = await self.store.increment(short_code)

        if record is None:
            self.logger.warning(f"Short code not found: {short_code}")
            return None

        self.logger.debug(f"Resolved {short_code} -> {record.url} (clicks={record.clicks})")
        return record.url

    async def get_record(self, short_code: str) -> Optional[UrlRecord]:
        """Get a record without counting a visit."""
        return await self.store.get(short_code)

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        store_healthy = await self.store.health_check()

        return {
            "store": store_healthy,
            "overall": store_healthy,
        }

    async def _create_with_generated_code(self, record: UrlRecord) -> str:
        """Store ``record`` under a fresh random code.

        Random codes of the default length are tried first; after
        ``max_collision_retries`` collisions a single longer UUID-derived
        code is tried.

        Raises:
            CodeGenerationError: If every candidate was taken
        """
        for attempt in range(self.max_collision_retries):
            code = self.generator.generate_random()

            if await self.store.create(code, record):
                if attempt:
                    self.logger.debug(f"Generated code after {attempt + 1} attempts: {code}")
                return code

        code = self.generator.generate_from_uuid(length=self.fallback_code_length)
        self.logger.warning(
            f"{self.max_collision_retries} random codes collided, trying fallback code {code}"
        )

        if await self.store.create(code, record):
            return code

        raise CodeGenerationError("Unable to generate unique short code after multiple attempts")

    async def close(self) -> None:
        """Close the store."""
        await self.store.close()
