"""JSON snapshot file implementation of the URL store."""

import asyncio
import json
import logging
import os
import stat
import tempfile
from typing import Dict, Optional

from .base import URLStoreBase
from .models import UrlRecord
from ..exceptions import StoreError, StoreCorruptedError, StoreWriteError


class JSONFileStore(URLStoreBase):
    """Whole-file JSON store.

    The snapshot is a single JSON object mapping short code to
    ``{"url", "created", "clicks"}``. Every operation reads the full
    snapshot and every mutation writes it back, all under one
    ``asyncio.Lock`` so a process never loses its own updates.
    """

    def __init__(
        self,
        path: str,
        strict: bool = True,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the file store.

        Args:
            path: Path of the JSON snapshot file
            strict: Raise StoreCorruptedError on an unreadable snapshot
                instead of treating it as empty
            logger: Optional logger instance
        """
        self.path = os.path.abspath(path)
        self.strict = strict
        self.logger = logger or logging.getLogger(__name__)
        self._lock = asyncio.Lock()

        # Mode for a newly created snapshot, as open() would give it
        umask = os.umask(0)
        os.umask(umask)
        self._new_file_mode = 0o666 & ~umask

    async def initialize(self) -> None:
        """Create an empty snapshot if absent and validate an existing one."""
        async with self._lock:
            if not os.path.exists(self.path):
                self.logger.info(f"Creating empty store at {self.path}")
                await asyncio.to_thread(self._write_sync, {})
                return

            records = await asyncio.to_thread(self._read_sync)
            self.logger.info(f"Loaded {len(records)} short URLs from {self.path}")

    async def load(self) -> Dict[str, UrlRecord]:
        async with self._lock:
            return await asyncio.to_thread(self._read_sync)

    async def save(self, records: Dict[str, UrlRecord]) -> None:
        async with self._lock:
            await asyncio.to_thread(self._write_sync, records)

    async def list_all(self) -> Dict[str, UrlRecord]:
        return await self.load()

    async def get(self, short_code: str) -> Optional[UrlRecord]:
        records = await self.load()
        return records.get(short_code)

    async def create(self, short_code: str, record: UrlRecord) -> bool:
        """Insert a record unless the short code is already taken.

        The existence check and the write happen under the same lock.

        Args:
            short_code: The short code to use
            record: The record to store

        Returns:
            True if created, False if short_code already exists
        """
        async with self._lock:
            # Check if short code already exists
            records = await asyncio.to_thread(self._read_sync)
            if short_code in records:
                self.logger.debug(f"Short code already exists: {short_code}")
                return False

            records[short_code] = record
            await asyncio.to_thread(self._write_sync, records)
            return True

    async def delete(self, short_code: str) -> bool:
        async with self._lock:
            records = await asyncio.to_thread(self._read_sync)
            if short_code not in records:
                return False

            del records[short_code]
            await asyncio.to_thread(self._write_sync, records)
            return True

    async def increment(self, short_code: str) -> Optional[UrlRecord]:
        async with self._lock:
            records = await asyncio.to_thread(self._read_sync)
            record = records.get(short_code)
            if record is None:
                return None

            # Count the visit and persist before returning
            record.clicks += 1
            await asyncio.to_thread(self._write_sync, records)
            self.logger.debug(f"Incremented clicks for {short_code}: {record.clicks}")
            return record

    async def health_check(self) -> bool:
        """Check that the snapshot is readable and its directory writable."""
        try:
            await self.load()
        except StoreError as e:
            self.logger.error(f"Health check failed: {e}")
            return False
        return os.access(os.path.dirname(self.path), os.W_OK)

    def _read_sync(self) -> Dict[str, UrlRecord]:
        """Read and parse the snapshot. Caller holds the lock."""
        # First run: start from an empty snapshot
        if not os.path.exists(self.path):
            self._write_sync({})
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)

            # Top level must be an object keyed by short code
            if not isinstance(raw, dict):
                raise ValueError(f"expected a JSON object, got {type(raw).__name__}")

            return {code: UrlRecord.from_dict(data) for code, data in raw.items()}

        except (OSError, ValueError, KeyError, TypeError) as e:
            if self.strict:
                self.logger.error(f"Store at {self.path} is unreadable: {e}")
                raise StoreCorruptedError(f"Cannot read store {self.path}: {e}") from e

            # Lenient mode: behave as if the store were empty
            self.logger.warning(f"Store at {self.path} is unreadable, treating as empty: {e}")
            return {}

    def _write_sync(self, records: Dict[str, UrlRecord]) -> None:
        """Serialize the snapshot to a temp file and move it into place."""
        # Serialize
        payload = {code: record.to_dict() for code, record in records.items()}
        directory = os.path.dirname(self.path)

        try:
            os.makedirs(directory, exist_ok=True)

            # Keep the snapshot's permissions (mkstemp always creates 0600)
            mode = self._snapshot_mode()

            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".urls-", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(payload, f, indent=2)
                os.chmod(tmp_path, mode)

                # Atomic swap: readers see the old or the new snapshot, never a partial one
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise

        except OSError as e:
            self.logger.error(f"Error writing store {self.path}: {e}")
            raise StoreWriteError(f"Cannot write store {self.path}: {e}") from e

    def _snapshot_mode(self) -> int:
        """Mode of the existing snapshot, or 0666 minus the umask for a new one."""
        try:
            return stat.S_IMODE(os.stat(self.path).st_mode)
        except OSError:
            return self._new_file_mode
