"""Data models for URL shortener."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current UTC time truncated to milliseconds."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def format_timestamp(value: datetime) -> str:
    """Format a datetime as ISO-8601 UTC with milliseconds (``...T12:00:00.000Z``)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, accepting a trailing ``Z``."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass
class UrlRecord:
    """A stored short URL: destination, creation time and visit count."""

    url: str
    created: datetime = field(default_factory=utc_now)
    clicks: int = 0

    def to_dict(self) -> dict:
        """Convert to the persisted JSON shape."""
        return {
            "url": self.url,
            "created": format_timestamp(self.created),
            "clicks": self.clicks,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UrlRecord":
        """Create from the persisted JSON shape.

        Raises:
            ValueError: If a field has the wrong type or clicks is negative
        """
        url = data["url"]
        created = data["created"]
        clicks = data.get("clicks") or 0

        if not isinstance(url, str):
            raise ValueError(f"url must be a string, got {type(url).__name__}")
        if not isinstance(created, (str, datetime)):
            raise ValueError(f"created must be a string, got {type(created).__name__}")
        # bool is an int subclass
        if not isinstance(clicks, int) or isinstance(clicks, bool) or clicks < 0:
            raise ValueError(f"clicks must be a non-negative integer, got {clicks!r}")

        return cls(
            url=url,
            created=created if isinstance(created, datetime) else parse_timestamp(created),
            clicks=clicks,
        )
