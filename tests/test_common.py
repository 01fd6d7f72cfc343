"""Tests for common utilities and models."""

import json
import logging
from datetime import datetime, timezone

import pytest

from lib.common.validators import is_valid_url
from lib.common.headers import extract_forwarded_headers, build_base_url
from lib.common.url_builder import build_short_url
from lib.common.logging_config import JSONFormatter
from lib.database.models import UrlRecord, format_timestamp, parse_timestamp


class TestValidators:
    """Test validation utilities."""

    def test_valid_urls(self):
        """Test valid URL validation."""
        for url in (
            "https://example.com",
            "http://example.com/path",
            "http://x",
            "https://sub.example.com:8080/path?query=value",
        ):
            valid, _ = is_valid_url(url)
            assert valid, url

    def test_invalid_urls(self):
        """Test invalid URL validation."""
        valid, error = is_valid_url("")
        assert not valid
        assert "required" in error.lower()

        valid, error = is_valid_url(None)
        assert not valid

        valid, error = is_valid_url("not-a-url")
        assert not valid

        valid, error = is_valid_url("ftp://example.com")
        assert not valid
        assert "http" in error.lower()

    def test_scheme_is_case_sensitive(self):
        valid, _ = is_valid_url("HTTPS://example.com")
        assert not valid

    def test_requires_content_after_scheme(self):
        valid, _ = is_valid_url("http://")
        assert not valid

    def test_line_terminator_after_scheme_is_invalid(self):
        for url in ("http://\n", "http://\r", "https://\u2028", "https://\u2029x"):
            valid, _ = is_valid_url(url)
            assert not valid, repr(url)

    def test_text_after_first_character_is_not_checked(self):
        valid, _ = is_valid_url("http://x\r\nanything")
        assert valid


class TestHeaders:
    """Test header utilities."""

    def test_extract_forwarded_headers(self):
        """Test forwarded header extraction."""
        headers = {
            "X-Forwarded-Proto": "https",
            "X-Forwarded-Host": "example.com",
            "X-Forwarded-For": "1.2.3.4",
        }

        result = extract_forwarded_headers(headers)
        assert result["forwarded_proto"] == "https"
        assert result["forwarded_host"] == "example.com"
        assert set(result) == {"forwarded_proto", "forwarded_host"}

    def test_build_base_url_from_forwarded_headers(self):
        headers = {
            "X-Forwarded-Proto": "https",
            "X-Forwarded-Host": "sho.rt",
        }

        base_url = build_base_url(
            headers=headers,
            fallback_base_url="http://localhost:3000",
            request_scheme="http",
            request_host="internal:3000",
        )

        assert base_url == "https://sho.rt"

    def test_build_base_url_from_request(self):
        base_url = build_base_url(
            headers={},
            fallback_base_url="http://fallback",
            request_scheme="http",
            request_host="localhost:3000",
        )

        assert base_url == "http://localhost:3000"

    def test_build_base_url_fallback(self):
        """Test base URL fallback."""
        base_url = build_base_url(
            headers={},
            fallback_base_url="http://localhost:3000/"
        )

        assert base_url == "http://localhost:3000"


class TestURLBuilder:
    """Test URL building utilities."""

    def test_build_short_url(self):
        assert build_short_url("abc123", "https://example.com") == "https://example.com/abc123"
        assert build_short_url("abc123", "https://example.com/") == "https://example.com/abc123"


class TestUrlRecord:
    """Test the persisted record shape."""

    def test_to_dict(self):
        created = datetime(2024, 1, 1, 12, 0, 0, 123000, tzinfo=timezone.utc)
        record = UrlRecord(url="https://example.com/a", created=created, clicks=3)

        assert record.to_dict() == {
            "url": "https://example.com/a",
            "created": "2024-01-01T12:00:00.123Z",
            "clicks": 3,
        }

    def test_from_dict(self):
        record = UrlRecord.from_dict({
            "url": "https://example.com/a",
            "created": "2024-01-01T12:00:00.000Z",
            "clicks": 7,
        })

        assert record.url == "https://example.com/a"
        assert record.created == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
        assert record.clicks == 7

    def test_from_dict_missing_clicks(self):
        record = UrlRecord.from_dict({"url": "http://x", "created": "2024-01-01T00:00:00.000Z"})
        assert record.clicks == 0

    @pytest.mark.parametrize("data", [
        {"url": "http://x", "created": None, "clicks": 0},
        {"url": "http://x", "created": 1700000000, "clicks": 0},
        {"url": 5, "created": "2024-01-01T00:00:00.000Z", "clicks": 0},
        {"url": "http://x", "created": "2024-01-01T00:00:00.000Z", "clicks": -1},
        {"url": "http://x", "created": "2024-01-01T00:00:00.000Z", "clicks": "3"},
    ])
    def test_from_dict_rejects_wrong_types(self, data):
        with pytest.raises(ValueError):
            UrlRecord.from_dict(data)

    def test_timestamp_format(self):
        naive = datetime(2024, 5, 6, 7, 8, 9)
        assert format_timestamp(naive) == "2024-05-06T07:08:09.000Z"
        assert parse_timestamp("2024-05-06T07:08:09.000Z") == naive.replace(tzinfo=timezone.utc)


class TestJSONFormatter:
    def test_format_is_json(self):
        record = logging.LogRecord(
            "tinylinks", logging.INFO, __file__, 1, 'Created "abc"', None, None
        )

        entry = json.loads(JSONFormatter().format(record))

        assert entry["level"] == "INFO"
        assert entry["logger"] == "tinylinks"
        assert entry["message"] == 'Created "abc"'
