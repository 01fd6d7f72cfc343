"""Validation utilities for URL shortener."""

import re
from typing import Tuple

# Case-sensitive scheme, then at least one character that is not a line terminator.
URL_PATTERN = re.compile(r"^https?://[^\n\r\u2028\u2029]+")


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a URL to shorten.

    Only the scheme is checked; the URL is not normalized and its
    reachability is not tested.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"

    if not URL_PATTERN.match(url):
        return False, "URL must start with http:// or https://"

    return True, ""
