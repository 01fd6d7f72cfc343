"""Exceptions raised by the URL shortener core.

The web layer maps each of these onto an HTTP status and a JSON ``error``
message (see ``web_app/errors.py``).
"""


class URLShortenerError(Exception):
    """Base class for URL shortener errors."""

    pass


class InvalidURLError(URLShortenerError):
    """Raised when a URL to shorten is empty or not http(s)."""

    pass


class CodeAlreadyExistsError(URLShortenerError):
    """Raised when a custom short code is already taken."""

    pass


class URLNotFoundError(URLShortenerError):
    """Raised when an operation targets a short code that does not exist."""

    pass


class CodeGenerationError(URLShortenerError):
    """Raised when no free short code could be generated."""

    pass


class StoreError(URLShortenerError):
    """Base class for persistence failures."""

    pass


class StoreCorruptedError(StoreError):
    """Raised when the snapshot file cannot be read or parsed."""

    pass


class StoreWriteError(StoreError):
    """Raised when the snapshot file cannot be written."""

    pass
