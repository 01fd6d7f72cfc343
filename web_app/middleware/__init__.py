"""Middleware for the tinylinks web app."""

from .logging import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
