"""Middleware for the content shortener web app."""

from .logging import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
