"""JSON API routes and share link route."""

from .routes import router as api_router, share_router

__all__ = ["api_router", "share_router"]
