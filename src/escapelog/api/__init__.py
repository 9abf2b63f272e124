"""Escape Log API package."""

from escapelog.api.routes import review_router, session_router

__all__ = ["review_router", "session_router"]
