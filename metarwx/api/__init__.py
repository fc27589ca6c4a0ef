"""API routes package."""

from .routes_metar import router as metar_router

__all__ = [
    "metar_router",
]
