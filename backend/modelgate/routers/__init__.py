"""API routers for modelgate."""

from .providers import router as providers_router

__all__ = ["providers_router"]
