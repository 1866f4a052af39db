"""
🧭 MovieShelf • API Router Aggregator
====================================

Exports the combined `router` and each sub-router.

    from movieshelf.api.routers import router
    app.include_router(router, prefix=settings.API_PREFIX)
"""

from fastapi import APIRouter

from .auth import router as auth_router
from .movies import router as movies_router


def build_router() -> APIRouter:
    """Compose auth (`/auth/...`) and movies (`/movies/...`) into one router."""
    r = APIRouter()
    r.include_router(auth_router)
    r.include_router(movies_router)
    return r


router = build_router()


__all__ = ["router", "build_router", "auth_router", "movies_router"]
