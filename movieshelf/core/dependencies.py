# movieshelf/core/dependencies.py
from __future__ import annotations

"""
Request dependencies — MovieShelf
=================================

The per-request **auth gate**. Protected routes depend on
`get_current_identity`, which:

1) reads the raw `Authorization` header,
2) requires the `Bearer <token>` form (`MissingTokenException` otherwise),
3) verifies the token (`InvalidTokenException` on bad signature / expiry),
4) exposes the caller identity `{id, name}` for the rest of the request.

The identity is request-scoped: it lives on `request.state` and in the
dependency result only. Token decoding lives in `movieshelf.core.jwt`; this
module only *uses* it.
"""

from typing import Optional
import logging

from fastapi import Header, Request

from movieshelf.core.jwt import get_bearer_token, verify_access_token
from movieshelf.schemas.auth import CallerIdentity

logger = logging.getLogger("movieshelf.auth")

__all__ = ["authenticate_header", "get_current_identity"]


def authenticate_header(authorization: Optional[str]) -> CallerIdentity:
    """Run the gate on a raw header value and return the caller identity."""
    token = get_bearer_token(authorization)
    return verify_access_token(token)


async def get_current_identity(
    request: Request,
    authorization: Optional[str] = Header(default=None, include_in_schema=False),
) -> CallerIdentity:
    """FastAPI dependency: authenticate the caller from the bearer token."""
    identity = authenticate_header(authorization)

    request.state.user_id = identity.id
    request.state.identity = identity

    logger.debug("[Auth] Authenticated user %s", identity.id)
    return identity
