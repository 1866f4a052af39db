# movieshelf/core/jwt.py
from __future__ import annotations

"""
MovieShelf — JWT helpers
========================
- `decode_token`: signature + expiry checks, mapped to `InvalidTokenException`
- `verify_access_token`: decode and return the embedded `CallerIdentity`
- `get_bearer_token`: strict `Bearer <token>` extraction (case-insensitive scheme)

Notes
-----
- Token *creation* lives in `movieshelf.core.security`.
- Expiry is enforced as `exp <= now`, so a token issued with a zero lifetime
  is rejected even within the second it was minted.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional
import logging

from jose import ExpiredSignatureError, JWTError, jwt

from movieshelf.core.config import settings
from movieshelf.core.exceptions import InvalidTokenException, MissingTokenException
from movieshelf.schemas.auth import CallerIdentity

logger = logging.getLogger("movieshelf.auth")


# ─────────────────────────────────────────────────────────────
# 🔓 Decode JWT Token
# ─────────────────────────────────────────────────────────────
def decode_token(token: str) -> Dict[str, Any]:
    """Decode and validate a JWT.

    Raises
    ------
    InvalidTokenException
      - bad signature / malformed token
      - expired token (including zero-lifetime tokens)
      - missing `exp`
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY.get_secret_value(),
            algorithms=[settings.JWT_ALGORITHM],
            options={"require_exp": True, "verify_aud": False},
        )
    except ExpiredSignatureError:
        logger.info("Token expired.")
        raise InvalidTokenException("Token has expired.")
    except JWTError as e:
        logger.warning("JWT decoding failed: %s", e)
        raise InvalidTokenException("Invalid token.")

    now = int(datetime.now(timezone.utc).timestamp())
    if int(payload["exp"]) <= now:
        logger.info("Token expired.")
        raise InvalidTokenException("Token has expired.")

    return payload


def verify_access_token(token: str) -> CallerIdentity:
    """Decode a token and return the identity `{id, name}` it carries."""
    payload = decode_token(token)
    user_id = payload.get("id", payload.get("sub"))
    name = payload.get("name")
    if user_id is None or name is None:
        logger.warning("Token payload missing identity claims.")
        raise InvalidTokenException("Invalid token.")
    try:
        return CallerIdentity(id=int(user_id), name=str(name))
    except (TypeError, ValueError):
        logger.warning("Token payload has a malformed user id.")
        raise InvalidTokenException("Invalid token.")


# ─────────────────────────────────────────────────────────────
# 📥 Extract Bearer Token from Authorization Header
# ─────────────────────────────────────────────────────────────
def get_bearer_token(auth_header: Optional[str]) -> str:
    """Extract the token from a raw `Authorization` header value."""
    if not auth_header:
        logger.warning("Missing Authorization header.")
        raise MissingTokenException()

    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        logger.warning("Malformed Authorization header.")
        raise MissingTokenException()

    return parts[1].strip()


__all__ = [
    "decode_token",
    "verify_access_token",
    "get_bearer_token",
]
