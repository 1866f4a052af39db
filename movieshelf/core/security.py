# movieshelf/core/security.py
from __future__ import annotations

"""
MovieShelf — Password Hashing & Token Issuance
==============================================
- Salted one-way password hashing (Passlib bcrypt, configurable cost)
- Signed, time-limited **access tokens** (python-jose, HS* secret)

Decoding and Bearer parsing live in `movieshelf.core.jwt`; the request-level
gate lives in `movieshelf.core.dependencies`.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from uuid import uuid4
import logging

from jose import jwt
from passlib.context import CryptContext

from movieshelf.core.config import settings

# ───────────────────────────────────────────────
# 🔐 Security Constants and Setup
# ───────────────────────────────────────────────
ALGORITHM: str = settings.JWT_ALGORITHM

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)
logger = logging.getLogger("movieshelf.security")


# ───────────────────────────────────────────────
# 🔐 Password Hashing Utilities
# ───────────────────────────────────────────────
def get_password_hash(password: str) -> str:
    """Return a salted hash using Passlib's bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Constant-time verify of a plaintext password against a stored hash."""
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Unrecognised/corrupt hash
        logger.warning("Stored password hash could not be parsed")
        return False


# ───────────────────────────────────────────────
# 🪪 JWT — Access Token Generation
# ───────────────────────────────────────────────
def create_access_token(
    user_id: int,
    name: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Create a signed **access token** embedding the caller identity.

    Claims: `sub` (user id as string), `id`, `name`, `iat`, `exp`, `jti`.
    `expires_delta` defaults to `ACCESS_TOKEN_EXPIRE_MINUTES`; a zero delta
    yields a token that is already expired.
    """
    now = datetime.now(timezone.utc).replace(microsecond=0)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    expire = now + expires_delta

    payload: Dict[str, Any] = {
        "sub": str(user_id),
        "id": int(user_id),
        "name": name,
        "iat": now,
        "exp": expire,
        "jti": str(uuid4()),
    }
    token = jwt.encode(payload, settings.JWT_SECRET_KEY.get_secret_value(), algorithm=ALGORITHM)
    logger.debug("Issued access token for user %s (expires %s)", user_id, expire.isoformat())
    return token


__all__ = [
    "pwd_context",
    "get_password_hash",
    "verify_password",
    "create_access_token",
]
