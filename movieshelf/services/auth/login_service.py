# movieshelf/services/auth/login_service.py
from __future__ import annotations

"""
Login service — MovieShelf
==========================

- **Email + password verification** against the stored bcrypt hash.
- **Neutral errors**: an unknown email and a wrong password both raise
  `InvalidCredentialsException`, so callers cannot enumerate accounts.
- **Token issuance**: a successful login returns a signed access token that
  embeds `{id, name}`.

The hash is read through `UserRepository.get_with_secret`, the only accessor
that exposes it.
"""

from datetime import timedelta
from typing import Optional
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from movieshelf.core.exceptions import InvalidCredentialsException, ValidationException
from movieshelf.core.security import create_access_token, verify_password
from movieshelf.db.models.user import User
from movieshelf.repositories.users import UserRepository
from movieshelf.schemas.auth import LoginRequest, TokenResponse

logger = logging.getLogger("movieshelf.auth")


# ─────────────────────────────────────────────────────────────
# 🔑 Credential verification
# ─────────────────────────────────────────────────────────────
async def verify_credentials(email: str, password: str, db: AsyncSession) -> User:
    """Return the user whose email and password match, else raise 401."""
    user = await UserRepository(db).get_with_secret(email)
    if user is None or not verify_password(password, user.hashed_password):
        logger.warning("Login failed: invalid credentials")
        raise InvalidCredentialsException()
    return user


# ─────────────────────────────────────────────────────────────
# 🪪 Login
# ─────────────────────────────────────────────────────────────
async def login_user(
    payload: LoginRequest,
    db: AsyncSession,
    expires_delta: Optional[timedelta] = None,
) -> TokenResponse:
    """Verify credentials and issue an access token.

    Missing email or password is a 400; bad credentials are a neutral 401.
    """
    if not payload.email or not payload.password:
        raise ValidationException("Email and password are required.")

    user = await verify_credentials(payload.email, payload.password, db)
    token = create_access_token(user.id, user.name, expires_delta=expires_delta)

    logger.info("User %s logged in", user.id)
    return TokenResponse(token=token)


__all__ = ["verify_credentials", "login_user"]
