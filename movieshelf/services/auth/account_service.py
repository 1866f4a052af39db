# movieshelf/services/auth/account_service.py
from __future__ import annotations

"""Account maintenance for an existing user."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from movieshelf.core.exceptions import ValidationException
from movieshelf.core.security import get_password_hash, verify_password
from movieshelf.db.models.user import User
from movieshelf.repositories.users import UserRepository
from movieshelf.services.auth.signup_service import is_valid_password

logger = logging.getLogger("movieshelf.auth")


async def change_password(user: User, new_password: str, db: AsyncSession) -> bool:
    """Set a new password for `user`.

    The hash is recomputed only when the password actually changes. Returns
    `True` when a new hash was stored, `False` when the password was unchanged.
    """
    if not is_valid_password(new_password):
        raise ValidationException(
            "Invalid password.",
            details=[
                {"field": "password", "message": "Password must be non-empty and contain at least one digit."}
            ],
        )

    if verify_password(new_password, user.hashed_password):
        logger.debug("Password unchanged for user %s; keeping existing hash", user.id)
        return False

    await UserRepository(db).set_password_hash(user, get_password_hash(new_password))
    await db.commit()
    logger.info("Password changed for user %s", user.id)
    return True


__all__ = ["change_password"]
