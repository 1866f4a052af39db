"""
Signup service — new user registration
======================================

Key behaviors
-------------
- **Duplicate check first**: an email that already exists (exact match) fails
  with `DuplicateEmailException` before any field validation.
- **All failures reported**: name, email format and password format are
  checked together; `ValidationException.details` lists every failing field.
- **Hash before persist**: the bcrypt hash is computed explicitly before the
  row is inserted; the raw password never reaches the ORM.
- **Race-safe**: a unique-constraint violation on insert (a concurrent signup
  with the same email) maps to `DuplicateEmailException`.

The returned value is the public projection; the hash never leaves this module.
"""

from __future__ import annotations

from typing import Dict, List, Optional
import logging
import re

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from movieshelf.core.exceptions import DuplicateEmailException, ValidationException
from movieshelf.core.security import get_password_hash
from movieshelf.repositories.users import UserRepository
from movieshelf.schemas.auth import RegisterRequest, UserPublic

logger = logging.getLogger("movieshelf.auth")

# ─────────────────────────────────────────────────────────────
# 🔧 Field rules
# ─────────────────────────────────────────────────────────────
# local@domain.tld, no whitespace, exactly one "@"
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]{2,}$")
_DIGIT_RE = re.compile(r"\d")


def is_valid_email(email: Optional[str]) -> bool:
    return bool(email) and bool(_EMAIL_RE.match(email))


def is_valid_password(password: Optional[str]) -> bool:
    """Non-empty and contains at least one digit."""
    return bool(password) and bool(_DIGIT_RE.search(password))


def collect_field_errors(
    name: Optional[str], email: Optional[str], password: Optional[str]
) -> List[Dict[str, str]]:
    errors: List[Dict[str, str]] = []
    if not name or not name.strip():
        errors.append({"field": "name", "message": "Name is required."})
    if not is_valid_email(email):
        errors.append({"field": "email", "message": "Invalid email format."})
    if not is_valid_password(password):
        errors.append(
            {"field": "password", "message": "Password must be non-empty and contain at least one digit."}
        )
    return errors


# ─────────────────────────────────────────────────────────────
# 📝 Register a new user
# ─────────────────────────────────────────────────────────────
async def register_user(payload: RegisterRequest, db: AsyncSession) -> UserPublic:
    """Create a user account and return its public view.

    Steps
    -----
    1) **Duplicate check** on the exact email (409).
    2) **Validate** every field, collecting all failures (400).
    3) **Hash** the password.
    4) **Insert + commit**; a unique violation on commit is a duplicate (409).
    """
    repo = UserRepository(db)

    # 1) Duplicate check
    if payload.email and await repo.email_exists(payload.email):
        logger.warning("Signup rejected: email already registered")
        raise DuplicateEmailException()

    # 2) Field validation
    errors = collect_field_errors(payload.name, payload.email, payload.password)
    if errors:
        raise ValidationException("Invalid user data.", details=errors)

    # 3) Hash before persist
    hashed = get_password_hash(payload.password)

    # 4) Insert
    try:
        user = await repo.add(name=payload.name, email=payload.email, hashed_password=hashed)
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.warning("Signup race: email registered concurrently")
        raise DuplicateEmailException()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Failed to persist new user")
        raise

    await db.refresh(user)
    logger.info("User registered (id %s)", user.id)
    return UserPublic.model_validate(user)


__all__ = ["register_user", "collect_field_errors", "is_valid_email", "is_valid_password"]
