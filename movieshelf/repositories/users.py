from __future__ import annotations

"""User repository.

Two read shapes:

- **public** (`get_public`, `get_by_email`) → `UserPublic`, no password hash;
  used everywhere outside the login path.
- **with-secret** (`get_with_secret`) → the ORM row including
  `hashed_password`; used only by credential verification.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from movieshelf.db.models.user import User
from movieshelf.schemas.auth import UserPublic


class UserRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _one_by_email(self, email: str) -> Optional[User]:
        res = await self.session.execute(select(User).where(User.email == email))
        return res.scalar_one_or_none()

    # ── Public projection ─────────────────────────────────────
    async def get_public(self, user_id: int) -> Optional[UserPublic]:
        user = await self.session.get(User, user_id)
        return UserPublic.model_validate(user) if user else None

    async def get_by_email(self, email: str) -> Optional[UserPublic]:
        user = await self._one_by_email(email)
        return UserPublic.model_validate(user) if user else None

    async def email_exists(self, email: str) -> bool:
        res = await self.session.execute(select(User.id).where(User.email == email).limit(1))
        return res.first() is not None

    # ── With-secret accessor (verify path only) ───────────────
    async def get_with_secret(self, email: str) -> Optional[User]:
        return await self._one_by_email(email)

    # ── Writes ────────────────────────────────────────────────
    async def add(self, *, name: str, email: str, hashed_password: str) -> User:
        user = User(name=name, email=email, hashed_password=hashed_password)
        self.session.add(user)
        await self.session.flush()
        return user

    async def set_password_hash(self, user: User, hashed_password: str) -> None:
        user.hashed_password = hashed_password
        await self.session.flush()
