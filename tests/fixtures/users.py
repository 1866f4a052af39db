from __future__ import annotations

from typing import Awaitable, Callable, Dict, Optional
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from movieshelf.core.security import create_access_token, get_password_hash
from movieshelf.db.models.user import User


# ──────────────────────────────────────────────────────────────
# 🧪 Factory: Create Test User
# ──────────────────────────────────────────────────────────────
@pytest.fixture
def create_test_user(db_session: AsyncSession) -> Callable[..., Awaitable[User]]:
    """
    Insert a user directly and attach a convenient bearer token at `user.token`.
    """
    async def _create(
        name: str = "Test User",
        email: Optional[str] = None,
        password: str = "password1",
    ) -> User:
        user = User(
            name=name,
            email=email or f"user_{uuid4().hex[:8]}@example.com",
            hashed_password=get_password_hash(password),
        )
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)

        user.token = create_access_token(user.id, user.name)
        return user

    return _create


def auth_headers(user: User) -> Dict[str, str]:
    return {"Authorization": f"Bearer {user.token}"}


@pytest.fixture
async def user_a(create_test_user) -> User:
    return await create_test_user(name="Alice", email="alice@example.com")


@pytest.fixture
async def user_b(create_test_user) -> User:
    return await create_test_user(name="Bob", email="bob@example.com")
