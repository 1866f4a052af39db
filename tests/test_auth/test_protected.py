from datetime import timedelta

import pytest
from httpx import AsyncClient
from jose import jwt

from movieshelf.core.security import create_access_token
from tests.fixtures.users import auth_headers

PROTECTED = "/api/auth/protected"


@pytest.mark.anyio
async def test_protected_returns_identity(async_client: AsyncClient, user_a):
    resp = await async_client.get(PROTECTED, headers=auth_headers(user_a))
    assert resp.status_code == 200
    assert resp.json() == {
        "message": "Access granted to protected route.",
        "user": {"id": user_a.id, "name": "Alice"},
    }


@pytest.mark.anyio
async def test_scheme_is_case_insensitive(async_client: AsyncClient, user_a):
    resp = await async_client.get(PROTECTED, headers={"Authorization": f"bearer {user_a.token}"})
    assert resp.status_code == 200


@pytest.mark.anyio
@pytest.mark.parametrize(
    "header",
    [None, "", "Bearer", "Token abc", "Basic dXNlcjpwYXNz", "Bearer a b"],
)
async def test_missing_or_malformed_header(async_client: AsyncClient, header):
    headers = {} if header is None else {"Authorization": header}
    resp = await async_client.get(PROTECTED, headers=headers)
    assert resp.status_code == 401
    assert resp.headers["www-authenticate"] == "Bearer"
    assert resp.json()["detail"] == "Authentication token missing or malformed."


@pytest.mark.anyio
async def test_invalid_signature(async_client: AsyncClient, user_a):
    forged = jwt.encode(
        {"sub": str(user_a.id), "id": user_a.id, "name": "Alice", "exp": 4102444800},
        "some-other-secret",
        algorithm="HS256",
    )
    resp = await async_client.get(PROTECTED, headers={"Authorization": f"Bearer {forged}"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid token."


@pytest.mark.anyio
async def test_expired_token_rejected(async_client: AsyncClient, user_a):
    token = create_access_token(user_a.id, user_a.name, expires_delta=timedelta(0))
    resp = await async_client.get(PROTECTED, headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Token has expired."
