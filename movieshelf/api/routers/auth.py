"""
Auth API — register, login, identity probe
==========================================

POST /auth/register
    Create an account; 201 with the public user view. 409 on a taken email,
    400 listing every invalid field.

POST /auth/login
    Exchange email + password for a bearer token. 400 when a field is
    missing, neutral 401 on bad credentials. Token responses are never cached.

GET /auth/protected
    Echo the caller identity carried by the bearer token.

Validation, hashing and token issuance live in `movieshelf.services.auth`.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from movieshelf.core.dependencies import get_current_identity
from movieshelf.db.session import get_async_db
from movieshelf.schemas.auth import (
    CallerIdentity,
    LoginRequest,
    ProtectedResponse,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
)
from movieshelf.services.auth import login_user, register_user

router = APIRouter(prefix="/auth", tags=["Authentication"])


def set_sensitive_cache(response: Response) -> None:
    """Mark a token-bearing response as non-cacheable."""
    response.headers["Cache-Control"] = "no-store"
    response.headers["Pragma"] = "no-cache"


# ──────────────────────────────────────────────────────
# 👤 Register
# ──────────────────────────────────────────────────────
@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new account",
)
async def register(
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_async_db),
) -> RegisterResponse:
    user = await register_user(payload, db)
    return RegisterResponse(user=user)


# ──────────────────────────────────────────────────────
# 🔑 Login
# ──────────────────────────────────────────────────────
@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Log in with email and password",
)
async def login(
    payload: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_async_db),
) -> TokenResponse:
    set_sensitive_cache(response)
    return await login_user(payload, db)


# ──────────────────────────────────────────────────────
# 🛡️ Protected probe
# ──────────────────────────────────────────────────────
@router.get(
    "/protected",
    response_model=ProtectedResponse,
    summary="Return the authenticated caller",
)
async def protected(identity: CallerIdentity = Depends(get_current_identity)) -> ProtectedResponse:
    return ProtectedResponse(user=identity)
