# movieshelf/schemas/auth.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


# ──────────────── Register ────────────────
class RegisterRequest(BaseModel):
    # Field rules (non-empty name, email syntax, digit in password) are enforced
    # by the credential service so every failing field is reported together.
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class UserPublic(BaseModel):
    """Outward view of a user; the password hash is never part of it."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RegisterResponse(BaseModel):
    message: str = "User created successfully."
    user: UserPublic


# ──────────────── Login ────────────────
class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class TokenResponse(BaseModel):
    message: str = "Login successful."
    token: str
    token_type: str = "bearer"


# ──────────────── Identity ────────────────
class CallerIdentity(BaseModel):
    """Identity embedded in a bearer token and exposed to handlers per request."""
    id: int
    name: str


class ProtectedResponse(BaseModel):
    message: str = "Access granted to protected route."
    user: CallerIdentity
