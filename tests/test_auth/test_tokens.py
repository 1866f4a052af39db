from datetime import timedelta

import pytest
from jose import jwt

from movieshelf.core.config import settings
from movieshelf.core.dependencies import authenticate_header
from movieshelf.core.exceptions import InvalidTokenException, MissingTokenException
from movieshelf.core.jwt import decode_token, get_bearer_token, verify_access_token
from movieshelf.core.security import create_access_token, get_password_hash, verify_password


# ─────────────────────────────────────────────────────────────
# 🪪 Issue / verify
# ─────────────────────────────────────────────────────────────
def test_issue_and_verify_roundtrip():
    token = create_access_token(7, "Ann")
    identity = verify_access_token(token)
    assert identity.id == 7
    assert identity.name == "Ann"


def test_claims_carry_identity_and_expiry():
    token = create_access_token(7, "Ann", expires_delta=timedelta(minutes=5))
    claims = decode_token(token)
    assert claims["sub"] == "7"
    assert claims["id"] == 7
    assert claims["name"] == "Ann"
    assert claims["exp"] - claims["iat"] == 300
    assert claims["jti"]


def test_zero_expiry_token_is_rejected():
    token = create_access_token(7, "Ann", expires_delta=timedelta(0))
    with pytest.raises(InvalidTokenException) as exc:
        verify_access_token(token)
    assert exc.value.message == "Token has expired."


def test_wrong_secret_rejected():
    token = jwt.encode({"id": 1, "name": "x", "exp": 4102444800}, "not-the-secret", algorithm="HS256")
    with pytest.raises(InvalidTokenException):
        verify_access_token(token)


def test_token_without_exp_rejected():
    token = jwt.encode(
        {"id": 1, "name": "x"},
        settings.JWT_SECRET_KEY.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )
    with pytest.raises(InvalidTokenException):
        verify_access_token(token)


def test_token_without_identity_rejected():
    token = jwt.encode(
        {"exp": 4102444800},
        settings.JWT_SECRET_KEY.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )
    with pytest.raises(InvalidTokenException):
        verify_access_token(token)


def test_garbage_token_rejected():
    with pytest.raises(InvalidTokenException):
        verify_access_token("not.a.jwt")


# ─────────────────────────────────────────────────────────────
# 🛡️ Gateway
# ─────────────────────────────────────────────────────────────
def test_bearer_extraction():
    assert get_bearer_token("Bearer abc") == "abc"
    assert get_bearer_token("BEARER abc") == "abc"


@pytest.mark.parametrize("header", [None, "", "abc", "Bearer", "Basic abc", "Bearer a b"])
def test_bearer_extraction_rejects(header):
    with pytest.raises(MissingTokenException):
        get_bearer_token(header)


def test_authenticate_header_returns_identity():
    token = create_access_token(3, "Cy")
    identity = authenticate_header(f"Bearer {token}")
    assert (identity.id, identity.name) == (3, "Cy")


def test_authenticate_header_invalid_token():
    with pytest.raises(InvalidTokenException):
        authenticate_header("Bearer not.a.jwt")


# ─────────────────────────────────────────────────────────────
# 🔐 Password hashing
# ─────────────────────────────────────────────────────────────
def test_hash_is_salted_and_verifiable():
    h1 = get_password_hash("pass1")
    h2 = get_password_hash("pass1")
    assert h1 != h2
    assert verify_password("pass1", h1)
    assert not verify_password("pass2", h1)


def test_verify_password_handles_missing_or_corrupt_hash():
    assert verify_password("pass1", None) is False
    assert verify_password("pass1", "") is False
    assert verify_password("pass1", "not-a-bcrypt-hash") is False
