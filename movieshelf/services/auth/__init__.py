"""Credential store: registration, credential verification and password changes."""

from movieshelf.services.auth.account_service import change_password
from movieshelf.services.auth.login_service import login_user, verify_credentials
from movieshelf.services.auth.signup_service import register_user

__all__ = ["register_user", "verify_credentials", "login_user", "change_password"]
