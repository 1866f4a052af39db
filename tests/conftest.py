# tests/conftest.py
"""
Global test bootstrap
- Pins a test configuration (secret, cheap bcrypt cost, in-memory SQLite)
  BEFORE any `movieshelf` module reads settings
- Pulls in the shared fixtures (db, app, users)
"""

from __future__ import annotations

import os

# ──────────────────────────────────────────────────────────────────────────────
# 🌱 Test env
#   NOTE: These are set BEFORE importing the app/fixtures so they take effect.
# ──────────────────────────────────────────────────────────────────────────────
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("ENV", "test")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("LOG_TO_FILE", "0")

# ──────────────────────────────────────────────────────────────────────────────
# 📦 Pull in the rest of the fixtures (db, app, users)
# ──────────────────────────────────────────────────────────────────────────────
from tests.fixtures.db import *     # noqa: F401,F403,E402
from tests.fixtures.app import *    # noqa: F401,F403,E402
from tests.fixtures.users import *  # noqa: F401,F403,E402
