"""
MovieShelf — SQLAlchemy Base registry
=====================================

Import all ORM models so their tables are registered on `Base.metadata`
before `create_all` runs (startup and test fixtures).

Tip: Keep this file import-only; no runtime logic.
"""

from movieshelf.db.base_class import Base
from movieshelf.db.models.user import User
from movieshelf.db.models.movie import Movie

__all__ = ["Base", "User", "Movie"]
