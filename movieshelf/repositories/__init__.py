"""
Repository package for data access layers.

Repositories wrap an `AsyncSession` and own the SQL shape of each query;
business rules (validation, patch/replace semantics, token issuance) live in
`movieshelf.services`.
"""

from movieshelf.repositories.movies import MovieRepository
from movieshelf.repositories.users import UserRepository

__all__ = ["MovieRepository", "UserRepository"]
