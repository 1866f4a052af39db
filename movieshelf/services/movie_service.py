"""
Movie service — owner-scoped CRUD
=================================

Business rules for a user's movie catalogue on top of
`movieshelf.repositories.movies.MovieRepository`.

Key behaviors
-------------
- **Ownership**: every operation takes the caller id; `owner_id` comes from
  the caller on create and is never writable afterwards.
- **Not-found is a value**: `get_by_id`, `partial_update` and `replace`
  return `None`, `delete` returns `False`, when the row is missing or owned
  by someone else. Store faults raise.
- **PATCH vs PUT**: `partial_update` touches only keys present in the patch;
  `replace` overwrites every optional field, resetting absent or falsy ones
  to their defaults.
- **Validation**: title non-empty, rating within [0, 10]; `ValidationException`
  otherwise.

Concurrency
-----------
Load-then-mutate sequences are not atomic; two concurrent writers to the same
row resolve last-write-wins.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from movieshelf.core.exceptions import ValidationException
from movieshelf.db.models.movie import RATING_MAX, RATING_MIN, Movie
from movieshelf.repositories.movies import MovieRepository
from movieshelf.schemas.movie import MovieOut

logger = logging.getLogger("movieshelf.movies")

# Fields a client may write; `id` and `owner_id` are deliberately absent.
WRITABLE_FIELDS = ("title", "director", "genre", "year", "rating", "watched")


# ─────────────────────────────────────────────────────────────
# 🔧 Validation helpers
# ─────────────────────────────────────────────────────────────
def _title_error(title: Any) -> Optional[Dict[str, str]]:
    if title is None or not isinstance(title, str) or not title.strip():
        return {"field": "title", "message": "Title is required."}
    return None


def _rating_error(rating: Any) -> Optional[Dict[str, str]]:
    if rating is None:
        return None
    if not (RATING_MIN <= float(rating) <= RATING_MAX):
        return {"field": "rating", "message": "Rating must be between 0 and 10."}
    return None


def _raise_if(errors: List[Optional[Dict[str, str]]]) -> None:
    found = [e for e in errors if e]
    if found:
        raise ValidationException(found[0]["message"], details=found)


def _writable(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: data[k] for k in WRITABLE_FIELDS if k in data}


# ─────────────────────────────────────────────────────────────
# 🎬 Service
# ─────────────────────────────────────────────────────────────
class MovieService:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self.repo = MovieRepository(db)

    async def _commit(self, movie: Movie, action: str) -> MovieOut:
        """Commit the unit of work and return the fresh public view."""
        try:
            await self.db.commit()
            await self.db.refresh(movie)
        except SQLAlchemyError:
            await self.db.rollback()
            logger.exception("Failed to %s movie (owner %s)", action, movie.owner_id)
            raise
        return MovieOut.model_validate(movie)

    # ── Create ───────────────────────────────────────────────
    async def create(self, data: Mapping[str, Any], owner_id: int) -> MovieOut:
        fields = _writable(data)
        _raise_if([_title_error(fields.get("title")), _rating_error(fields.get("rating"))])

        if fields.get("watched") is None:
            fields["watched"] = False

        movie = await self.repo.add(Movie(**fields, owner_id=owner_id))
        out = await self._commit(movie, "create")
        logger.info("Movie created: %r (id %s) by user %s", out.title, out.id, owner_id)
        return out

    # ── Read ─────────────────────────────────────────────────
    async def list(self, owner_id: int, filters: Optional[Mapping[str, Any]] = None) -> List[MovieOut]:
        filters = {k: v for k, v in (filters or {}).items() if v is not None}
        movies = await self.repo.list(owner_id, filters)
        logger.info("Listed %d movies for user %s with filters %s", len(movies), owner_id, filters)
        return [MovieOut.model_validate(m) for m in movies]

    async def get_by_id(self, movie_id: int, owner_id: int) -> Optional[MovieOut]:
        movie = await self.repo.get(movie_id, owner_id)
        if movie is None:
            logger.warning("Movie %s not found for user %s", movie_id, owner_id)
            return None
        return MovieOut.model_validate(movie)

    # ── Partial update (PATCH) ───────────────────────────────
    async def partial_update(
        self, movie_id: int, patch: Mapping[str, Any], owner_id: int
    ) -> Optional[MovieOut]:
        movie = await self.repo.get(movie_id, owner_id)
        if movie is None:
            logger.warning("PATCH failed: movie %s not found for user %s", movie_id, owner_id)
            return None

        changes = _writable(patch)
        errors: List[Optional[Dict[str, str]]] = []
        if "title" in changes:
            errors.append(_title_error(changes["title"]))
        if "rating" in changes:
            errors.append(_rating_error(changes["rating"]))
        if "watched" in changes and changes["watched"] is None:
            errors.append({"field": "watched", "message": "Watched must be true or false."})
        _raise_if(errors)

        if not changes:
            return MovieOut.model_validate(movie)

        for key, value in changes.items():
            setattr(movie, key, value)

        out = await self._commit(movie, "update")
        logger.info("Movie %s updated (PATCH: %s) by user %s", movie_id, sorted(changes), owner_id)
        return out

    # ── Full replace (PUT) ───────────────────────────────────
    async def replace(self, movie_id: int, full: Mapping[str, Any], owner_id: int) -> Optional[MovieOut]:
        movie = await self.repo.get(movie_id, owner_id)
        if movie is None:
            logger.warning("PUT failed: movie %s not found for user %s", movie_id, owner_id)
            return None

        # Absent or falsy optional fields fall back to their defaults.
        rating = full.get("rating") or None
        _raise_if([_title_error(full.get("title")), _rating_error(rating)])

        movie.title = full["title"]
        movie.director = full.get("director") or None
        movie.genre = full.get("genre") or None
        movie.year = full.get("year") or None
        movie.rating = rating
        movie.watched = bool(full.get("watched") or False)

        out = await self._commit(movie, "replace")
        logger.info("Movie %s replaced (PUT) by user %s", movie_id, owner_id)
        return out

    # ── Delete ───────────────────────────────────────────────
    async def delete(self, movie_id: int, owner_id: int) -> bool:
        movie = await self.repo.get(movie_id, owner_id)
        if movie is None:
            logger.warning("Delete failed: movie %s not found for user %s", movie_id, owner_id)
            return False

        await self.repo.remove(movie)
        try:
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            logger.exception("Failed to delete movie %s (owner %s)", movie_id, owner_id)
            raise
        logger.info("Movie %s deleted by user %s", movie_id, owner_id)
        return True


__all__ = ["MovieService", "WRITABLE_FIELDS"]
