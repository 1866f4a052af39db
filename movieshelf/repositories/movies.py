from __future__ import annotations

"""Owner-scoped movie repository.

Every statement built here starts from `owner_id = :caller`; there is no
method that reads or writes a movie without an owner id. Callers get `None`
back for rows that are missing *or* owned by someone else, so the two cases
are indistinguishable above this layer.
"""

import math
from typing import Any, List, Mapping, Optional

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from movieshelf.core.exceptions import ValidationException
from movieshelf.db.models.movie import Movie


# ─────────────────────────────────────────────────────────────
# 🔎 Filter builder
# ─────────────────────────────────────────────────────────────
def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def coerce_watched(raw: Any) -> Optional[bool]:
    """Query-string `watched` → bool.

    `"true"` (any case) is True, any other non-empty value is False, and an
    empty/absent value imposes no constraint.
    """
    if isinstance(raw, bool):
        return raw
    if _blank(raw):
        return None
    return str(raw).strip().lower() == "true"


def coerce_rating_threshold(raw: Any) -> Optional[float]:
    if _blank(raw):
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise ValidationException(
            "The rating filter must be a number.",
            details=[{"field": "rating", "message": "must be a number"}],
        )
    if not math.isfinite(value):
        raise ValidationException(
            "The rating filter must be a number.",
            details=[{"field": "rating", "message": "must be a finite number"}],
        )
    return value


def build_filter_conditions(filters: Mapping[str, Any]) -> List[ColumnElement[bool]]:
    """Translate listing filters into conjunctive SQL conditions.

    - `genre`   → case-insensitive substring match
    - `watched` → exact boolean match (see `coerce_watched`)
    - `rating`  → `rating >= threshold` (NULL ratings never match)
    """
    conditions: List[ColumnElement[bool]] = []

    genre = filters.get("genre")
    if not _blank(genre):
        conditions.append(Movie.genre.icontains(str(genre), autoescape=True))

    watched = coerce_watched(filters.get("watched"))
    if watched is not None:
        conditions.append(Movie.watched == watched)

    threshold = coerce_rating_threshold(filters.get("rating"))
    if threshold is not None:
        conditions.append(Movie.rating.is_not(None))
        conditions.append(Movie.rating >= threshold)

    return conditions


# ─────────────────────────────────────────────────────────────
# 🗃️ Repository
# ─────────────────────────────────────────────────────────────
class MovieRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def scoped(owner_id: int) -> Select[tuple[Movie]]:
        """Base statement for every read: the caller's rows only."""
        return select(Movie).where(Movie.owner_id == owner_id)

    async def list(self, owner_id: int, filters: Optional[Mapping[str, Any]] = None) -> List[Movie]:
        stmt = self.scoped(owner_id)
        conditions = build_filter_conditions(filters or {})
        if conditions:
            stmt = stmt.where(*conditions)
        res = await self.session.execute(stmt.order_by(Movie.id))
        return list(res.scalars().all())

    async def get(self, movie_id: int, owner_id: int) -> Optional[Movie]:
        res = await self.session.execute(self.scoped(owner_id).where(Movie.id == movie_id))
        return res.scalar_one_or_none()

    async def add(self, movie: Movie) -> Movie:
        self.session.add(movie)
        await self.session.flush()
        return movie

    async def remove(self, movie: Movie) -> None:
        await self.session.delete(movie)
        await self.session.flush()
