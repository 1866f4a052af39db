from __future__ import annotations

"""
🎬 MovieShelf — Movie (owner-scoped catalogue entry)
====================================================

Every row belongs to exactly one user (`owner_id`), set at creation from the
authenticated caller and never reassigned. All reads and writes go through
`movieshelf.repositories.movies.MovieRepository`, which conjoins
`owner_id = caller` into every statement.
"""

from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, Float, ForeignKey, Index, Integer, String, false
from sqlalchemy.orm import Mapped, mapped_column

from movieshelf.db.base_class import Base, BigIntPK, PKMixin, TimestampMixin

RATING_MIN = 0.0
RATING_MAX = 10.0


class Movie(PKMixin, TimestampMixin, Base):
    __tablename__ = "movies"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    director: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    genre: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    year: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    rating: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    watched: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())

    owner_id: Mapped[int] = mapped_column(
        BigIntPK,
        ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
    )

    __table_args__ = (
        CheckConstraint("length(trim(title)) > 0", name="title_not_blank"),
        CheckConstraint(
            f"rating IS NULL OR (rating >= {RATING_MIN} AND rating <= {RATING_MAX})",
            name="rating_range",
        ),
        Index("ix_movies_owner_id_id", "owner_id", "id"),
    )
