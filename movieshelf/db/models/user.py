from __future__ import annotations

"""
👤 MovieShelf — User (accounts & auth)
======================================

Account entity storing login credentials and owning the movie catalogue.

Design highlights
-----------------
• **Exact-match uniqueness** on email (case-sensitive, enforced by the DB).
• **Hash only**: `hashed_password` holds a bcrypt digest computed by the
  credential service before insert/update; it never leaves the service layer
  (see `movieshelf.schemas.auth.UserPublic`).
• **Cascade**: owned movies are removed by the `movies.owner_id` FK
  (`ON DELETE CASCADE`); there is no ORM relationship to load.
"""

from sqlalchemy import CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from movieshelf.db.base_class import Base, PKMixin, TimestampMixin


class User(PKMixin, TimestampMixin, Base):
    """Account record: display name, login email and password hash."""

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (
        CheckConstraint("length(trim(name)) > 0", name="name_not_blank"),
        CheckConstraint("length(trim(email)) > 0", name="email_not_blank"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
