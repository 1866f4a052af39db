# movieshelf/schemas/movie.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# `movies.year` is a 32-bit INTEGER column
YEAR_MIN = -(2**31)
YEAR_MAX = 2**31 - 1


class MovieFields(BaseModel):
    """Writable movie fields. Unknown keys (`id`, `owner_id`, ...) are ignored."""
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    director: Optional[str] = None
    genre: Optional[str] = None
    year: Optional[int] = Field(None, ge=YEAR_MIN, le=YEAR_MAX)
    rating: Optional[float] = None
    watched: Optional[bool] = None


class MovieCreate(MovieFields):
    pass


class MoviePatch(MovieFields):
    """Partial update: only keys present in the request body are applied."""


class MovieReplace(MovieFields):
    """Full replacement: absent optional fields are reset to their defaults."""


class MovieOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    director: Optional[str] = None
    genre: Optional[str] = None
    year: Optional[int] = None
    rating: Optional[float] = None
    watched: bool = False
    owner_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class MovieFilters(BaseModel):
    """Raw query-string filters for listing; coercion happens in the repository."""
    genre: Optional[str] = None
    watched: Optional[str] = None
    rating: Optional[str] = None
