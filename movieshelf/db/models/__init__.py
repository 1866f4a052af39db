from movieshelf.db.models.movie import Movie
from movieshelf.db.models.user import User

__all__ = ["Movie", "User"]
