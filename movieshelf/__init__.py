"""MovieShelf: a multi-tenant movie list API."""

__version__ = "1.0.0"
