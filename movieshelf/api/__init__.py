"""HTTP surface. The aggregated router lives in `movieshelf.api.routers`."""

__all__ = []
