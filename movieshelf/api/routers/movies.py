"""
Movies API — owner-scoped CRUD
==============================

Every route depends on the bearer-token gate and passes the caller id to
`MovieService`; a movie that is missing or owned by someone else is a 404
either way.

| Method | Path            | Success | Failure          |
|--------|-----------------|---------|------------------|
| POST   | /movies         | 201     | 400              |
| GET    | /movies         | 200     | 400 (bad filter) |
| GET    | /movies/{id}    | 200     | 400, 404         |
| PUT    | /movies/{id}    | 200     | 400, 404         |
| PATCH  | /movies/{id}    | 200     | 400, 404         |
| DELETE | /movies/{id}    | 204     | 404              |
"""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from movieshelf.core.dependencies import get_current_identity
from movieshelf.core.exceptions import NotFoundException, ValidationException
from movieshelf.db.session import get_async_db
from movieshelf.schemas.auth import CallerIdentity
from movieshelf.schemas.movie import MovieCreate, MovieFilters, MovieOut, MoviePatch, MovieReplace
from movieshelf.services.movie_service import MovieService

router = APIRouter(prefix="/movies", tags=["Movies"])

# Primary keys are BIGINT; anything outside that range cannot exist.
MOVIE_ID_MAX = 2**63 - 1
MovieId = Annotated[int, Path(ge=1, le=MOVIE_ID_MAX, description="Movie id")]


def get_movie_service(db: AsyncSession = Depends(get_async_db)) -> MovieService:
    return MovieService(db)


# ──────────────────────────────────────────────────────
# ➕ Create
# ──────────────────────────────────────────────────────
@router.post(
    "",
    response_model=MovieOut,
    status_code=status.HTTP_201_CREATED,
    summary="Add a movie to the caller's list",
)
async def create_movie(
    payload: MovieCreate,
    identity: CallerIdentity = Depends(get_current_identity),
    service: MovieService = Depends(get_movie_service),
) -> MovieOut:
    return await service.create(payload.model_dump(), identity.id)


# ──────────────────────────────────────────────────────
# 📃 List / fetch
# ──────────────────────────────────────────────────────
@router.get(
    "",
    response_model=List[MovieOut],
    summary="List the caller's movies",
)
async def list_movies(
    genre: Optional[str] = Query(None, description="Case-insensitive substring match"),
    watched: Optional[str] = Query(None, description='"true" for watched, anything else for unwatched'),
    rating: Optional[str] = Query(None, description="Minimum rating (inclusive)"),
    identity: CallerIdentity = Depends(get_current_identity),
    service: MovieService = Depends(get_movie_service),
) -> List[MovieOut]:
    filters = MovieFilters(genre=genre, watched=watched, rating=rating)
    return await service.list(identity.id, filters.model_dump())


@router.get(
    "/{movie_id}",
    response_model=MovieOut,
    summary="Fetch one of the caller's movies",
)
async def get_movie(
    movie_id: MovieId,
    identity: CallerIdentity = Depends(get_current_identity),
    service: MovieService = Depends(get_movie_service),
) -> MovieOut:
    movie = await service.get_by_id(movie_id, identity.id)
    if movie is None:
        raise NotFoundException()
    return movie


# ──────────────────────────────────────────────────────
# ✏️ Replace / update
# ──────────────────────────────────────────────────────
@router.put(
    "/{movie_id}",
    response_model=MovieOut,
    summary="Replace a movie; omitted fields are reset",
)
async def replace_movie(
    movie_id: MovieId,
    payload: MovieReplace,
    identity: CallerIdentity = Depends(get_current_identity),
    service: MovieService = Depends(get_movie_service),
) -> MovieOut:
    if payload.title is None:
        raise ValidationException(
            "Title is required.", details=[{"field": "title", "message": "Title is required."}]
        )
    movie = await service.replace(movie_id, payload.model_dump(), identity.id)
    if movie is None:
        raise NotFoundException()
    return movie


@router.patch(
    "/{movie_id}",
    response_model=MovieOut,
    summary="Update only the supplied fields of a movie",
)
async def update_movie(
    movie_id: MovieId,
    payload: MoviePatch,
    identity: CallerIdentity = Depends(get_current_identity),
    service: MovieService = Depends(get_movie_service),
) -> MovieOut:
    movie = await service.partial_update(movie_id, payload.model_dump(exclude_unset=True), identity.id)
    if movie is None:
        raise NotFoundException()
    return movie


# ──────────────────────────────────────────────────────
# 🗑️ Delete
# ──────────────────────────────────────────────────────
@router.delete(
    "/{movie_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete one of the caller's movies",
)
async def delete_movie(
    movie_id: MovieId,
    identity: CallerIdentity = Depends(get_current_identity),
    service: MovieService = Depends(get_movie_service),
) -> Response:
    if not await service.delete(movie_id, identity.id):
        raise NotFoundException()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
