"""Register → login → create → list → delete → 404, over HTTP."""

import pytest
from httpx import AsyncClient


@pytest.mark.anyio
async def test_end_to_end_movie_lifecycle(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/auth/register", json={"name": "A", "email": "a@x.com", "password": "pass1"}
    )
    assert resp.status_code == 201

    resp = await async_client.post("/api/auth/login", json={"email": "a@x.com", "password": "pass1"})
    assert resp.status_code == 200
    headers = {"Authorization": f"Bearer {resp.json()['token']}"}

    resp = await async_client.post("/api/movies", json={"title": "Dune"}, headers=headers)
    assert resp.status_code == 201
    movie_id = resp.json()["id"]

    listed = (await async_client.get("/api/movies", headers=headers)).json()
    assert [m["title"] for m in listed] == ["Dune"]

    assert (await async_client.delete(f"/api/movies/{movie_id}", headers=headers)).status_code == 204
    assert (await async_client.get("/api/movies", headers=headers)).json() == []
    assert (await async_client.get(f"/api/movies/{movie_id}", headers=headers)).status_code == 404


@pytest.mark.anyio
async def test_deleting_user_cascades_to_movies(async_client: AsyncClient, db_session, user_a):
    from sqlalchemy import func, select

    from movieshelf.db.models.movie import Movie
    from tests.fixtures.users import auth_headers

    await async_client.post("/api/movies", json={"title": "Dune"}, headers=auth_headers(user_a))
    await async_client.post("/api/movies", json={"title": "Heat"}, headers=auth_headers(user_a))

    await db_session.delete(user_a)
    await db_session.commit()

    db_session.expunge_all()
    count = (await db_session.execute(select(func.count()).select_from(Movie))).scalar_one()
    assert count == 0


def test_models_use_no_deprecated_loader_strategies():
    from sqlalchemy import inspect
    from sqlalchemy.orm import configure_mappers

    from movieshelf.db.models import Movie, User

    configure_mappers()
    for model in (User, Movie):
        assert all(rel.lazy != "noload" for rel in inspect(model).relationships)
