"""Another user's movie behaves exactly like a missing one, for every operation."""

import pytest
from httpx import AsyncClient

from tests.fixtures.users import auth_headers

MOVIES = "/api/movies"


@pytest.fixture
async def alice_movie(async_client: AsyncClient, user_a):
    resp = await async_client.post(
        MOVIES, json={"title": "Dune", "director": "Villeneuve"}, headers=auth_headers(user_a)
    )
    assert resp.status_code == 201
    return resp.json()


@pytest.mark.anyio
async def test_list_only_shows_own_movies(async_client: AsyncClient, user_a, user_b, alice_movie):
    await async_client.post(MOVIES, json={"title": "Heat"}, headers=auth_headers(user_b))

    mine = (await async_client.get(MOVIES, headers=auth_headers(user_a))).json()
    theirs = (await async_client.get(MOVIES, headers=auth_headers(user_b))).json()
    assert [m["title"] for m in mine] == ["Dune"]
    assert [m["title"] for m in theirs] == ["Heat"]


@pytest.mark.anyio
async def test_get_foreign_movie_not_found(async_client: AsyncClient, user_b, alice_movie):
    foreign = await async_client.get(f"{MOVIES}/{alice_movie['id']}", headers=auth_headers(user_b))
    missing = await async_client.get(f"{MOVIES}/987654", headers=auth_headers(user_b))
    assert foreign.status_code == missing.status_code == 404
    assert foreign.json()["detail"] == missing.json()["detail"]


@pytest.mark.anyio
async def test_patch_foreign_movie_not_found(async_client: AsyncClient, user_a, user_b, alice_movie):
    resp = await async_client.patch(
        f"{MOVIES}/{alice_movie['id']}", json={"title": "Hijacked"}, headers=auth_headers(user_b)
    )
    assert resp.status_code == 404

    still = await async_client.get(f"{MOVIES}/{alice_movie['id']}", headers=auth_headers(user_a))
    assert still.json()["title"] == "Dune"


@pytest.mark.anyio
async def test_put_foreign_movie_not_found(async_client: AsyncClient, user_a, user_b, alice_movie):
    resp = await async_client.put(
        f"{MOVIES}/{alice_movie['id']}", json={"title": "Hijacked"}, headers=auth_headers(user_b)
    )
    assert resp.status_code == 404

    still = await async_client.get(f"{MOVIES}/{alice_movie['id']}", headers=auth_headers(user_a))
    assert still.json()["director"] == "Villeneuve"


@pytest.mark.anyio
async def test_delete_foreign_movie_not_found(async_client: AsyncClient, user_a, user_b, alice_movie):
    resp = await async_client.delete(f"{MOVIES}/{alice_movie['id']}", headers=auth_headers(user_b))
    assert resp.status_code == 404

    still = await async_client.get(f"{MOVIES}/{alice_movie['id']}", headers=auth_headers(user_a))
    assert still.status_code == 200
