import pytest
from httpx import AsyncClient

from tests.fixtures.users import auth_headers

MOVIES = "/api/movies"


@pytest.fixture
async def catalogue(async_client: AsyncClient, user_a):
    rows = [
        {"title": "Alien", "genre": "Sci-Fi Horror", "rating": 8.5, "watched": True},
        {"title": "Heat", "genre": "Crime", "rating": 7.0},
        {"title": "Cats", "genre": "Musical", "rating": 2.5, "watched": True},
        {"title": "Arrival", "genre": "sci-fi"},
        {"title": "50%_Off", "genre": "100%_Comedy", "rating": 6.9},
    ]
    for row in rows:
        resp = await async_client.post(MOVIES, json=row, headers=auth_headers(user_a))
        assert resp.status_code == 201
    return rows


async def _titles(client: AsyncClient, user, **params):
    resp = await client.get(MOVIES, params=params, headers=auth_headers(user))
    assert resp.status_code == 200, resp.text
    return [m["title"] for m in resp.json()]


@pytest.mark.anyio
async def test_no_filters_returns_all_in_creation_order(async_client, user_a, catalogue):
    assert await _titles(async_client, user_a) == [r["title"] for r in catalogue]


@pytest.mark.anyio
async def test_rating_threshold_excludes_null(async_client, user_a, catalogue):
    assert await _titles(async_client, user_a, rating="7") == ["Alien", "Heat"]


@pytest.mark.anyio
async def test_rating_threshold_non_numeric(async_client, user_a, catalogue):
    resp = await async_client.get(MOVIES, params={"rating": "high"}, headers=auth_headers(user_a))
    assert resp.status_code == 400


@pytest.mark.anyio
async def test_genre_is_case_insensitive_substring(async_client, user_a, catalogue):
    assert await _titles(async_client, user_a, genre="SCI-FI") == ["Alien", "Arrival"]


@pytest.mark.anyio
async def test_genre_wildcards_are_literal(async_client, user_a, catalogue):
    assert await _titles(async_client, user_a, genre="%_") == ["50%_Off"]


@pytest.mark.anyio
@pytest.mark.parametrize(
    "value, expected",
    [
        ("true", ["Alien", "Cats"]),
        ("TRUE", ["Alien", "Cats"]),
        ("false", ["Heat", "Arrival", "50%_Off"]),
        ("yes", ["Heat", "Arrival", "50%_Off"]),
        ("", ["Alien", "Heat", "Cats", "Arrival", "50%_Off"]),
    ],
)
async def test_watched_filter(async_client, user_a, catalogue, value, expected):
    assert await _titles(async_client, user_a, watched=value) == expected


@pytest.mark.anyio
async def test_filters_are_conjunctive(async_client, user_a, catalogue):
    assert await _titles(async_client, user_a, genre="sci", watched="true", rating="8") == ["Alien"]


@pytest.mark.anyio
async def test_genre_term_is_matched_verbatim(async_client, user_a, catalogue):
    # "fi " with its trailing space only occurs inside "Sci-Fi Horror"
    assert await _titles(async_client, user_a, genre="fi ") == ["Alien"]
    assert await _titles(async_client, user_a, genre="fi") == ["Alien", "Arrival"]
