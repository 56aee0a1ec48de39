"""
Pytest configuration for the movie catalog.

Provides fixtures for:
- Deterministic ids and timestamps
- In-memory stores and catalogs
- Settings isolation for CLI tests
- Postgres connectivity for integration tests
"""

from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Generator

import psycopg
import pytest

from moviecatalog.catalog import MovieCatalog
from moviecatalog.config import DEFAULT_GENRES, get_settings
from moviecatalog.domain.models import Movie
from moviecatalog.storage.memory import MemoryStore
from moviecatalog.utils.ids import SequentialIdGenerator

START_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


class TickingClock:
    """Returns a strictly increasing timestamp on every call."""

    def __init__(self, start: datetime = START_TIME, step: timedelta = timedelta(seconds=1)) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.now
        self.now += self.step
        return value


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def ids() -> SequentialIdGenerator:
    return SequentialIdGenerator()


@pytest.fixture
def valid_fields() -> Dict[str, Any]:
    """Raw fields that pass every validation rule."""
    return {
        "title": "Arrival",
        "genre": "Science Fiction",
        "director": "Denis Villeneuve",
        "year": 2016,
        "rating": 7.9,
        "description": "A linguist works with the military to communicate with alien lifeforms.",
        "image_url": "https://image.tmdb.org/t/p/w500/x2FJsf1ElAgr63Y3PNPtJrcmpoe.jpg",
    }


@pytest.fixture
def make_movie(
    valid_fields: Dict[str, Any], ids: SequentialIdGenerator, clock: TickingClock
) -> Callable[..., Movie]:
    """Factory for valid movies; keyword overrides replace individual fields."""

    def _make(**overrides: Any) -> Movie:
        fields = {**valid_fields, **overrides}
        movie_id = fields.pop("id", None)
        return Movie.create(**fields, id=movie_id, id_generator=ids, clock=clock)

    return _make


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def empty_catalog(store: MemoryStore, ids: SequentialIdGenerator, clock: TickingClock) -> MovieCatalog:
    """A catalog whose seed set is empty, for tests that control every movie."""
    return MovieCatalog(
        store,
        genres=DEFAULT_GENRES,
        id_generator=ids,
        clock=clock,
        seed_factory=lambda _ids, _clock: [],
    )


@pytest.fixture
def seeded_catalog(store: MemoryStore, ids: SequentialIdGenerator, clock: TickingClock) -> MovieCatalog:
    """A catalog started on an empty store, so it holds the default movies."""
    return MovieCatalog(store, genres=DEFAULT_GENRES, id_generator=ids, clock=clock)


@pytest.fixture
def isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Generator[None, None, None]:
    """
    Point settings at a file store in a temp directory and drop the settings cache.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CATALOG_STORAGE_BACKEND", "file")
    monkeypatch.setenv("CATALOG_STORAGE_DIR", str(tmp_path / "store"))
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(scope="session")
def test_dsn() -> str:
    """
    Database connection string for Postgres integration tests.
    """
    return (
        f"postgresql://{os.getenv('DB_USER', 'postgres')}:{os.getenv('DB_PASSWORD', 'postgres')}"
        f"@{os.getenv('DB_HOST', 'localhost')}:{os.getenv('DB_PORT', '5432')}"
        f"/{os.getenv('DB_NAME', 'movie_catalog')}"
    )


@pytest.fixture(scope="session")
def db_connection_available(test_dsn: str) -> bool:
    """
    Check if database is reachable.

    Used to conditionally skip integration tests when DB is not available.
    """
    try:
        with psycopg.connect(test_dsn, connect_timeout=5) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()
        return True
    except psycopg.Error:
        return False
