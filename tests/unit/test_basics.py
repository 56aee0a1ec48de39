import json
from pathlib import Path

from moviecatalog import config
from moviecatalog.catalog import MovieCatalog, decode_movies
from moviecatalog.storage.memory import MemoryStore
from scripts import generate_movies

GENERATED_COUNT = 5


def test_get_settings_defaults(isolated_settings, monkeypatch):
    monkeypatch.delenv("CATALOG_STORAGE_BACKEND")
    monkeypatch.delenv("LOG_LEVEL")
    settings = config.get_settings()
    assert settings.storage_backend == "file"
    assert settings.storage_key == "cineflix_movies"
    assert settings.log_level == "INFO"
    assert settings.recent_limit == 5
    assert settings.genres == config.DEFAULT_GENRES
    assert settings.db_port == 5432


def test_settings_read_genres_from_env(isolated_settings, monkeypatch):
    monkeypatch.setenv("CATALOG_GENRES", json.dumps(["Noir", "Musical"]))
    config.get_settings.cache_clear()
    assert config.get_settings().genres == ["Noir", "Musical"]


def test_generated_drafts_are_deterministic_and_valid():
    genres = config.DEFAULT_GENRES
    first = generate_movies._generate_drafts(GENERATED_COUNT, genres, seed=123)
    second = generate_movies._generate_drafts(GENERATED_COUNT, genres, seed=123)
    assert first == second

    catalog = MovieCatalog(MemoryStore(), genres=genres, seed_factory=lambda _ids, _clock: [])
    for draft in first:
        catalog.add_draft(draft)
    assert len(catalog) == GENERATED_COUNT


def test_generate_movies_writes_catalog_json(tmp_path: Path):
    output = tmp_path / "movies.json"
    drafts = generate_movies._generate_drafts(GENERATED_COUNT, config.DEFAULT_GENRES, seed=7)

    written = generate_movies._write_json(output, drafts)

    assert written == GENERATED_COUNT
    movies = decode_movies(output.read_bytes())
    assert [m.id for m in movies] == [f"generated_{i}" for i in range(1, GENERATED_COUNT + 1)]
    assert [m.title for m in movies] == [d.title for d in drafts]


def test_catalog_defaults_follow_settings_defaults():
    catalog = MovieCatalog(MemoryStore())
    assert catalog.storage_key == config.DEFAULT_STORAGE_KEY
    assert catalog.recent_limit == config.DEFAULT_RECENT_LIMIT
