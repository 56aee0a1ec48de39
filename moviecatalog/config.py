"""
Configuration settings for the movie catalog.

Uses Pydantic Settings to load environment variables for the storage backend,
the Postgres connection (when that backend is selected), logging, and catalog
defaults such as the genre list.
"""
from __future__ import annotations

from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_STORAGE_KEY = "cineflix_movies"
DEFAULT_RECENT_LIMIT = 5

DEFAULT_GENRES: List[str] = [
    "Action",
    "Adventure",
    "Animation",
    "Comedy",
    "Documentary",
    "Drama",
    "Horror",
    "Romance",
    "Science Fiction",
    "Thriller",
]


class Settings(BaseSettings):
    # Storage
    storage_backend: Literal["memory", "file", "postgres"] = Field(
        "file", alias="CATALOG_STORAGE_BACKEND"
    )
    storage_key: str = Field(DEFAULT_STORAGE_KEY, alias="CATALOG_STORAGE_KEY")
    storage_dir: str = Field(".catalog", alias="CATALOG_STORAGE_DIR")
    storage_quota_bytes: int = Field(5 * 1024 * 1024, alias="CATALOG_STORAGE_QUOTA_BYTES")

    # Database (postgres backend only)
    db_host: str = Field("localhost", alias="DB_HOST")
    db_port: int = Field(5432, alias="DB_PORT")
    db_user: str = Field("postgres", alias="DB_USER")
    db_password: str = Field("postgres", alias="DB_PASSWORD")
    db_name: str = Field("movie_catalog", alias="DB_NAME")

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Catalog defaults
    genres: List[str] = Field(default_factory=lambda: list(DEFAULT_GENRES), alias="CATALOG_GENRES")
    recent_limit: int = Field(DEFAULT_RECENT_LIMIT, alias="CATALOG_RECENT_LIMIT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = [
    "DEFAULT_GENRES",
    "DEFAULT_RECENT_LIMIT",
    "DEFAULT_STORAGE_KEY",
    "Settings",
    "get_settings",
]
