"""
Movie Catalog - validated movie records over a pluggable key-value store.

This package provides:

- A `Movie` record that validates its own fields and serializes to a flat mapping
- A `MovieCatalog` that keeps an ordered in-memory collection in sync with a store
- Lookup, search, genre filtering, recency and rating/year ordering
- Memory, file and PostgreSQL storage backends
- A Typer command-line interface with Rich output

All operations are synchronous and assume a single writer per storage key.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from moviecatalog.catalog import MovieCatalog
from moviecatalog.config import Settings, get_settings
from moviecatalog.domain import Movie, MovieDraft, ValidationReport, default_movies
from moviecatalog.errors import (
    CatalogError,
    DuplicateIdError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from moviecatalog.storage import FileStore, KeyValueStore, MemoryStore, PostgresStore, build_store
from moviecatalog.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "Movie",
    "MovieDraft",
    "ValidationReport",
    "default_movies",
    # Catalog
    "MovieCatalog",
    # Errors
    "CatalogError",
    "DuplicateIdError",
    "NotFoundError",
    "PersistenceError",
    "ValidationError",
    # Storage
    "FileStore",
    "KeyValueStore",
    "MemoryStore",
    "PostgresStore",
    "build_store",
    # Logging
    "configure_logging",
    "get_logger",
]
