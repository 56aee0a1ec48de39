"""
Store factory: picks a backend from settings.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from moviecatalog.config import Settings, get_settings
from moviecatalog.storage.base import KeyValueStore
from moviecatalog.storage.file import FileStore
from moviecatalog.storage.memory import MemoryStore
from moviecatalog.storage.postgres import PostgresStore, build_dsn


def _store_factories() -> Dict[str, Callable[[Settings], KeyValueStore]]:
    """Registry of available storage backends."""
    return {
        "memory": lambda s: MemoryStore(quota_bytes=s.storage_quota_bytes),
        "file": lambda s: FileStore(s.storage_dir),
        "postgres": lambda s: PostgresStore(dsn=build_dsn(s)),
    }


def available_backends() -> List[str]:
    return sorted(_store_factories().keys())


def build_store(settings: Optional[Settings] = None) -> KeyValueStore:
    """
    Instantiate the configured storage backend.

    Raises
    ------
    ValueError
        If the configured backend name is unknown.
    """
    settings = settings or get_settings()
    factories = _store_factories()
    try:
        factory = factories[settings.storage_backend]
    except KeyError:
        raise ValueError(
            f"Unknown storage backend '{settings.storage_backend}'. "
            f"Available: {', '.join(available_backends())}"
        ) from None
    return factory(settings)


__all__ = ["available_backends", "build_store"]
