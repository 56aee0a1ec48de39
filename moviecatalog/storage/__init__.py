"""
Storage package for the movie catalog.

Centralizes the key-value store contract and its backends. Keep this layer
focused on I/O, decoupled from catalog logic.
"""

from moviecatalog.storage.base import KeyValueStore, StoreError, StoreQuotaExceededError
from moviecatalog.storage.factory import available_backends, build_store
from moviecatalog.storage.file import FileStore
from moviecatalog.storage.memory import MemoryStore
from moviecatalog.storage.postgres import PostgresStore, build_dsn

__all__ = [
    "FileStore",
    "KeyValueStore",
    "MemoryStore",
    "PostgresStore",
    "StoreError",
    "StoreQuotaExceededError",
    "available_backends",
    "build_dsn",
    "build_store",
]
