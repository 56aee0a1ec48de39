"""
PostgreSQL-backed key-value store.

Keeps one row per key in a two-column table:

    CREATE TABLE catalog_kv (key TEXT PRIMARY KEY, value BYTEA NOT NULL)

The table is created on first use. A single dedicated connection is opened
lazily and reused; there is no pool and no retry, a failed statement is rolled
back and surfaced as `StoreError`.
"""

from __future__ import annotations

from typing import Optional

import psycopg
from psycopg import Connection, sql

from moviecatalog.config import Settings, get_settings
from moviecatalog.storage.base import StoreError
from moviecatalog.utils.logging import get_logger

log = get_logger(__name__)

DEFAULT_TABLE = "catalog_kv"


def build_dsn(settings: Optional[Settings] = None) -> str:
    """Compose a DSN string from settings."""
    settings = settings or get_settings()
    return (
        f"postgresql://{settings.db_user}:{settings.db_password}"
        f"@{settings.db_host}:{settings.db_port}/{settings.db_name}"
    )


class PostgresStore:
    """
    Store keys and values in a Postgres table.

    Parameters
    ----------
    dsn : str, optional
        Connection string; defaults to one built from settings.
    table : str
        Table name, created if missing.
    """

    def __init__(self, dsn: Optional[str] = None, table: str = DEFAULT_TABLE) -> None:
        self._dsn = dsn or build_dsn()
        self.table = table
        self._conn: Optional[Connection] = None

    def _connection(self) -> Connection:
        if self._conn is None or self._conn.closed:
            try:
                conn = psycopg.connect(self._dsn)
                with conn.cursor() as cur:
                    cur.execute(
                        sql.SQL(
                            "CREATE TABLE IF NOT EXISTS {} "
                            "(key TEXT PRIMARY KEY, value BYTEA NOT NULL)"
                        ).format(sql.Identifier(self.table))
                    )
                conn.commit()
            except psycopg.Error as exc:
                raise StoreError(f"could not connect to Postgres store: {exc}") from exc
            log.debug("Opened Postgres store connection", extra={"table": self.table})
            self._conn = conn
        return self._conn

    def get(self, key: str) -> Optional[bytes]:
        conn = self._connection()
        query = sql.SQL("SELECT value FROM {} WHERE key = %s").format(sql.Identifier(self.table))
        try:
            with conn.cursor() as cur:
                cur.execute(query, (key,))
                row = cur.fetchone()
            conn.commit()
        except psycopg.Error as exc:
            conn.rollback()
            raise StoreError(f"could not read '{key}': {exc}") from exc
        return bytes(row[0]) if row else None

    def set(self, key: str, value: bytes) -> None:
        conn = self._connection()
        query = sql.SQL(
            "INSERT INTO {} (key, value) VALUES (%s, %s) "
            "ON CONFLICT (key) DO UPDATE SET value = EXCLUDED.value"
        ).format(sql.Identifier(self.table))
        try:
            with conn.cursor() as cur:
                cur.execute(query, (key, value))
            conn.commit()
        except psycopg.Error as exc:
            conn.rollback()
            raise StoreError(f"could not write '{key}': {exc}") from exc

    def remove(self, key: str) -> None:
        conn = self._connection()
        query = sql.SQL("DELETE FROM {} WHERE key = %s").format(sql.Identifier(self.table))
        try:
            with conn.cursor() as cur:
                cur.execute(query, (key,))
            conn.commit()
        except psycopg.Error as exc:
            conn.rollback()
            raise StoreError(f"could not remove '{key}': {exc}") from exc

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None


__all__ = ["DEFAULT_TABLE", "PostgresStore", "build_dsn"]
