"""
Key-value store contract used by the catalog.

A store maps string keys to byte strings. The catalog only ever uses one key
and always writes the whole value, so backends need no partial updates,
transactions across keys, or change notification.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable


class StoreError(Exception):
    """A store operation failed."""


class StoreQuotaExceededError(StoreError):
    """A write was rejected because the store is full."""


@runtime_checkable
class KeyValueStore(Protocol):
    """
    Common interface all storage backends must implement.

    Failures are raised as `StoreError`; a missing key is not a failure.
    """

    def get(self, key: str) -> Optional[bytes]:
        """Return the stored bytes, or None when the key is absent."""
        ...

    def set(self, key: str, value: bytes) -> None:
        """Store `value` under `key`, replacing any previous value."""
        ...

    def remove(self, key: str) -> None:
        """Delete `key`; removing an absent key is a no-op."""
        ...


__all__ = ["KeyValueStore", "StoreError", "StoreQuotaExceededError"]
