"""
In-process store, optionally capped like browser local storage.
"""

from __future__ import annotations

from typing import Dict, Optional

from moviecatalog.storage.base import StoreQuotaExceededError


class MemoryStore:
    """
    Dict-backed store.

    When `quota_bytes` is set, a write that would push the total size of keys
    and values over the quota is rejected and the previous value is kept.
    """

    def __init__(
        self,
        initial: Optional[Dict[str, bytes]] = None,
        quota_bytes: Optional[int] = None,
    ) -> None:
        self._data: Dict[str, bytes] = dict(initial or {})
        self.quota_bytes = quota_bytes

    def _size_without(self, key: str) -> int:
        return sum(len(k.encode("utf-8")) + len(v) for k, v in self._data.items() if k != key)

    def get(self, key: str) -> Optional[bytes]:
        return self._data.get(key)

    def set(self, key: str, value: bytes) -> None:
        if self.quota_bytes is not None:
            needed = self._size_without(key) + len(key.encode("utf-8")) + len(value)
            if needed > self.quota_bytes:
                raise StoreQuotaExceededError(
                    f"writing {len(value)} bytes to '{key}' exceeds quota of {self.quota_bytes} bytes"
                )
        self._data[key] = bytes(value)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._data


__all__ = ["MemoryStore"]
