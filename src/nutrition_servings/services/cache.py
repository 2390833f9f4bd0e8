"""Time-bounded memo for parsed catalog records."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol


class Cache(Protocol):
    """Key-value memo with per-entry expiry."""

    def get(self, key: str) -> object | None:
        """Return a value stored under ``key`` unless it has expired."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store ``value`` for ``ttl_seconds``."""

    def get_or_set(
        self, key: str, load: Callable[[], object | None], ttl_seconds: int
    ) -> object | None:
        """Return the stored value, loading and storing it on a miss."""

    def invalidate(self, key: str) -> None:
        """Forget ``key``."""


@dataclass
class _CacheEntry:
    value: object
    expires_at: datetime


@dataclass
class InMemoryCache(Cache):
    """Process-local cache; entries are dropped lazily once they expire.

    A non-positive TTL disables storage, and ``None`` is never stored, so a
    record missing from the catalog is looked up again next time.
    """

    _entries: dict[str, _CacheEntry]

    def __init__(self) -> None:
        self._entries = {}

    def get(self, key: str) -> object | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if datetime.now(tz=UTC) >= entry.expires_at:
            del self._entries[key]
            return None
        return entry.value

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        if ttl_seconds <= 0 or value is None:
            return
        self._entries[key] = _CacheEntry(
            value=value,
            expires_at=datetime.now(tz=UTC) + timedelta(seconds=ttl_seconds),
        )

    def get_or_set(
        self, key: str, load: Callable[[], object | None], ttl_seconds: int
    ) -> object | None:
        value = self.get(key)
        if value is None:
            value = load()
            self.set(key, value, ttl_seconds)
        return value

    def invalidate(self, key: str) -> None:
        self._entries.pop(key, None)

    def __len__(self) -> int:
        return len(self._entries)
