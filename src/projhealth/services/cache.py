"""TTL cache used to memoize normalized plans."""

import hashlib
import json
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol


class Cache(Protocol):
    """Cache interface for simple key-value data."""

    def get(self, key: str) -> object | None:
        """Return a cached value if present and not expired."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a cached value with a TTL in seconds."""


@dataclass
class _CacheEntry:
    value: object
    expires_at: datetime


@dataclass
class InMemoryCache(Cache):
    """Process-local cache bounded to ``max_entries``; oldest entries go first."""

    _entries: dict[str, _CacheEntry]
    max_entries: int

    def __init__(self, max_entries: int = 256) -> None:
        self._entries = {}
        self.max_entries = max_entries

    def get(self, key: str) -> object | None:
        """Return a cached value if it hasn't expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if datetime.now(tz=UTC) >= entry.expires_at:
            self._entries.pop(key, None)
            return None
        return entry.value

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a cached value with a TTL."""
        if ttl_seconds <= 0:
            return
        now = datetime.now(tz=UTC)
        self._purge_expired(now)
        self._entries.pop(key, None)
        while self._entries and len(self._entries) >= self.max_entries:
            self._entries.pop(next(iter(self._entries)))
        expires_at = now + timedelta(seconds=ttl_seconds)
        self._entries[key] = _CacheEntry(value=value, expires_at=expires_at)

    def _purge_expired(self, now: datetime) -> None:
        expired = [
            key for key, entry in self._entries.items() if now >= entry.expires_at
        ]
        for key in expired:
            del self._entries[key]


def payload_cache_key(namespace: str, payload: object, *parts: object) -> str:
    """Build a stable key from a JSON payload's content hash."""
    encoded = json.dumps(payload, sort_keys=True, default=str, separators=(",", ":"))
    digest = hashlib.sha256(encoded.encode("utf-8")).hexdigest()
    suffix = ":".join(str(part) for part in parts)
    return f"{namespace}:{digest}:{suffix}" if suffix else f"{namespace}:{digest}"
