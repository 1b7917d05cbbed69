"""Explicit time-to-live cache for weather lookups."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Generic, Hashable, TypeVar

V = TypeVar("V")


def coordinate_key(latitude: float, longitude: float) -> str:
    """Cache key for a location, rounded to roughly one kilometre."""

    return f"{latitude:.2f},{longitude:.2f}"


@dataclass(slots=True)
class _Entry(Generic[V]):
    value: V
    expires_at: float


class TTLCache(Generic[V]):
    """Keyed cache whose entries expire ``ttl`` seconds after being stored."""

    def __init__(self, ttl: float, clock: Callable[[], float] = time.monotonic) -> None:
        if ttl <= 0:
            raise ValueError("Cache TTL must be positive.")
        self._ttl = ttl
        self._clock = clock
        self._entries: dict[Hashable, _Entry[V]] = {}

    @property
    def ttl(self) -> float:
        return self._ttl

    def get(self, key: Hashable) -> V | None:
        """Return the cached value, or ``None`` if missing or expired."""

        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expires_at <= self._clock():
            del self._entries[key]
            return None
        return entry.value

    def set(self, key: Hashable, value: V) -> None:
        now = self._clock()
        self.purge_expired(now)
        self._entries[key] = _Entry(value=value, expires_at=now + self._ttl)

    def purge_expired(self, now: float | None = None) -> int:
        """Drop every expired entry and return how many were removed."""

        now = self._clock() if now is None else now
        expired = [key for key, entry in self._entries.items() if entry.expires_at <= now]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def invalidate(self, key: Hashable) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
