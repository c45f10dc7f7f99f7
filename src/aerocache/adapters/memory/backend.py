"""In-memory adapter – InMemoryCacheBackend."""
from __future__ import annotations

import copy
from typing import Any

from aerocache.kernel.errors import SerializationError
from aerocache.kernel.time import Clock, SystemClock


def _copy(value: Any) -> Any:
    try:
        return copy.deepcopy(value)
    except (TypeError, copy.Error) as exc:
        raise SerializationError(
            f"Cannot copy value of type {type(value).__name__}: {exc}",
            payload_type=type(value).__name__,
            backend="memory",
            cause=exc,
        ) from exc


class InMemoryCacheBackend:
    """Dict-backed cache backend with per-key TTL.

    Values are deep-copied on the way in and out, so callers never share
    mutable state with the cache; a value that cannot be copied (locks,
    generators, open connections) raises :class:`SerializationError` and is
    not stored. Expired entries are evicted lazily on read.
    Suitable for tests and single-process deployments.
    """

    name = "memory"

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or SystemClock()
        self._entries: dict[str, tuple[Any, float]] = {}  # key -> (value, expires_at)
        self._sets: dict[str, set[str]] = {}

    async def get(self, key: str) -> Any:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock.timestamp() >= expires_at:
            del self._entries[key]
            return None
        return _copy(value)

    async def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        self._entries[key] = (_copy(value), self._clock.timestamp() + ttl_seconds)

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    async def add_to_set(self, tag_key: str, member: str) -> None:
        self._sets.setdefault(tag_key, set()).add(member)

    async def members_of(self, tag_key: str) -> set[str]:
        return set(self._sets.get(tag_key, ()))

    async def delete_key(self, tag_key: str) -> None:
        self._sets.pop(tag_key, None)

    async def close(self) -> None:
        self._entries.clear()
        self._sets.clear()

    # ------------------------------------------------------------------
    # Introspection helpers (tests, diagnostics)
    # ------------------------------------------------------------------

    def __contains__(self, key: str) -> bool:
        entry = self._entries.get(key)
        return entry is not None and self._clock.timestamp() < entry[1]

    def keys(self) -> list[str]:
        now = self._clock.timestamp()
        return sorted(k for k, (_, expires_at) in self._entries.items() if now < expires_at)

    def tag_keys(self) -> list[str]:
        return sorted(self._sets)


__all__ = ["InMemoryCacheBackend"]
