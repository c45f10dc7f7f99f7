"""Application cache – CacheBackend port."""
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

__all__ = ["CacheBackend"]


@runtime_checkable
class CacheBackend(Protocol):
    """Key/value store with per-key TTL and string sets.

    Every operation is atomic on its own key or set. ``get`` returns ``None``
    for an absent or expired key. Implementations raise
    :class:`~aerocache.kernel.errors.CacheBackendError` on failure.
    """

    name: str

    async def get(self, key: str) -> Any: ...
    async def set(self, key: str, value: Any, ttl_seconds: float) -> None: ...
    async def delete(self, key: str) -> None: ...
    async def add_to_set(self, tag_key: str, member: str) -> None: ...
    async def members_of(self, tag_key: str) -> set[str]: ...
    async def delete_key(self, tag_key: str) -> None: ...
    async def close(self) -> None: ...
