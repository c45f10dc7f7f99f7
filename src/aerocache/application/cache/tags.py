"""Application cache – TagIndex."""
from __future__ import annotations

from typing import Iterable

from aerocache.application.cache.backend import CacheBackend
from aerocache.application.cache.keys import KeyBuilder

__all__ = ["TagIndex"]


def _unique(tags: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(tags))


class TagIndex:
    """Tag → key-set index stored in the cache backend itself.

    Each tag lives in the backend as a set under ``KeyBuilder.tag_key(tag)``,
    so every application process sharing the backend sees the same index.
    Backend errors are not handled here.
    """

    def __init__(self, backend: CacheBackend, key_builder: KeyBuilder) -> None:
        self._backend = backend
        self._keys = key_builder

    async def add_key_to_tags(self, key: str, tags: Iterable[str]) -> None:
        for tag in _unique(tags):
            await self._backend.add_to_set(self._keys.tag_key(tag), key)

    async def keys_for_tags(self, tags: Iterable[str]) -> set[str]:
        keys: set[str] = set()
        for tag in _unique(tags):
            keys |= await self._backend.members_of(self._keys.tag_key(tag))
        return keys

    async def clear_tags(self, tags: Iterable[str]) -> None:
        for tag in _unique(tags):
            await self._backend.delete_key(self._keys.tag_key(tag))
