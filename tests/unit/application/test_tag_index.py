"""Unit tests for TagIndex."""
from __future__ import annotations

import asyncio

from aerocache.adapters.memory import InMemoryCacheBackend
from aerocache.application.cache import KeyBuilder, TagIndex


def _index(prefix: str = "") -> tuple[TagIndex, InMemoryCacheBackend]:
    backend = InMemoryCacheBackend()
    return TagIndex(backend, KeyBuilder(prefix)), backend


class TestTagIndex:
    def test_add_key_to_many_tags(self) -> None:
        async def run() -> None:
            index, _ = _index()
            await index.add_key_to_tags("k1", ["supplier:list", "supplier:status:active"])
            assert await index.keys_for_tags(["supplier:list"]) == {"k1"}
            assert await index.keys_for_tags(["supplier:status:active"]) == {"k1"}
        asyncio.run(run())

    def test_keys_for_tags_is_a_union(self) -> None:
        async def run() -> None:
            index, _ = _index()
            await index.add_key_to_tags("k1", ["a"])
            await index.add_key_to_tags("k2", ["a", "b"])
            await index.add_key_to_tags("k3", ["c"])
            assert await index.keys_for_tags(["a", "b"]) == {"k1", "k2"}
        asyncio.run(run())

    def test_unknown_tag_is_empty(self) -> None:
        async def run() -> None:
            index, _ = _index()
            assert await index.keys_for_tags(["nothing"]) == set()
        asyncio.run(run())

    def test_clear_tags_removes_only_named_tags(self) -> None:
        async def run() -> None:
            index, _ = _index()
            await index.add_key_to_tags("k1", ["a", "b"])
            await index.clear_tags(["a"])
            assert await index.keys_for_tags(["a"]) == set()
            assert await index.keys_for_tags(["b"]) == {"k1"}
        asyncio.run(run())

    def test_clear_tags_twice_is_safe(self) -> None:
        async def run() -> None:
            index, _ = _index()
            await index.add_key_to_tags("k1", ["a"])
            await index.clear_tags(["a"])
            await index.clear_tags(["a"])
            assert await index.keys_for_tags(["a"]) == set()
        asyncio.run(run())

    def test_tag_sets_live_under_prefixed_tag_keys(self) -> None:
        async def run() -> None:
            index, backend = _index("aero:")
            await index.add_key_to_tags("k1", ["supplier:list", "supplier:list"])
            assert backend.tag_keys() == ["aero:tag:supplier:list"]
        asyncio.run(run())
