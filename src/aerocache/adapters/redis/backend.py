"""Redis adapter – RedisCacheBackend."""
from __future__ import annotations

from typing import Any, Awaitable, Callable, TypeVar

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from aerocache.adapters.redis.serializer import JsonValueSerializer
from aerocache.kernel.errors import CacheBackendError

T = TypeVar("T")


class RedisCacheBackend:
    """Cache backend on a shared Redis instance.

    Entries are ``SET key value PX ttl_ms``; tag sets are Redis sets
    (``SADD`` / ``SMEMBERS`` / ``DEL``). Every client error is raised as
    :class:`CacheBackendError` so the coordinator can degrade to a miss.
    """

    name = "redis"

    def __init__(
        self,
        url: str,
        *,
        serializer: JsonValueSerializer | None = None,
        **kwargs: Any,
    ) -> None:
        self._client = aioredis.from_url(url, **kwargs)
        self._serializer = serializer or JsonValueSerializer()

    async def get(self, key: str) -> Any:
        raw = await self._guard("get", lambda: self._client.get(key))
        if raw is None:
            return None
        return self._serializer.deserialize(raw)

    async def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        payload = self._serializer.serialize(value)
        await self._guard("set", lambda: self._client.set(key, payload, px=max(1, int(ttl_seconds * 1000))))

    async def delete(self, key: str) -> None:
        await self._guard("delete", lambda: self._client.delete(key))

    async def add_to_set(self, tag_key: str, member: str) -> None:
        await self._guard("sadd", lambda: self._client.sadd(tag_key, member))

    async def members_of(self, tag_key: str) -> set[str]:
        members = await self._guard("smembers", lambda: self._client.smembers(tag_key))
        return {m.decode() if isinstance(m, bytes) else m for m in members}

    async def delete_key(self, tag_key: str) -> None:
        await self._guard("delete", lambda: self._client.delete(tag_key))

    async def close(self) -> None:
        await self._client.aclose()

    async def _guard(self, command: str, call: Callable[[], Awaitable[T]]) -> T:
        try:
            return await call()
        except (RedisError, OSError) as exc:
            raise CacheBackendError(
                self.name, f"Redis {command} failed: {exc}", cause=exc
            ) from exc


__all__ = ["RedisCacheBackend"]
