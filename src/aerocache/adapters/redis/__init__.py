"""Redis adapter – shared cache backend."""
from aerocache.adapters.redis.backend import RedisCacheBackend
from aerocache.adapters.redis.serializer import JsonValueSerializer

__all__ = ["JsonValueSerializer", "RedisCacheBackend"]
