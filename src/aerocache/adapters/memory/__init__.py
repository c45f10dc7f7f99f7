"""In-memory adapter – single-process cache backend."""
from aerocache.adapters.memory.backend import InMemoryCacheBackend

__all__ = ["InMemoryCacheBackend"]
