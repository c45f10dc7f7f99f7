"""Application cache – CacheStats snapshot."""
from __future__ import annotations

import dataclasses

__all__ = ["CacheStats"]


@dataclasses.dataclass
class CacheStats:
    """In-process counters for one coordinator."""

    hits: int = 0
    misses: int = 0
    sets: int = 0
    deletes: int = 0
    errors: int = 0
    invalidations: int = 0

    @property
    def hit_ratio(self) -> float:
        lookups = self.hits + self.misses
        return self.hits / lookups if lookups else 0.0

    def to_dict(self) -> dict[str, float]:
        payload: dict[str, float] = dataclasses.asdict(self)
        payload["hit_ratio"] = self.hit_ratio
        return payload
