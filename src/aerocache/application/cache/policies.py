"""Application cache – CachePolicy and PolicyRegistry."""
from __future__ import annotations

import dataclasses
import enum
from typing import Any, Iterator, Mapping

__all__ = ["CachePolicies", "CachePolicy", "CacheScope", "PolicyRegistry"]


class CacheScope(str, enum.Enum):
    """How an operation's results are keyed."""

    ENTITY = "entity"
    QUERY = "query"


@dataclasses.dataclass(frozen=True)
class CachePolicy:
    """Static caching rules for one operation."""

    ttl_seconds: float
    scope: CacheScope = CacheScope.QUERY
    default_tags: tuple[str, ...] = ()
    name: str = "custom"

    def __post_init__(self) -> None:
        if self.ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {self.ttl_seconds!r}")

    @classmethod
    def custom(cls, **overrides: Any) -> "CachePolicy":
        """Build a policy from :attr:`CachePolicies.DEFAULT` with *overrides* applied."""
        return dataclasses.replace(CachePolicies.DEFAULT, **{"name": "custom", **overrides})


class CachePolicies:
    """Named presets."""

    ENTITY = CachePolicy(ttl_seconds=900, scope=CacheScope.ENTITY, name="entity")
    DYNAMIC = CachePolicy(ttl_seconds=60, name="dynamic")
    USER = CachePolicy(ttl_seconds=300, name="user")
    STATIC = CachePolicy(ttl_seconds=86_400, name="static")
    DEFAULT = CachePolicy(ttl_seconds=30, name="default")


class PolicyRegistry:
    """Maps operation names to policies; unknown operations get *default*.

    Registration happens once at process start; lookups never fail.
    """

    def __init__(
        self,
        policies: Mapping[str, CachePolicy] | None = None,
        *,
        default: CachePolicy = CachePolicies.DEFAULT,
    ) -> None:
        self._policies: dict[str, CachePolicy] = dict(policies or {})
        self._default = default

    @property
    def default(self) -> CachePolicy:
        return self._default

    def register(self, operation: str, policy: CachePolicy) -> None:
        self._policies[operation] = policy

    def policy_for(self, operation: str) -> CachePolicy:
        return self._policies.get(operation, self._default)

    def operations(self) -> Iterator[str]:
        return iter(sorted(self._policies))

    def __contains__(self, operation: str) -> bool:
        return operation in self._policies
