"""Application cache – CacheCoordinator.

Read path: key → backend lookup → (miss) loader → write-back → tag index.
Write path: previous state → mutation → entity invalidation → tag sweep.

Concurrent misses on the same key are not deduplicated: every caller that
misses runs the loader and the last write-back wins. A read-through that
repopulates a key with pre-mutation data right after a write-through swept it
leaves an entry that is stale for at most the policy TTL.
"""
from __future__ import annotations

import dataclasses
import time
from typing import Any, Awaitable, Callable, Iterable, Sequence, TypeVar

from aerocache.application.cache.backend import CacheBackend
from aerocache.application.cache.keys import KeyBuilder
from aerocache.application.cache.mutations import (
    Mutation,
    MutationKind,
    TagAttribute,
    attribute,
    is_missing,
    make_tag,
)
from aerocache.application.cache.policies import CacheScope, PolicyRegistry
from aerocache.application.cache.stats import CacheStats
from aerocache.application.cache.tags import TagIndex
from aerocache.config.settings import CacheSettings
from aerocache.kernel.errors import CacheBackendError, KeyNormalizationError
from aerocache.observability.logging import get_logger
from aerocache.observability.metrics import Metrics, NoopMetrics
from aerocache.resilience.timeouts import TimeoutPolicy

__all__ = ["CacheCoordinator", "EntityRef"]

T = TypeVar("T")

EntityRef = tuple[str, Any]

logger = get_logger(__name__)


class CacheCoordinator:
    """Read-through caching and write-triggered invalidation.

    The coordinator is the only component that writes entries or tag sets to
    the backend. One instance is built at process start and injected into
    every :class:`~aerocache.application.cache.adapter.CachedService`.

    Parameters
    ----------
    backend:
        Shared :class:`CacheBackend`.
    policies:
        Operation → policy registry. Operation names are ``<service>.<method>``.
    key_builder:
        Defaults to a :class:`KeyBuilder` using ``settings.key_prefix``.
    settings:
        :class:`CacheSettings`; defaults are used when omitted.
    metrics:
        Metrics port; :class:`NoopMetrics` when omitted.
    """

    def __init__(
        self,
        backend: CacheBackend,
        *,
        policies: PolicyRegistry | None = None,
        key_builder: KeyBuilder | None = None,
        settings: CacheSettings | None = None,
        metrics: Metrics | None = None,
    ) -> None:
        self._settings = settings or CacheSettings()
        self._backend = backend
        self._policies = policies or PolicyRegistry()
        self._keys = key_builder or KeyBuilder(self._settings.key_prefix)
        self._index = TagIndex(backend, self._keys)
        self._timeout = TimeoutPolicy(self._settings.backend_timeout_seconds, resource=backend.name)
        self._stats = CacheStats()
        metrics = metrics or NoopMetrics()
        self._hits = metrics.counter("cache.hits", "Read-through cache hits")
        self._misses = metrics.counter("cache.misses", "Read-through cache misses")
        self._sets = metrics.counter("cache.sets", "Entries written back")
        self._invalidations = metrics.counter("cache.invalidations", "Keys removed by invalidation")
        self._errors = metrics.counter("cache.errors", "Recovered cache backend failures")
        self._load_duration = metrics.histogram("cache.load_duration", "Loader latency on miss", unit="ms")

    @property
    def enabled(self) -> bool:
        return self._settings.enabled

    @property
    def key_builder(self) -> KeyBuilder:
        return self._keys

    @property
    def policies(self) -> PolicyRegistry:
        return self._policies

    @property
    def tag_index(self) -> TagIndex:
        return self._index

    # ------------------------------------------------------------------
    # Read path
    # ------------------------------------------------------------------

    async def read_through(
        self,
        operation: str,
        loader: Callable[[], Awaitable[T]],
        *,
        args: dict[str, Any] | None = None,
        entity: EntityRef | None = None,
        tags: Iterable[str] = (),
        dependencies: Iterable[str] = (),
    ) -> T:
        """Return the cached result of *operation* or compute and cache it.

        ``entity`` is required for entity-scoped policies. ``dependencies``
        names keys (or any other label) whose invalidation through
        :meth:`invalidate_dependents` must also drop this entry. Loader
        errors propagate and nothing is cached for them; ``None`` results
        are returned without being cached.
        """
        if not self.enabled:
            return await loader()

        policy = self._policies.policy_for(operation)
        key, entry_tags = self._entry(operation, policy.scope, args, entity, tags)
        entry_tags.extend(policy.default_tags)
        entry_tags.extend(self._keys.dependency_tag(d) for d in dependencies)

        cached = await self._lookup(operation, key)
        if cached is not None:
            self._stats.hits += 1
            self._hits.add(1, {"operation": operation})
            logger.debug("cache_hit", operation=operation, key=key)
            return cached  # type: ignore[no-any-return]

        self._stats.misses += 1
        self._misses.add(1, {"operation": operation})
        logger.debug("cache_miss", operation=operation, key=key)

        started = time.perf_counter()
        value = await loader()
        self._load_duration.record((time.perf_counter() - started) * 1000, {"operation": operation})

        if value is not None:
            await self._write_back(operation, key, value, policy.ttl_seconds, entry_tags)
        return value

    def _entry(
        self,
        operation: str,
        scope: CacheScope,
        args: dict[str, Any] | None,
        entity: EntityRef | None,
        tags: Iterable[str],
    ) -> tuple[str, list[str]]:
        entry_tags = list(tags)
        if entity is not None:
            entry_tags.insert(0, self._keys.entity_tag(*entity))
        if scope is CacheScope.ENTITY:
            if entity is None or entity[1] is None:
                raise KeyNormalizationError(
                    f"Entity-scoped operation {operation!r} was called without an entity id"
                )
            return self._keys.entity_key(*entity), entry_tags
        service, _, method = operation.rpartition(".")
        return self._keys.query_key(service, method, args), entry_tags

    async def _lookup(self, operation: str, key: str) -> Any:
        try:
            return await self._timeout.execute(lambda: self._backend.get(key))
        except CacheBackendError as exc:
            self._record_error("get", exc, operation=operation, key=key)
            return None

    async def _write_back(
        self,
        operation: str,
        key: str,
        value: Any,
        ttl_seconds: float,
        tags: Sequence[str],
    ) -> None:
        # Value first, index second: a failure in between leaves an
        # un-indexed entry that expires with its TTL.
        try:
            await self._timeout.execute(lambda: self._backend.set(key, value, ttl_seconds))
            self._stats.sets += 1
            self._sets.add(1, {"operation": operation})
            if tags:
                await self._timeout.execute(lambda: self._index.add_key_to_tags(key, tags))
        except CacheBackendError as exc:
            self._record_error("write_back", exc, operation=operation, key=key)
            return
        logger.debug("cache_write_back", operation=operation, key=key, ttl=ttl_seconds, tags=list(tags))

    # ------------------------------------------------------------------
    # Write path
    # ------------------------------------------------------------------

    async def write_through(
        self,
        mutation: Mutation,
        mutate: Callable[[], Awaitable[T]],
        *,
        load_previous: Callable[[], Awaitable[Any]] | None = None,
        tag_attributes: Sequence[TagAttribute] = (),
        extra_tags: Iterable[str] = (),
        id_attribute: str = "id",
    ) -> T:
        """Apply *mutate* and invalidate everything it could have made stale.

        For updates and deletes *load_previous* is awaited before the
        mutation so the old values of tagging attributes can be invalidated
        too. Errors from *load_previous* or *mutate* propagate unchanged.
        Invalidation failures are logged; the committed result is still
        returned.
        """
        if not self.enabled:
            return await mutate()

        previous: Any = None
        if mutation.kind is not MutationKind.CREATE and load_previous is not None:
            previous = await load_previous()

        result = await mutate()

        entity_id = mutation.entity_id
        if entity_id is None:
            candidate = attribute(result, id_attribute)
            entity_id = None if is_missing(candidate) else candidate

        if mutation.kind is MutationKind.DELETE:
            current: tuple[Any, ...] = ()
        else:
            current = (mutation.changes, result)
        tags = self.invalidation_tags(mutation.entity_type, tag_attributes, previous, *current)
        tags.extend(t for t in extra_tags if t not in tags)

        if entity_id is not None:
            await self._best_effort(
                mutation,
                lambda: self.invalidate_entity(mutation.entity_type, entity_id),
            )
        await self._best_effort(mutation, lambda: self.invalidate_by_tags(tags))
        return result

    @staticmethod
    def invalidation_tags(
        entity_type: str,
        tag_attributes: Sequence[TagAttribute],
        previous: Any,
        *current: Any,
    ) -> list[str]:
        """Tags to sweep after a write.

        Always ``<type>:list``. For each tagging attribute, the tag of every
        old value (read from *previous*) and every new value (first of
        *current* that carries the attribute), plus the bare
        ``<type>:<attribute>`` tag when any of those is present.
        """
        tags = [make_tag(entity_type, "list")]
        for tag_attribute in tag_attributes:
            value_tags = tag_attribute.tags(entity_type, previous)
            value_tags += tag_attribute.tags(entity_type, *current)
            if value_tags:
                value_tags.insert(0, make_tag(entity_type, tag_attribute.label))
            tags.extend(t for t in value_tags if t not in tags)
        return tags

    async def _best_effort(self, mutation: Mutation, sweep: Callable[[], Awaitable[int]]) -> None:
        try:
            await sweep()
        except CacheBackendError as exc:
            self._record_error(
                "invalidate",
                exc,
                entity_type=mutation.entity_type,
                entity_id=mutation.entity_id,
                kind=mutation.kind.value,
                event="cache_invalidation_failed",
            )

    # ------------------------------------------------------------------
    # Invalidation
    # ------------------------------------------------------------------

    async def invalidate_entity(self, entity_type: str, entity_id: Any) -> int:
        """Drop the entity's own entry and every entry tagged with it."""
        key = self._keys.entity_key(entity_type, entity_id)
        await self._timeout.execute(lambda: self._backend.delete(key))
        self._stats.deletes += 1
        swept = await self.invalidate_by_tags([self._keys.entity_tag(entity_type, entity_id)])
        return swept + 1

    async def invalidate_by_tags(self, tags: Iterable[str]) -> int:
        """Delete every key indexed under any of *tags*, then clear those tags.

        Idempotent: a second call finds empty tag sets and deletes nothing.
        Backend failures propagate to the caller.
        """
        tags = list(dict.fromkeys(tags))
        if not tags:
            return 0
        keys = await self._timeout.execute(lambda: self._index.keys_for_tags(tags))
        await self._delete_keys(keys)
        await self._timeout.execute(lambda: self._index.clear_tags(tags))
        logger.debug("cache_invalidated", tags=tags, keys_removed=len(keys))
        return len(keys)

    async def invalidate_keys(self, keys: Iterable[str]) -> int:
        """Delete each of *keys* outright; returns how many distinct keys.

        Tag sets that still list a deleted key are left alone: a later sweep
        deletes the missing key again, which is a no-op.
        """
        unique = set(keys)
        await self._delete_keys(unique)
        if unique:
            logger.debug("cache_keys_invalidated", keys_removed=len(unique))
        return len(unique)

    async def invalidate_dependents(self, dependency: str) -> int:
        """Drop every entry registered as depending on *dependency*.

        Transitive: an entry whose key is itself a dependency of other
        entries takes those with it. Cycles are followed once.
        """
        seen = {dependency}
        frontier = [dependency]
        dependents: set[str] = set()
        tags: list[str] = []
        while frontier:
            level = [self._keys.dependency_tag(d) for d in frontier]
            found = await self._timeout.execute(lambda level=level: self._index.keys_for_tags(level))
            tags.extend(level)
            dependents |= found
            frontier = sorted(found - seen)
            seen |= found
        await self._delete_keys(dependents)
        await self._timeout.execute(lambda: self._index.clear_tags(tags))
        logger.debug("cache_dependents_invalidated", dependency=dependency, keys_removed=len(dependents))
        return len(dependents)

    async def _delete_keys(self, keys: set[str]) -> None:
        for key in sorted(keys):
            await self._timeout.execute(lambda key=key: self._backend.delete(key))
        self._stats.deletes += len(keys)
        self._stats.invalidations += len(keys)
        if keys:
            self._invalidations.add(len(keys))

    # ------------------------------------------------------------------
    # Housekeeping
    # ------------------------------------------------------------------

    def stats(self) -> CacheStats:
        return dataclasses.replace(self._stats)

    def reset_stats(self) -> None:
        self._stats = CacheStats()

    async def close(self) -> None:
        await self._backend.close()

    def _record_error(self, stage: str, exc: CacheBackendError, *, event: str = "cache_backend_degraded", **context: Any) -> None:
        self._stats.errors += 1
        self._errors.add(1, {"stage": stage})
        logger.warning(event, stage=stage, error=exc.code, message=exc.message, **context)
