"""Application cache – CachedService adapter and its operation table."""
from __future__ import annotations

import dataclasses
import functools
from typing import Any, Awaitable, Callable, Iterable, Mapping, Sequence

from aerocache.application.cache.coordinator import CacheCoordinator
from aerocache.application.cache.keys import bind_arguments
from aerocache.application.cache.mutations import Mutation, MutationKind, TagAttribute, make_tag

__all__ = ["CachedService", "OperationTable", "ReadOperation", "WriteOperation"]

TagSpec = Sequence[str] | Callable[..., Iterable[str]]


def _resolve_tags(spec: TagSpec, arguments: Mapping[str, Any]) -> list[str]:
    if callable(spec):
        return list(spec(**arguments))
    return list(spec)


@dataclasses.dataclass(frozen=True)
class ReadOperation:
    """A cached read.

    ``tags`` and ``dependencies`` are each either a fixed sequence or a
    callable receiving the bound call arguments as keyword arguments.
    ``id_arg`` names the parameter holding the entity id; it is required for
    entity-scoped policies. A read with neither an id nor any tag is indexed
    under ``<type>:list`` so that every write still reaches it.
    """

    tags: TagSpec = ()
    id_arg: str | None = None
    dependencies: TagSpec = ()

    def tags_for(self, arguments: Mapping[str, Any]) -> list[str]:
        return _resolve_tags(self.tags, arguments)

    def dependencies_for(self, arguments: Mapping[str, Any]) -> list[str]:
        return _resolve_tags(self.dependencies, arguments)


@dataclasses.dataclass(frozen=True)
class WriteOperation:
    """A mutating call followed by invalidation."""

    kind: MutationKind = MutationKind.UPDATE
    id_arg: str | None = None
    changes_arg: str | None = None
    tags: TagSpec = ()

    def tags_for(self, arguments: Mapping[str, Any]) -> list[str]:
        return _resolve_tags(self.tags, arguments)


@dataclasses.dataclass(frozen=True)
class OperationTable:
    """Static declaration of how one domain service is cached.

    ``lookup`` is the read used to fetch the pre-mutation entity before
    updates and deletes; it must be registered in ``reads``.
    """

    entity_type: str
    reads: Mapping[str, ReadOperation]
    writes: Mapping[str, WriteOperation]
    tag_attributes: tuple[TagAttribute, ...] = ()
    lookup: str = "find_by_id"
    id_attribute: str = "id"

    def __post_init__(self) -> None:
        overlap = set(self.reads) & set(self.writes)
        if overlap:
            raise ValueError(f"Operations registered as both read and write: {sorted(overlap)}")
        if self.writes and self.lookup not in self.reads:
            raise ValueError(f"Lookup operation {self.lookup!r} is not a registered read")

    def operation_name(self, method: str) -> str:
        return f"{self.entity_type}.{method}"


class CachedService:
    """Transparent caching wrapper around a domain service.

    Registered reads go through :meth:`CacheCoordinator.read_through`,
    registered writes through :meth:`CacheCoordinator.write_through`; any
    other attribute is the wrapped service's own. Generated methods keep the
    wrapped method's name, docstring and signature.
    """

    def __init__(self, service: Any, coordinator: CacheCoordinator, table: OperationTable) -> None:
        self._service = service
        self._coordinator = coordinator
        self._table = table

    @property
    def wrapped(self) -> Any:
        return self._service

    @property
    def table(self) -> OperationTable:
        return self._table

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        target = getattr(self._service, name)
        if name in self._table.reads:
            method = self._cached_read(name, target, self._table.reads[name])
        elif name in self._table.writes:
            method = self._invalidating_write(name, target, self._table.writes[name])
        else:
            return target
        self.__dict__[name] = method
        return method

    def __dir__(self) -> Iterable[str]:
        return sorted(set(super().__dir__()) | set(dir(self._service)))

    def _cached_read(self, name: str, target: Callable[..., Any], read: ReadOperation) -> Callable[..., Any]:
        operation = self._table.operation_name(name)
        entity_type = self._table.entity_type
        coordinator = self._coordinator

        @functools.wraps(target)
        async def method(*args: Any, **kwargs: Any) -> Any:
            arguments = bind_arguments(target, args, kwargs)
            entity = (entity_type, arguments.get(read.id_arg)) if read.id_arg else None
            tags = read.tags_for(arguments)
            if entity is None and not tags:
                tags = [make_tag(entity_type, "list")]
            return await coordinator.read_through(
                operation,
                lambda: target(*args, **kwargs),
                args=arguments,
                entity=entity,
                tags=tags,
                dependencies=read.dependencies_for(arguments),
            )

        return method

    def _invalidating_write(self, name: str, target: Callable[..., Any], write: WriteOperation) -> Callable[..., Any]:
        table = self._table
        coordinator = self._coordinator

        @functools.wraps(target)
        async def method(*args: Any, **kwargs: Any) -> Any:
            arguments = bind_arguments(target, args, kwargs)
            entity_id = arguments.get(write.id_arg) if write.id_arg else None
            changes = arguments.get(write.changes_arg) if write.changes_arg else None
            mutation = Mutation(
                entity_type=table.entity_type,
                kind=write.kind,
                entity_id=entity_id,
                changes=changes if changes is not None else {},
            )
            load_previous: Callable[[], Awaitable[Any]] | None = None
            if write.kind is not MutationKind.CREATE and entity_id is not None:
                load_previous = functools.partial(getattr(self, table.lookup), entity_id)
            return await coordinator.write_through(
                mutation,
                lambda: target(*args, **kwargs),
                load_previous=load_previous,
                tag_attributes=table.tag_attributes,
                extra_tags=write.tags_for(arguments),
                id_attribute=table.id_attribute,
            )

        return method
