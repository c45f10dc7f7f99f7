"""Application cache – write-side records and tag derivation helpers."""
from __future__ import annotations

import dataclasses
import enum
from typing import Any, Iterable, Mapping

__all__ = ["Mutation", "MutationKind", "TagAttribute", "attribute", "is_missing", "make_tag"]

_MISSING: Any = object()


def attribute(source: Any, name: str) -> Any:
    """Read *name* from a mapping or an object; ``_MISSING`` when absent."""
    if source is None:
        return _MISSING
    if isinstance(source, Mapping):
        return source.get(name, _MISSING)
    return getattr(source, name, _MISSING)


def is_missing(value: Any) -> bool:
    return value is _MISSING


def _tag_value(value: Any) -> str:
    if isinstance(value, enum.Enum):
        value = value.value
    return str(value)


def make_tag(*parts: Any) -> str:
    """Join *parts* into a tag, rendering enums by value: ``supplier:status:active``."""
    return ":".join(_tag_value(p) for p in parts)


class MutationKind(str, enum.Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclasses.dataclass(frozen=True)
class Mutation:
    """A write about to be applied to one entity.

    ``changes`` holds the attribute values supplied by the caller (the
    create payload or the update patch); ``entity_id`` is ``None`` for
    creates until the wrapped service assigns one.
    """

    entity_type: str
    kind: MutationKind
    entity_id: Any = None
    changes: Any = dataclasses.field(default_factory=dict)


@dataclasses.dataclass(frozen=True)
class TagAttribute:
    """An entity attribute whose value selects cached query results.

    A scalar attribute yields ``<type>:<tag_name>:<value>``. A collection
    yields one tag per element, read through ``item_key`` when the elements
    are records (e.g. qualifications by ``type``).
    """

    name: str
    tag_name: str | None = None
    item_key: str | None = None

    @property
    def label(self) -> str:
        return self.tag_name or self.name

    def values(self, *sources: Any) -> list[str]:
        """Values of the attribute in the first of *sources* that has it."""
        for source in sources:
            raw = attribute(source, self.name)
            if not is_missing(raw):
                break
        else:
            return []
        if raw is None:
            return []
        items: Iterable[Any] = raw if isinstance(raw, (list, tuple, set, frozenset)) else [raw]
        if self.item_key is not None:
            items = [attribute(item, self.item_key) for item in items]
        return [_tag_value(v) for v in items if v is not None and not is_missing(v)]

    def tags(self, entity_type: str, *sources: Any) -> list[str]:
        return [make_tag(entity_type, self.label, v) for v in self.values(*sources)]
