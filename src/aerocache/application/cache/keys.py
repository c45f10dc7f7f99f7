"""Application cache – KeyBuilder.

Entity keys are namespaced by type (``entity:<type>:<id>``). Query keys carry
a readable ``<service>.<method>`` prefix followed by the full SHA-256 of the
canonical JSON of ``[service, method, normalized_args]``, so two distinct
calls can only share a key through a hash collision.
"""
from __future__ import annotations

import dataclasses
import datetime
import decimal
import enum
import hashlib
import inspect
import json
import math
import uuid
from typing import Any, Callable, Mapping

from aerocache.kernel.errors import KeyNormalizationError

__all__ = ["KeyBuilder", "bind_arguments", "normalize"]


_MAPPING = "__mapping__"
_OBJECT = "__object__"
_RESERVED = frozenset({_MAPPING, _OBJECT})


def _canonical_order(value: Any) -> str:
    return json.dumps(value, sort_keys=True)


def _qualified_name(value: Any) -> str:
    cls = type(value)
    return f"{cls.__module__}.{cls.__qualname__}"


def normalize(value: Any) -> Any:
    """Coerce *value* into a JSON-compatible structure with a stable layout.

    Mappings with only string keys become plain objects. Any other mapping
    (or one using a reserved key) becomes ``{"__mapping__": [[k, v], ...]}``
    so ``{1: x}`` and ``{"1": x}`` stay apart; dataclasses and models become
    ``{"__object__": [qualified_name, fields]}``.
    """
    if isinstance(value, enum.Enum):
        return normalize(value.value)
    if value is None or isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise KeyNormalizationError(
                f"Non-finite float {value!r} cannot be part of a cache key",
                value_type="float",
            )
        return value
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, (decimal.Decimal, uuid.UUID)):
        return str(value)
    if isinstance(value, Mapping):
        items = [(normalize(k), v) for k, v in value.items()]
        if all(isinstance(k, str) and k not in _RESERVED for k, _ in items):
            return {k: normalize(v) for k, v in sorted(items, key=lambda kv: kv[0])}
        pairs = [[k, normalize(v)] for k, v in items]
        return {_MAPPING: sorted(pairs, key=_canonical_order)}
    if isinstance(value, (list, tuple)):
        return [normalize(v) for v in value]
    if isinstance(value, (set, frozenset)):
        items = [normalize(v) for v in value]
        return sorted(items, key=_canonical_order)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        fields = {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
        return {_OBJECT: [_qualified_name(value), normalize(fields)]}
    model_dump = getattr(value, "model_dump", None)
    if callable(model_dump):
        return {_OBJECT: [_qualified_name(value), normalize(model_dump())]}
    raise KeyNormalizationError(
        f"Cannot derive a cache key from a value of type {type(value).__name__}",
        value_type=type(value).__name__,
    )


def bind_arguments(fn: Callable[..., Any], args: tuple[Any, ...], kwargs: Mapping[str, Any]) -> dict[str, Any]:
    """Map positional and keyword *args* onto *fn*'s parameter names.

    Defaults are applied, so ``f(x)`` and ``f(x=x)`` bind identically.
    """
    signature = inspect.signature(fn)
    bound = signature.bind(*args, **kwargs)
    bound.apply_defaults()
    arguments = dict(bound.arguments)
    for name, param in signature.parameters.items():
        if param.kind is inspect.Parameter.VAR_KEYWORD and name in arguments:
            arguments.update(arguments.pop(name))
    return arguments


class KeyBuilder:
    """Factory for deterministic cache key strings."""

    def __init__(self, prefix: str = "") -> None:
        self._prefix = prefix

    @property
    def prefix(self) -> str:
        return self._prefix

    def entity_key(self, entity_type: str, entity_id: Any) -> str:
        return f"{self._prefix}entity:{entity_type}:{entity_id}"

    @staticmethod
    def entity_tag(entity_type: str, entity_id: Any) -> str:
        return f"entity:{entity_type}:{entity_id}"

    @staticmethod
    def dependency_tag(dependency: str) -> str:
        """Tag under which entries depending on *dependency* are indexed."""
        return f"dependency:{dependency}"

    def query_key(self, service: str, method: str, args: Mapping[str, Any] | None = None) -> str:
        canonical = json.dumps(
            [service, method, normalize(dict(args or {}))],
            sort_keys=True,
            separators=(",", ":"),
            allow_nan=False,
        )
        digest = hashlib.sha256(canonical.encode()).hexdigest()
        return f"{self._prefix}query:{service}.{method}:{digest}"

    def tag_key(self, tag: str) -> str:
        return f"{self._prefix}tag:{tag}"
