"""Redis adapter – JsonValueSerializer."""
from __future__ import annotations

import base64
import datetime
import decimal
import json
import uuid
from typing import Any, Callable

from aerocache.kernel.errors import SerializationError

_MARKER = "__aerocache__"

_SCALARS = (str, int, float, bool)

_DECODERS: dict[str, Callable[[Any], Any]] = {
    "tuple": tuple,
    "set": set,
    "frozenset": frozenset,
    "dict": lambda pairs: {k: v for k, v in pairs},
    "bytes": lambda text: base64.b64decode(text.encode("ascii")),
    "datetime": datetime.datetime.fromisoformat,
    "date": datetime.date.fromisoformat,
    "time": datetime.time.fromisoformat,
    "decimal": decimal.Decimal,
    "uuid": uuid.UUID,
}


def _tagged(kind: str, value: Any) -> dict[str, Any]:
    return {_MARKER: kind, "v": value}


class JsonValueSerializer:
    """JSON encoder/decoder for cached values.

    Only values that decode back to an equal object of the same type are
    accepted. JSON scalars, lists and str-keyed dicts are written as plain
    JSON; tuples, sets, bytes, dates, decimals, UUIDs and dicts with
    non-string keys are wrapped in a ``{"__aerocache__": kind, "v": ...}``
    envelope. Anything else (dataclasses, models, enums, arbitrary objects)
    raises :class:`SerializationError`, so the coordinator returns the value
    without caching it.
    """

    def serialize(self, value: Any) -> bytes:
        try:
            return json.dumps(self._encode(value, set()), separators=(",", ":")).encode()
        except (TypeError, ValueError) as exc:
            raise SerializationError(
                f"Cannot encode value of type {type(value).__name__}: {exc}",
                payload_type=type(value).__name__,
                backend="redis",
                cause=exc,
            ) from exc

    def deserialize(self, data: bytes) -> Any:
        try:
            return json.loads(data, object_hook=self._decode)
        except (TypeError, ValueError, KeyError, decimal.InvalidOperation) as exc:
            raise SerializationError(
                "Cannot decode cached value", payload_type="bytes", backend="redis", cause=exc
            ) from exc

    def _encode(self, value: Any, active: set[int]) -> Any:
        kind = type(value)
        if value is None or kind in _SCALARS:
            return value
        if kind in (bytes, datetime.datetime, datetime.date, datetime.time, decimal.Decimal, uuid.UUID):
            return self._encode_leaf(value)
        if kind not in (list, tuple, set, frozenset, dict):
            raise TypeError(f"values of type {kind.__qualname__} do not survive a cache round-trip")

        if id(value) in active:
            raise ValueError("circular reference")
        active.add(id(value))
        try:
            if kind is dict:
                if all(type(k) is str for k in value) and _MARKER not in value:
                    return {k: self._encode(v, active) for k, v in value.items()}
                pairs = [[self._encode(k, active), self._encode(v, active)] for k, v in value.items()]
                return _tagged("dict", pairs)
            items = [self._encode(v, active) for v in value]
            return items if kind is list else _tagged(kind.__name__, items)
        finally:
            active.discard(id(value))

    @staticmethod
    def _encode_leaf(value: Any) -> dict[str, Any]:
        if isinstance(value, bytes):
            return _tagged("bytes", base64.b64encode(value).decode("ascii"))
        if isinstance(value, decimal.Decimal):
            return _tagged("decimal", str(value))
        if isinstance(value, uuid.UUID):
            return _tagged("uuid", str(value))
        return _tagged(type(value).__name__, value.isoformat())

    @staticmethod
    def _decode(obj: dict[str, Any]) -> Any:
        if _MARKER not in obj or set(obj) != {_MARKER, "v"}:
            return obj
        kind = obj[_MARKER]
        if kind not in _DECODERS:
            raise ValueError(f"unknown envelope kind {kind!r}")
        return _DECODERS[kind](obj["v"])


__all__ = ["JsonValueSerializer"]
