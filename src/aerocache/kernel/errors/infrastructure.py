"""Infrastructure errors: cache tier failures recovered by the coordinator."""

from __future__ import annotations

from typing import Any

from aerocache.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a business rule violation."""

    default_code = "infrastructure_error"


class CacheBackendError(InfrastructureError):
    """The cache backend could not complete an operation."""

    default_code = "cache_backend_error"

    def __init__(
        self,
        backend: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"Cache backend '{backend}' failed", **kwargs)
        self.backend = backend


class BackendTimeoutError(CacheBackendError):
    """A backend call exceeded its deadline."""

    default_code = "cache_backend_timeout"


class SerializationError(CacheBackendError):
    """A cached value could not be encoded or decoded."""

    default_code = "serialization_error"

    def __init__(
        self,
        message: str,
        *,
        payload_type: str | None = None,
        backend: str = "serializer",
        **kwargs: Any,
    ) -> None:
        super().__init__(backend, message, **kwargs)
        self.payload_type = payload_type


__all__ = [
    "BackendTimeoutError",
    "CacheBackendError",
    "InfrastructureError",
    "SerializationError",
]
