"""Application-layer errors: misuse of the cache layer by its callers."""

from __future__ import annotations

from typing import Any

from aerocache.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class KeyNormalizationError(ApplicationError):
    """Call arguments cannot be turned into a deterministic cache key.

    Indicates the operation was registered with an incompatible policy; it is
    surfaced to the caller and never treated as a cache miss.
    """

    default_code = "key_normalization_error"

    def __init__(
        self,
        message: str,
        *,
        value_type: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.value_type = value_type


__all__ = ["ApplicationError", "KeyNormalizationError"]
