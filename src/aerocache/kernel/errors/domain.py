"""Domain errors: raised by wrapped domain services, never by the cache.

The cache layer lets these through unchanged and never caches them.
"""

from __future__ import annotations

from typing import Any

from aerocache.kernel.errors.base import BaseError


class DomainError(BaseError):
    default_code = "domain_error"


class ValidationError(DomainError):
    """Rejected input; ``errors`` lists the offending fields."""

    default_code = "validation_error"

    def __init__(self, message: str, *, errors: list[dict[str, Any]] | None = None, **kwargs: Any) -> None:
        self.errors: list[dict[str, Any]] = list(errors or [])
        super().__init__(message, **kwargs)
        if self.errors:
            self.detail.setdefault("errors", self.errors)


class NotFoundError(DomainError):
    """No ``resource`` with ``identifier`` exists."""

    default_code = "not_found"

    def __init__(self, resource: str, identifier: Any = None, **kwargs: Any) -> None:
        self.resource = resource
        self.identifier = identifier
        label = resource if identifier is None else f"{resource} '{identifier}'"
        super().__init__(f"{label} not found", **kwargs)
        self.detail.setdefault("resource", resource)
        if identifier is not None:
            self.detail.setdefault("identifier", identifier)


class ConflictError(DomainError):
    """The write clashes with current state (e.g. a duplicate supplier code)."""

    default_code = "conflict"


__all__ = ["ConflictError", "DomainError", "NotFoundError", "ValidationError"]
