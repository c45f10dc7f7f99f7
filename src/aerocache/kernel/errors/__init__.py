"""Kernel error hierarchy: public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError              (domain.py)
    │   ├── ValidationError
    │   ├── NotFoundError
    │   └── ConflictError
    ├── ApplicationError         (application.py)
    │   └── KeyNormalizationError
    └── InfrastructureError      (infrastructure.py)
        └── CacheBackendError
            ├── BackendTimeoutError
            └── SerializationError
"""

from aerocache.kernel.errors.application import ApplicationError, KeyNormalizationError
from aerocache.kernel.errors.base import BaseError
from aerocache.kernel.errors.domain import (
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from aerocache.kernel.errors.infrastructure import (
    BackendTimeoutError,
    CacheBackendError,
    InfrastructureError,
    SerializationError,
)

__all__ = [
    "ApplicationError",
    "BackendTimeoutError",
    "BaseError",
    "CacheBackendError",
    "ConflictError",
    "DomainError",
    "InfrastructureError",
    "KeyNormalizationError",
    "NotFoundError",
    "SerializationError",
    "ValidationError",
]
