"""
aerocache – tag-indexed read-through caching for domain services.

Import path convention::

    from aerocache.application.cache import CacheCoordinator, CachedService
    from aerocache.adapters.memory import InMemoryCacheBackend
    from aerocache.domains.supplier import CachedSupplierService
    from aerocache.kernel.errors import NotFoundError
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
