"""Application cache – tag-indexed read-through caching with invalidation."""
from aerocache.application.cache.adapter import (
    CachedService,
    OperationTable,
    ReadOperation,
    WriteOperation,
)
from aerocache.application.cache.backend import CacheBackend
from aerocache.application.cache.coordinator import CacheCoordinator
from aerocache.application.cache.factory import create_backend, create_cache_coordinator, create_metrics
from aerocache.application.cache.keys import KeyBuilder, bind_arguments, normalize
from aerocache.application.cache.mutations import Mutation, MutationKind, TagAttribute, make_tag
from aerocache.application.cache.policies import (
    CachePolicies,
    CachePolicy,
    CacheScope,
    PolicyRegistry,
)
from aerocache.application.cache.stats import CacheStats
from aerocache.application.cache.tags import TagIndex

__all__ = [
    "CacheBackend",
    "CacheCoordinator",
    "CachePolicies",
    "CachePolicy",
    "CacheScope",
    "CacheStats",
    "CachedService",
    "KeyBuilder",
    "Mutation",
    "MutationKind",
    "OperationTable",
    "PolicyRegistry",
    "ReadOperation",
    "TagAttribute",
    "TagIndex",
    "WriteOperation",
    "bind_arguments",
    "create_backend",
    "create_cache_coordinator",
    "create_metrics",
    "make_tag",
    "normalize",
]
