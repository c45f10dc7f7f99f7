"""Application cache – process-start wiring of the coordinator."""
from __future__ import annotations

from aerocache.adapters.memory import InMemoryCacheBackend
from aerocache.adapters.opentelemetry import OtelMetrics
from aerocache.adapters.redis import RedisCacheBackend
from aerocache.application.cache.backend import CacheBackend
from aerocache.application.cache.coordinator import CacheCoordinator
from aerocache.application.cache.keys import KeyBuilder
from aerocache.application.cache.policies import CachePolicies, CachePolicy, PolicyRegistry
from aerocache.config.settings import CacheSettings
from aerocache.kernel.time import Clock
from aerocache.observability.logging import get_logger
from aerocache.observability.metrics import Metrics, NoopMetrics

__all__ = ["create_backend", "create_cache_coordinator", "create_metrics"]

logger = get_logger(__name__)


def create_backend(settings: CacheSettings, *, clock: Clock | None = None) -> CacheBackend:
    """Instantiate the backend named by ``settings.backend``."""
    if settings.backend == "redis":
        return RedisCacheBackend(settings.redis_url)
    return InMemoryCacheBackend(clock=clock)


def create_metrics(settings: CacheSettings) -> Metrics:
    """Instantiate the metrics exporter named by ``settings.metrics``."""
    if settings.metrics == "otel":
        return OtelMetrics(settings.meter_name)
    return NoopMetrics()


def create_cache_coordinator(
    settings: CacheSettings,
    policies: dict[str, CachePolicy] | None = None,
    *,
    backend: CacheBackend | None = None,
    metrics: Metrics | None = None,
    clock: Clock | None = None,
) -> CacheCoordinator:
    """Build the single coordinator instance shared by every cached service.

    Unregistered operations fall back to the default policy with
    ``settings.default_ttl_seconds``. Without an explicit *metrics* port the
    exporter named by ``settings.metrics`` is used.
    """
    registry = PolicyRegistry(
        policies,
        default=CachePolicy.custom(ttl_seconds=settings.default_ttl_seconds, name=CachePolicies.DEFAULT.name),
    )
    coordinator = CacheCoordinator(
        backend or create_backend(settings, clock=clock),
        policies=registry,
        key_builder=KeyBuilder(settings.key_prefix),
        settings=settings,
        metrics=metrics if metrics is not None else create_metrics(settings),
    )
    logger.info(
        "cache_coordinator_ready",
        backend=settings.backend if backend is None else backend.name,
        enabled=settings.enabled,
        metrics=settings.metrics if metrics is None else type(metrics).__name__,
        policies=len(list(registry.operations())),
    )
    return coordinator
