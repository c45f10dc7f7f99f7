"""Testing – in-memory doubles for exercising the cache layer."""
from aerocache.testing.fakes import (
    FakeClock,
    FakeMetricsRegistry,
    FlakyCacheBackend,
    InMemorySupplierService,
)

__all__ = ["FakeClock", "FakeMetricsRegistry", "FlakyCacheBackend", "InMemorySupplierService"]
