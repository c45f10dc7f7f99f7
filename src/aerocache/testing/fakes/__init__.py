"""Testing fakes – in-memory doubles for kernel ports."""
from aerocache.kernel.time import FrozenClock
from aerocache.testing.fakes.backend import FlakyCacheBackend
from aerocache.testing.fakes.clock import FakeClock
from aerocache.testing.fakes.metrics import FakeMetricsRegistry
from aerocache.testing.fakes.supplier import InMemorySupplierService

__all__ = [
    "FakeClock",
    "FakeMetricsRegistry",
    "FlakyCacheBackend",
    "FrozenClock",
    "InMemorySupplierService",
]
