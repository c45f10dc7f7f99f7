"""Observability – metrics ports."""
from aerocache.observability.metrics.noop import NoopMetrics
from aerocache.observability.metrics.ports import Counter, Histogram, Metrics

__all__ = ["Counter", "Histogram", "Metrics", "NoopMetrics"]
