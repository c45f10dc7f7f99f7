"""OpenTelemetry adapter – metrics for the cache coordinator."""
from aerocache.adapters.opentelemetry.metrics import OtelMetrics

__all__ = ["OtelMetrics"]
