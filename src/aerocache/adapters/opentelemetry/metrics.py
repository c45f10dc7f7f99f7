"""OpenTelemetry adapter – OtelMetrics."""
from __future__ import annotations

from typing import Any

from aerocache.observability.metrics import Counter, Histogram, Metrics


def _require_otel() -> None:
    try:
        import opentelemetry.metrics  # noqa: F401
    except ImportError as exc:
        raise ImportError("Install 'aerocache[otel]' to export cache metrics to OpenTelemetry") from exc


class _OtelCounter(Counter):
    def __init__(self, counter: Any) -> None:
        self._counter = counter

    def add(self, value: float = 1.0, labels: dict[str, str] | None = None) -> None:
        self._counter.add(value, attributes=labels)


class _OtelHistogram(Histogram):
    def __init__(self, histogram: Any) -> None:
        self._histogram = histogram

    def record(self, value: float, labels: dict[str, str] | None = None) -> None:
        self._histogram.record(value, attributes=labels)


class OtelMetrics(Metrics):
    """Cache counters and the load-duration histogram on an OpenTelemetry meter.

    Instruments come from the globally configured meter provider, so the
    application decides where ``cache.hits`` and friends are exported.
    ``boundaries`` is handed to the SDK as an advisory bucket layout.
    """

    def __init__(self, meter_name: str = "aerocache") -> None:
        _require_otel()
        from opentelemetry import metrics

        self._meter = metrics.get_meter(meter_name)

    def counter(self, name: str, description: str = "", unit: str = "") -> Counter:
        return _OtelCounter(self._meter.create_counter(name, description=description, unit=unit))

    def histogram(
        self,
        name: str,
        description: str = "",
        unit: str = "ms",
        boundaries: list[float] | None = None,
    ) -> Histogram:
        if boundaries:
            instrument = self._meter.create_histogram(
                name,
                description=description,
                unit=unit,
                explicit_bucket_boundaries_advisory=boundaries,
            )
        else:
            instrument = self._meter.create_histogram(name, description=description, unit=unit)
        return _OtelHistogram(instrument)


__all__ = ["OtelMetrics"]
