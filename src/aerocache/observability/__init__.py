"""Observability – structured logging and metrics ports."""

from aerocache.observability.logging import Logger, configure_logging, get_logger
from aerocache.observability.metrics import Metrics, NoopMetrics

__all__ = ["Logger", "Metrics", "NoopMetrics", "configure_logging", "get_logger"]
