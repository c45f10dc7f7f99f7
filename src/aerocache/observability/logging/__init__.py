"""Observability – structured logging ports and helpers."""
from aerocache.observability.logging.factory import JsonLoggerFactory, configure_logging
from aerocache.observability.logging.processors import get_logger
from aerocache.observability.logging.protocol import Logger

__all__ = ["JsonLoggerFactory", "Logger", "configure_logging", "get_logger"]
