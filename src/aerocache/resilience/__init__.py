"""Resilience – timeout enforcement for cache backend calls."""
from aerocache.resilience.timeouts import TimeoutPolicy

__all__ = ["TimeoutPolicy"]
