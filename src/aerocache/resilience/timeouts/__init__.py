"""Resilience – timeout policies."""
from aerocache.resilience.timeouts.policy import TimeoutPolicy

__all__ = ["TimeoutPolicy"]
