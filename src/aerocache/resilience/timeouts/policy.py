"""Resilience – TimeoutPolicy."""
from __future__ import annotations

import asyncio
import dataclasses
from typing import Awaitable, Callable, TypeVar

from aerocache.kernel.errors import BackendTimeoutError

T = TypeVar("T")


@dataclasses.dataclass
class TimeoutPolicy:
    """Bound a backend call to ``timeout_seconds``.

    Cancellation of the calling task is not intercepted; only the policy's own
    deadline is converted into :class:`BackendTimeoutError`.
    """

    timeout_seconds: float
    resource: str = "cache"

    async def execute(self, func: Callable[[], Awaitable[T]]) -> T:
        try:
            return await asyncio.wait_for(func(), timeout=self.timeout_seconds)
        except TimeoutError as exc:
            raise BackendTimeoutError(
                self.resource,
                f"Operation timed out after {self.timeout_seconds}s",
            ) from exc


__all__ = ["TimeoutPolicy"]
