"""Config settings – Settings base class and CacheSettings."""
from __future__ import annotations

import dataclasses

from aerocache.config.validation import InvalidSettingValueError

BACKENDS = ("memory", "redis")
METRICS_EXPORTERS = ("none", "otel")


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: dataclasses.ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class CacheSettings(Settings):
    """Runtime configuration of the caching layer.

    Read from ``AEROCACHE_*`` environment variables by
    :class:`~aerocache.config.settings.loaders.EnvSettingsLoader`.
    """

    _prefix: dataclasses.ClassVar[str] = "AEROCACHE"

    enabled: bool = True
    backend: str = "memory"
    redis_url: str = "redis://localhost:6379/0"
    key_prefix: str = ""
    default_ttl_seconds: int = 30
    backend_timeout_seconds: float = 0.25
    log_level: str = "INFO"
    metrics: str = "none"
    meter_name: str = "aerocache"

    def _validate(self) -> None:
        if self.backend not in BACKENDS:
            raise InvalidSettingValueError(
                "backend", self.backend, f"expected one of {', '.join(BACKENDS)}"
            )
        if self.metrics not in METRICS_EXPORTERS:
            raise InvalidSettingValueError(
                "metrics", self.metrics, f"expected one of {', '.join(METRICS_EXPORTERS)}"
            )
        if self.default_ttl_seconds <= 0:
            raise InvalidSettingValueError(
                "default_ttl_seconds", self.default_ttl_seconds, "must be positive"
            )
        if self.backend_timeout_seconds <= 0:
            raise InvalidSettingValueError(
                "backend_timeout_seconds", self.backend_timeout_seconds, "must be positive"
            )


__all__ = ["BACKENDS", "METRICS_EXPORTERS", "CacheSettings", "Settings"]
