"""Config settings – SettingsFactory and the CacheSettings entry point."""
from __future__ import annotations

import dataclasses
from typing import Any, Sequence, TypeVar

from aerocache.config.settings.base import CacheSettings, Settings
from aerocache.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader
from aerocache.config.validation.errors import ConfigError, MissingRequiredSettingError
from aerocache.observability.logging import get_logger

T = TypeVar("T", bound=Settings)

logger = get_logger(__name__)


class SettingsFactory:
    """Layer several loaders and explicit overrides into one settings object.

    Later loaders win over earlier ones and *overrides* win over all of them.
    A loader that raises :class:`ConfigError` contributes nothing; the
    failure is logged and the next loader is tried.
    """

    @staticmethod
    def create(
        settings_cls: type[T],
        loaders: Sequence[SettingsLoader] = (),
        overrides: dict[str, Any] | None = None,
    ) -> T:
        field_names = [f.name for f in dataclasses.fields(settings_cls)]
        layered: dict[str, Any] = {}
        for loader in loaders:
            try:
                loaded = loader.load(settings_cls)
            except ConfigError as exc:
                logger.warning("settings_loader_skipped", loader=type(loader).__name__, error=exc.code)
                continue
            layered.update({name: getattr(loaded, name) for name in field_names})
        layered.update(overrides or {})

        for field in dataclasses.fields(settings_cls):
            required = field.default is dataclasses.MISSING and field.default_factory is dataclasses.MISSING
            if required and field.name not in layered:
                raise MissingRequiredSettingError(field.name)

        try:
            return settings_cls(**layered)
        except ConfigError:
            raise
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Cannot build {settings_cls.__name__}: {exc}", cause=exc) from exc


def load_cache_settings(env_file: str | None = None, **overrides: Any) -> CacheSettings:
    """Resolve :class:`CacheSettings` from ``AEROCACHE_*`` variables.

    With *env_file* the file is loaded first; process variables still win.
    """
    loaders: list[SettingsLoader] = [EnvSettingsLoader()]
    if env_file is not None:
        loaders.append(DotenvSettingsLoader(env_file))
    return SettingsFactory.create(CacheSettings, loaders, overrides)


__all__ = ["SettingsFactory", "load_cache_settings"]
