"""Config settings – environment and ``.env`` loaders."""
from __future__ import annotations

import abc
import dataclasses
import os
from typing import Any, Callable, Mapping, TypeVar

from dotenv import load_dotenv

from aerocache.config.settings.base import Settings
from aerocache.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

T = TypeVar("T", bound=Settings)

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off", ""})


def _to_bool(raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ValueError(f"expected a boolean, got {raw!r}")


# Field annotations are strings under ``from __future__ import annotations``.
_COERCERS: dict[str, Callable[[str], Any]] = {
    "bool": _to_bool,
    "int": int,
    "float": float,
    "str": str,
}


def env_name(settings_class: type[Settings], field_name: str) -> str:
    """``CacheSettings.default_ttl_seconds`` → ``AEROCACHE_DEFAULT_TTL_SECONDS``."""
    prefix = settings_class._prefix
    return f"{prefix}_{field_name}".upper() if prefix else field_name.upper()


class SettingsLoader(abc.ABC):
    """Port: build a settings object from an external source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


class EnvSettingsLoader(SettingsLoader):
    """Read ``<PREFIX>_<FIELD>`` variables from *environ* (``os.environ`` by default).

    Fields without a variable keep their dataclass default; a required field
    without one raises :class:`MissingRequiredSettingError`.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def load(self, settings_class: type[T]) -> T:
        environ = os.environ if self._environ is None else self._environ
        values: dict[str, Any] = {}
        for field in dataclasses.fields(settings_class):
            name = env_name(settings_class, field.name)
            if name in environ:
                values[field.name] = self._coerce(name, environ[name], field.type)
            elif field.default is dataclasses.MISSING and field.default_factory is dataclasses.MISSING:
                raise MissingRequiredSettingError(name)
        try:
            return settings_class(**values)
        except ConfigError:
            raise
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Cannot build {settings_class.__name__}: {exc}", cause=exc) from exc

    @staticmethod
    def _coerce(name: str, raw: str, annotation: Any) -> Any:
        key = annotation if isinstance(annotation, str) else getattr(annotation, "__name__", "str")
        coerce = _COERCERS.get(key, str)
        try:
            return coerce(raw)
        except ValueError as exc:
            raise InvalidSettingValueError(name, raw, str(exc)) from exc


class DotenvSettingsLoader(SettingsLoader):
    """Load *env_file* into the process environment, then read it like :class:`EnvSettingsLoader`.

    Variables already set in the environment win unless *override* is true.
    """

    def __init__(self, env_file: str = ".env", override: bool = False) -> None:
        self._env_file = env_file
        self._override = override

    def load(self, settings_class: type[T]) -> T:
        load_dotenv(self._env_file, override=self._override)
        return EnvSettingsLoader().load(settings_class)


__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "SettingsLoader", "env_name"]
