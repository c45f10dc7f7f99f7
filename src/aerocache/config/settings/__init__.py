"""Config settings – 12-factor env-based configuration."""
from aerocache.config.settings.base import CacheSettings, Settings
from aerocache.config.settings.factory import SettingsFactory, load_cache_settings
from aerocache.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader, env_name

__all__ = [
    "CacheSettings",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
    "env_name",
    "load_cache_settings",
]
