"""Configuration package for runtime settings and startup validation."""

from .settings import CONFIG_SPLIT_SOURCES, AppSettings, SettingsLoadError, config_load_settings

__all__ = ["CONFIG_SPLIT_SOURCES", "AppSettings", "SettingsLoadError", "config_load_settings"]
