"""Configuration module - public API.

Centralized configuration management using Pydantic BaseSettings with
one settings class per concern.

Exports:
    Settings: Main settings aggregator
    I18nSettings: Translation system settings
    InterpolationSettings: Template delimiter and escaping settings
    PluralizationSettings: Pluralization settings
    LoggingSettings: Log level and rendering settings
"""

from g11n.configuration.settings import (
    I18nSettings,
    InterpolationSettings,
    LoggingSettings,
    PluralizationSettings,
    Settings,
)

__all__ = [
    "Settings",
    "I18nSettings",
    "InterpolationSettings",
    "LoggingSettings",
    "PluralizationSettings",
]
