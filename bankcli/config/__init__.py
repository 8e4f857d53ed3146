"""Configuration package."""

from bankcli.config.settings import (
    LedgerSettings,
    LoggingSettings,
    PersistenceSettings,
    Settings,
    get_settings,
)

__all__ = [
    "LedgerSettings",
    "LoggingSettings",
    "PersistenceSettings",
    "Settings",
    "get_settings",
]
