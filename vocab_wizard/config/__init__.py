"""Configuration module for the Vocab Wizard application"""

from .settings import (
    AppSettings,
    DictionarySettings,
    LoggingSettings,
    SchedulerSettings,
    StorageSettings,
    TranslatorSettings,
    settings,
)

__all__ = [
    "AppSettings",
    "TranslatorSettings",
    "DictionarySettings",
    "StorageSettings",
    "SchedulerSettings",
    "LoggingSettings",
    "settings",
]
