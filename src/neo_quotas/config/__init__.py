"""Configuration management for neo-quotas."""

from .settings import QuotaSettings, get_settings
from .logging_config import LoggingConfig, LogFormat

__all__ = [
    "QuotaSettings",
    "get_settings",
    "LoggingConfig",
    "LogFormat",
]
