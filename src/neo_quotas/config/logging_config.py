"""Centralized logging configuration for neo-quotas.

Provides consistent logging with environment-based control over level and
format, and quiets chatty third-party modules.
"""

import logging
import logging.config
import os
from enum import Enum
from typing import Any, Dict, Optional


class LogFormat(str, Enum):
    """Log format options."""
    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"


FORMAT_STRINGS = {
    LogFormat.SIMPLE: "%(asctime)s - %(levelname)s - %(message)s",
    LogFormat.DETAILED: "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
    LogFormat.JSON: '{"time":"%(asctime)s","level":"%(levelname)s","module":"%(name)s","message":"%(message)s"}',
}


class LoggingConfig:
    """Centralized logging configuration manager."""

    # Modules that should only log warnings and above
    QUIET_MODULES = [
        "asyncpg",
        "redis",
        "uvicorn.access",
    ]

    # Modules that should only log errors
    ERROR_ONLY_MODULES = [
        "httpx",
        "httpcore",
        "asyncio",
    ]

    @classmethod
    def build_config(cls, log_level: str = "INFO", log_format: str = "simple") -> Dict[str, Any]:
        """Build a dictConfig mapping for the given level and format."""
        level = log_level.upper()
        if level not in logging.getLevelNamesMapping():
            level = "INFO"

        try:
            format_string = FORMAT_STRINGS[LogFormat(log_format.lower())]
        except ValueError:
            format_string = FORMAT_STRINGS[LogFormat.SIMPLE]

        logging_config: Dict[str, Any] = {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": format_string,
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": level,
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                },
            },
            "root": {
                "level": level,
                "handlers": ["console"],
            },
            "loggers": {},
        }

        for module in cls.QUIET_MODULES:
            logging_config["loggers"][module] = {
                "level": "WARNING" if level != "DEBUG" else "DEBUG",
                "handlers": ["console"],
                "propagate": False,
            }

        for module in cls.ERROR_ONLY_MODULES:
            logging_config["loggers"][module] = {
                "level": "ERROR",
                "handlers": ["console"],
                "propagate": False,
            }

        return logging_config

    @classmethod
    def configure(cls, log_level: Optional[str] = None, log_format: Optional[str] = None) -> None:
        """Configure logging, falling back to LOG_LEVEL / LOG_FORMAT env vars."""
        level = log_level or os.getenv("LOG_LEVEL", "INFO")
        fmt = log_format or os.getenv("LOG_FORMAT", "simple")
        logging.config.dictConfig(cls.build_config(level, fmt))

        logger = logging.getLogger(__name__)
        logger.debug(f"Logging configured: level={level}, format={fmt}")

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Get a logger for the given module name."""
        return logging.getLogger(name)

    @classmethod
    def set_module_level(cls, module_name: str, level: str) -> None:
        """Set log level for a specific module."""
        logging.getLogger(module_name).setLevel(getattr(logging, level.upper()))
