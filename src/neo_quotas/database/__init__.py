"""Database connection management for neo-quotas."""

from .connection import (
    DatabaseManager,
    translate_errors,
)

__all__ = [
    "DatabaseManager",
    "translate_errors",
]
