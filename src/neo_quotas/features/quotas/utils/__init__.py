"""Quota utilities: SQL queries, window arithmetic, validation, error handling."""

from .validation import QuotaValidationRules
from .windows import ensure_utc, floor_to_window, window_bounds
from .error_handling import quota_error_handler

__all__ = [
    "QuotaValidationRules",
    "ensure_utc",
    "floor_to_window",
    "window_bounds",
    "quota_error_handler",
]
