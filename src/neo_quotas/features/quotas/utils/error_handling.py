"""Standardized error handling for quota operations.

Domain errors are logged at INFO, retryable infrastructure errors at
WARNING and anything else at ERROR. Every error is re-raised.
"""

import functools
import logging
from typing import Any, Callable

from ....core.exceptions import NeoQuotasError, QuotaError, ValidationError

logger = logging.getLogger(__name__)


def quota_error_handler(operation_name: str, log_level: int = logging.ERROR):
    """Decorator that logs failures of a quota operation with context.

    Usage:
        @quota_error_handler("set quota limit")
        async def set_limit(self, organization_id, quota_type, new_limit):
            ...
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> Any:
            try:
                return await func(*args, **kwargs)
            except NeoQuotasError as e:
                if e.retryable:
                    logger.warning(f"Retryable failure in {operation_name}: {e} | code={e.error_code}")
                elif isinstance(e, (QuotaError, ValidationError)):
                    logger.info(f"Domain exception in {operation_name}: {e} | code={e.error_code}")
                else:
                    logger.log(log_level, f"Failed to {operation_name}: {e} | code={e.error_code}")
                raise
            except Exception as e:
                logger.log(log_level, f"Unexpected error in {operation_name}: {e}")
                raise

        return wrapper
    return decorator
