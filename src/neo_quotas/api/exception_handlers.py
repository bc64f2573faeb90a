"""
Exception handlers for the neo-quotas FastAPI application.

Errors are rendered with their public view only, so a quota-exceeded
response names the quota type but never the numeric limit or usage.
Retryable errors carry a ``Retry-After`` header.
"""
import logging
from typing import Any, Callable, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ..core.exceptions import NeoQuotasError, get_http_status_code

logger = logging.getLogger(__name__)

ResponseFormatter = Callable[..., Dict[str, Any]]

RETRY_AFTER_SECONDS = 1


class ExceptionHandlerRegistry:
    """Registry for the application's exception handlers."""

    def __init__(
        self,
        response_formatter: Optional[ResponseFormatter] = None,
        is_production: bool = True
    ):
        """
        Initialize exception handler registry.

        Args:
            response_formatter: Function to format error responses
            is_production: Whether running in production mode
        """
        self.response_formatter = response_formatter or self._default_response_formatter
        self.is_production = is_production

    def _default_response_formatter(
        self,
        message: str,
        errors: Optional[list] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Default error response formatter."""
        return {
            "success": False,
            "message": message,
            "errors": errors or [],
            "data": None,
            "metadata": metadata or {}
        }

    def register_handlers(self, app: FastAPI) -> None:
        """Register exception handlers for the application.

        Args:
            app: FastAPI application instance
        """
        @app.exception_handler(NeoQuotasError)
        async def neo_quotas_exception_handler(request: Request, exc: NeoQuotasError):
            """Handle neo-quotas exceptions."""
            status_code = get_http_status_code(exc)
            if status_code >= 500 and not exc.retryable:
                logger.error(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")

            headers = {"Retry-After": str(RETRY_AFTER_SECONDS)} if exc.retryable else None
            return JSONResponse(
                status_code=status_code,
                content=self.response_formatter(
                    message=exc.public_message,
                    errors=[exc.to_dict()],
                    metadata={"retryable": exc.retryable}
                ),
                headers=headers
            )

        @app.exception_handler(Exception)
        async def general_exception_handler(request: Request, exc: Exception):
            """Handle unexpected exceptions."""
            logger.error(f"Unhandled exception: {exc}", exc_info=True)

            if self.is_production:
                message = "An unexpected error occurred"
            else:
                message = str(exc)

            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=self.response_formatter(message=message)
            )


def register_exception_handlers(
    app: FastAPI,
    response_formatter: Optional[ResponseFormatter] = None,
    is_production: bool = True
) -> None:
    """
    Register exception handlers for a FastAPI application.

    Args:
        app: FastAPI application instance
        response_formatter: Custom response formatter function
        is_production: Whether running in production mode
    """
    registry = ExceptionHandlerRegistry(response_formatter, is_production)
    registry.register_handlers(app)
