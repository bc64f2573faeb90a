"""neo-quotas main entry point."""

import uvicorn

from .config import LoggingConfig, get_settings

LoggingConfig.configure()

from .api import create_app

logger = LoggingConfig.get_logger(__name__)


def main() -> None:
    """Run the application."""
    settings = get_settings()

    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port}")

    uvicorn.run(
        "neo_quotas.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
        access_log=True,
    )


if __name__ == "__main__":
    main()
