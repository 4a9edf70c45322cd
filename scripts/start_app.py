#!/usr/bin/env python3
"""Start the discussion API under uvicorn, reporting startup errors to Logfire."""

import sys
import logfire
import uvicorn

from discuss.config import Settings
from discuss.util.logging import setup_logging
from discuss.util.observability import configure_logfire


def main() -> int:
    """Start the application and log any startup errors to Logfire."""
    settings = Settings()

    # Logfire must be configured before the app module is imported
    setup_logging(settings)
    configure_logfire(settings)

    try:
        logfire.info(
            "Starting discussion API",
            host=settings.host,
            port=settings.port,
            git_sha=settings.git_sha,
        )
        uvicorn.run(
            "discuss.interface.api.app:app",
            host=settings.host,
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails properly
        raise


if __name__ == "__main__":
    sys.exit(main())
