"""
Process entrypoint.

    python -m services.dashboard.server

Binds uvicorn on HOST:PORT unless SERVERLESS (or VERCEL / VERCEL_DEV) is set,
in which case the external invoker imports services.dashboard.main:app
itself and nothing is started here.
"""

import logging

import uvicorn

from services.dashboard.config import settings

logger = logging.getLogger(__name__)


def main() -> None:
    if settings.serverless:
        logger.info("Serverless mode: not binding a listening socket")
        return

    logging.basicConfig(level=logging.DEBUG if settings.debug else logging.INFO)
    logger.info("Kindle Weather Dashboard running on port %d", settings.port)
    logger.info("Dashboard available at: http://localhost:%d", settings.port)
    logger.info("Health check at: http://localhost:%d/health", settings.port)

    uvicorn.run(
        "services.dashboard.main:app",
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
