"""
Console entry point: ``author-api`` or ``python -m author_api``.

Loads settings, configures logging, and serves the app factory with uvicorn.
"""

import logging

import uvicorn

from author_api.config import Settings
from author_api.main import create_app, setup_logging

logger = logging.getLogger("author_api")


def main() -> None:
    settings = Settings()
    setup_logging(settings.log_level)
    logger.info("Loaded configuration (database: %s)", settings.redacted_database_url())

    app = create_app(settings=settings, logger=logger)
    uvicorn.run(
        app,
        host=settings.server.host,
        port=settings.server.port,
        log_config=None,  # Keep the root logging configuration above
    )


if __name__ == "__main__":
    main()
