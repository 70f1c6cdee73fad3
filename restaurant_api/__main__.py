from __future__ import annotations

import logging

import uvicorn

from .config import DEFAULT_APP_CONFIG

logger = logging.getLogger(__name__)


def main() -> None:
    config = DEFAULT_APP_CONFIG
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Server running on http://%s:%d", config.host, config.port)
    logger.info("Environment: %s", config.environment)
    logger.info("Data directory: %s", config.data_dir)
    uvicorn.run(
        "restaurant_api.app:app",
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
