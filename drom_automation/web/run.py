"""
Run script for the automation service.
"""

import uvicorn
from loguru import logger

from ..config import load_config
from ..logging_config import setup_logging

# loguru also knows SUCCESS, which uvicorn rejects
UVICORN_LOG_LEVELS = {'critical', 'error', 'warning', 'info', 'debug', 'trace'}


def uvicorn_log_level(level: str) -> str:
    """Translate a loguru level name into one uvicorn accepts."""
    level = str(level).lower()
    return level if level in UVICORN_LOG_LEVELS else 'info'


def main() -> None:
    config = load_config()
    setup_logging(config)

    host = config['server']['host']
    port = config['server']['port']
    logger.info(f"Starting Drom automation service on {host}:{port}")

    uvicorn.run(
        "drom_automation.web.app:app",
        host=host,
        port=port,
        log_level=uvicorn_log_level(config['logging'].get('level', 'INFO'))
    )


if __name__ == "__main__":
    main()
