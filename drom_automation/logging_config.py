"""
Logging setup (loguru sinks)
"""

import sys
from typing import Any, Dict

from loguru import logger


def setup_logging(config: Dict[str, Any]) -> None:
    """Replace the default loguru sink with the configured stderr and file sinks."""
    log_config = config.get('logging', {})
    level = log_config.get('level', 'INFO')

    logger.remove()
    logger.add(sys.stderr, level=level)

    log_file = log_config.get('file')
    if log_file:
        logger.add(log_file, rotation=log_config.get('rotation', '10 MB'), level=level)
