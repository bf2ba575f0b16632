"""
Logging setup for command-line use. Library modules only create loggers;
the handler is installed here by the entrypoint.
"""

from __future__ import annotations

import logging
from typing import Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Set the ``boxpack`` log level and attach a stderr handler once."""
    logger = logging.getLogger("boxpack")
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
