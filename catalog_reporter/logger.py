import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(name: str = "catalog_reporter", level: Optional[str] = None) -> logging.Logger:
    """
    Configure and return a logger for the catalog reporter.

    Level comes from the argument, then CATALOG_LOG_LEVEL, then INFO.
    """
    logger = logging.getLogger(name)
    level_name = (level or os.environ.get("CATALOG_LOG_LEVEL", "INFO")).upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
