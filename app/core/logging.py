"""Application logger.

Everything logs through the ``rehabiri`` logger to stdout. The Mongo driver
and the SMTP client are held at WARNING so request logs stay readable at
INFO.
"""

import logging
import sys

from app.config import settings


LOGGER_NAME = "rehabiri"
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s [%(module)s:%(lineno)d] %(message)s"
QUIET_LOGGERS = ("pymongo", "motor", "aiosmtplib", "passlib")


def resolve_level(name: str) -> int:
    """Numeric level for a LOG_LEVEL name; unknown names fall back to INFO."""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(level_name: str = settings.LOG_LEVEL) -> logging.Logger:
    level = resolve_level(level_name)

    app_logger = logging.getLogger(LOGGER_NAME)
    app_logger.setLevel(level)
    app_logger.propagate = False

    # uvicorn --reload imports this module again
    if not app_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
        app_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    return app_logger


logger = setup_logging()
