"""Logging setup for hosts embedding the engine. The package itself only creates loggers, it never attaches handlers on import."""

import logging
import os
from typing import Optional

LOG_LEVEL_ENV_VAR = "CHESS_SESSION_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Attach a stream handler to the package logger.
    ----

    The level is taken from the argument, otherwise from the CHESS_SESSION_LOG_LEVEL environment variable, otherwise WARNING.
    Calling it again only changes the level (no duplicate handlers).
    """
    level_name = (level or os.environ.get(LOG_LEVEL_ENV_VAR) or DEFAULT_LOG_LEVEL).upper()
    package_logger = logging.getLogger("chess_session")
    package_logger.setLevel(level_name)

    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
    return package_logger
