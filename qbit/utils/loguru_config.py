"""
Module Name: loguru_config.py
Description:
    Loguru output for the qbit-client command line. Records from the package's
    standard-library loggers are forwarded to Loguru so the CLI prints one
    consistent stream on stderr, with an optional rotating log file.

Location:
    /qbit/utils/loguru_config.py

"""

import logging
import sys
from typing import Optional, Union

from loguru import logger

LOG_FORMAT = "{time:HH:mm:ss} | {level: <7} | {extra[source]} - {message}"


class InterceptHandler(logging.Handler):
    """Forward standard logging records to Loguru, keeping the logger name."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: Union[str, int] = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.bind(source=record.name).opt(exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_loguru(log_level: Union[str, int] = "INFO", log_file: Optional[str] = None):
    """Send CLI diagnostics to stderr (stdout carries command output)."""
    level = log_level.upper() if isinstance(log_level, str) else log_level

    logger.remove()
    logger.configure(extra={"source": "Qbit"})
    logger.add(sys.stderr, level=level, format=LOG_FORMAT, diagnose=False)
    if log_file:
        logger.add(log_file, level=level, format=LOG_FORMAT, rotation="10 MB", retention=5, diagnose=False)

    logging.basicConfig(handlers=[InterceptHandler()], level=logging.NOTSET, force=True)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    # Undo a previous setup_logger() so records reach the root intercept
    package_logger = logging.getLogger("Qbit")
    package_logger.handlers = [h for h in package_logger.handlers if isinstance(h, logging.NullHandler)]
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True

    return logger
