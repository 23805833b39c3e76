import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional, Union

PARENT_LOGGER_NAME = "Qbit"

_LOGGER_INITIALIZED = False

# Library default: stay silent until an application configures logging.
logging.getLogger(PARENT_LOGGER_NAME).addHandler(logging.NullHandler())


def setup_logger(
    name: str = PARENT_LOGGER_NAME,
    log_file: Optional[str] = None,
    level: Union[int, str] = logging.INFO,
):
    """Give the client's loggers a console (and optional rotating file) handler.

    For applications that embed the client and use plain ``logging``; the
    command line uses :func:`setup_loguru` instead. Idempotent.
    """
    global _LOGGER_INITIALIZED

    parent_logger = logging.getLogger(name)

    # If already configured, just adjust level if needed and exit
    if _LOGGER_INITIALIZED and any(
        not isinstance(handler, logging.NullHandler) for handler in parent_logger.handlers
    ):
        parent_logger.setLevel(level)
        return parent_logger

    parent_logger.setLevel(level)
    parent_logger.handlers.clear()

    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(detailed_formatter)
    parent_logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(os.path.abspath(log_file))
        os.makedirs(log_dir, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10*1024*1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(detailed_formatter)
        parent_logger.addHandler(file_handler)

    # Disable propagation to avoid duplicate logs
    parent_logger.propagate = False

    _LOGGER_INITIALIZED = True

    parent_logger.debug(f"Parent logger initialized - Log file: {log_file or 'none'}")

    return parent_logger


def get_module_logger(module_name: str) -> logging.Logger:
    """Get a logger for a specific module, nested under the parent logger."""
    if module_name.startswith(f"{PARENT_LOGGER_NAME}."):
        return logging.getLogger(module_name)
    return logging.getLogger(f"{PARENT_LOGGER_NAME}.{module_name}")
