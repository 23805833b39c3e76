"""
Module Name: __init__.py
Description:
    Shared logging helpers for the qBittorrent client package.

Location:
    /qbit/utils/__init__.py

"""

from .logger import get_module_logger, setup_logger
from .loguru_config import setup_loguru

__all__ = ["setup_logger", "get_module_logger", "setup_loguru"]
