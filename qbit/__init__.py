"""
qBittorrent Web API client
==========================

Cookie-authenticated client for the qBittorrent Web API v2 with transparent
re-login when the session expires.
"""

from .auth import QbitAuthenticator, build_basic_auth
from .client import QbitClient
from .config import DEFAULT_TIMEOUT, QbitConfig, normalize_url
from .exceptions import (
    QbitAuthError,
    QbitConfigError,
    QbitDecodeError,
    QbitError,
    QbitRequestError,
    QbitTimeoutError,
)
from .models import Category, TorrentState, Transfer, decode_categories, decode_transfers

__all__ = [
    'QbitClient',
    'QbitConfig',
    'QbitAuthenticator',
    'build_basic_auth',
    'normalize_url',
    'DEFAULT_TIMEOUT',
    'Transfer',
    'Category',
    'TorrentState',
    'decode_transfers',
    'decode_categories',
    'QbitError',
    'QbitConfigError',
    'QbitAuthError',
    'QbitRequestError',
    'QbitTimeoutError',
    'QbitDecodeError',
]
