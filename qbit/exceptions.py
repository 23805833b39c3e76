"""
Module Name: exceptions.py
Description:
    Error taxonomy for the qBittorrent Web API client. Every error raised by
    the package derives from QbitError so callers can catch a single type.

Location:
    /qbit/exceptions.py

"""

from typing import Optional


class QbitError(RuntimeError):
    """Base qBittorrent client error."""


class QbitConfigError(QbitError):
    """Raised when the client cannot be constructed from its configuration."""


class QbitAuthError(QbitError):
    """Authentication error raised when login fails."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        body: Optional[str] = None,
    ):
        self.status_code = status_code
        self.url = url
        self.body = body
        super().__init__(message)


class QbitRequestError(QbitError):
    """Raised when an HTTP interaction with qBittorrent fails at the transport level."""

    def __init__(self, message: str, *, method: Optional[str] = None, url: Optional[str] = None):
        self.method = method
        self.url = url
        super().__init__(message)


class QbitTimeoutError(QbitRequestError):
    """Raised when a request exceeds its deadline."""


class QbitDecodeError(QbitError):
    """Raised when a response body cannot be decoded into the expected shape."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        reason: Optional[str] = None,
    ):
        self.status_code = status_code
        self.url = url
        self.reason = reason
        super().__init__(message)
