"""
Module Name: auth.py
Description:
    Proxy Basic-Auth header resolution and the Web API login handshake. The
    authenticator owns the login lock and a generation counter so concurrent
    callers that all see an expired session trigger a single re-login.

Location:
    /qbit/auth.py

"""

from __future__ import annotations

import base64
import threading
from typing import Optional

import requests
from requests.exceptions import RequestException

from .exceptions import QbitAuthError
from .utils.logger import get_module_logger

logger = get_module_logger("Client.Auth")

LOGIN_PATH = "api/v2/auth/login"
LOGIN_TIMEOUT = 60.0
# The daemon answers a good login with a plain-text "Ok." and a bad one with
# "Fails." under the same 200 status.
LOGIN_SUCCESS_MARKER = "Ok."


def build_basic_auth(http_user: str, http_pass: str) -> str:
    """Return the Authorization header value for a reverse proxy, or ""."""
    credentials = f"{http_user or ''}:{http_pass or ''}"
    if credentials == ":":
        return ""
    return "Basic " + base64.b64encode(credentials.encode("utf-8")).decode("ascii")


class QbitAuthenticator:
    """Performs the login handshake; the session's cookie jar keeps the SID."""

    def __init__(
        self,
        session: requests.Session,
        base_url: str,
        username: str,
        password: str,
        basic_auth: str = "",
    ):
        self._session = session
        self.login_url = f"{base_url}{LOGIN_PATH}"
        self._username = username
        self._password = password
        self._basic_auth = basic_auth
        self._lock = threading.Lock()
        self._generation = 0

    @property
    def generation(self) -> int:
        """Number of successful logins so far."""
        return self._generation

    def login(self, timeout: Optional[float] = None) -> None:
        with self._lock:
            self._login_locked(timeout)

    def relogin(self, seen_generation: int, timeout: Optional[float] = None) -> bool:
        """Log in again unless another caller already did since ``seen_generation``.

        Returns True when this call performed the login.
        """
        with self._lock:
            if self._generation != seen_generation:
                logger.debug("Session already refreshed by a concurrent caller, skipping login")
                return False
            self._login_locked(timeout)
            return True

    def _login_locked(self, timeout: Optional[float]) -> None:
        deadline = LOGIN_TIMEOUT if timeout is None else min(timeout, LOGIN_TIMEOUT)
        headers = {"Content-Type": "application/x-www-form-urlencoded"}
        if self._basic_auth:
            headers["Authorization"] = self._basic_auth

        payload = {"username": self._username, "password": self._password}

        try:
            response = self._session.post(
                self.login_url,
                data=payload,
                headers=headers,
                timeout=deadline,
                allow_redirects=False,
            )
        except RequestException as exc:
            logger.warning("Login request to %s failed: %s", self.login_url, exc)
            raise QbitAuthError(
                f"authentication failed: {self.login_url}: {exc}", url=self.login_url
            ) from exc

        body = response.text
        if response.status_code != 200 or LOGIN_SUCCESS_MARKER not in body:
            logger.warning("Login rejected by %s with status %s", self.login_url, response.status_code)
            raise QbitAuthError(
                f"authentication failed: {response.status_code} {response.reason}: "
                f"{self.login_url}: {body.strip()}",
                status_code=response.status_code,
                url=self.login_url,
                body=body,
            )

        self._generation += 1
        logger.debug("Authenticated with qBittorrent at %s", self.login_url)
