"""qBittorrent Web API v2 client with cookie sessions and one-shot re-login."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional

import requests
from requests import Response, Session
from requests.exceptions import RequestException, Timeout

from .auth import QbitAuthenticator, build_basic_auth
from .config import QbitConfig, normalize_url
from .exceptions import QbitDecodeError, QbitRequestError, QbitTimeoutError
from .models import Category, Transfer, decode_categories, decode_transfers
from .session_store import attach_cookie_jar
from .utils.logger import get_module_logger

logger = get_module_logger("Client")

Decoder = Callable[[Any], Any]


class QbitClient:
    """Thin wrapper around the qBittorrent Web API v2.

    Every call goes through :meth:`request`. A response that cannot be decoded
    is treated as a sign that the session cookie expired: the client logs in
    again and repeats the request once.
    """

    MAX_ATTEMPTS = 2

    TRANSFERS_PATH = "api/v2/torrents/info"
    CATEGORIES_PATH = "api/v2/torrents/categories"
    SET_CATEGORY_PATH = "api/v2/torrents/setCategory"

    def __init__(self, config: QbitConfig, login: bool = True):
        self.config = config
        self.base_url = normalize_url(config.url)
        self.timeout = float(config.timeout)
        self.auth = build_basic_auth(config.http_user, config.http_pass)

        self._owns_session = config.session is None
        self._session: Session = config.session if config.session is not None else requests.Session()
        if self._owns_session:
            self._session.verify = config.verify_cert
        attach_cookie_jar(self._session, self.base_url)

        self._authenticator = QbitAuthenticator(
            self._session,
            self.base_url,
            config.user,
            config.password,
            basic_auth=self.auth,
        )

        logger.debug("Initialized QbitClient for %s", self.base_url)

        if login:
            self.login()

    @classmethod
    def no_auth(cls, config: QbitConfig) -> "QbitClient":
        """Build a client without logging in; the first failed decode logs in."""
        return cls(config, login=False)

    @property
    def session(self) -> Session:
        """Expose the underlying requests session and its cookie jar."""
        return self._session

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------
    def login(self, timeout: Optional[float] = None) -> None:
        """Log in now; the timeout is capped at LOGIN_TIMEOUT."""
        self._authenticator.login(timeout)

    def close(self) -> None:
        """Close the HTTP session if the client created it."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "QbitClient":
        """Use the client as a context manager that closes on exit."""
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        """Close the client; exceptions propagate."""
        self.close()

    # ------------------------------------------------------------------
    # Public API surface
    # ------------------------------------------------------------------
    def get_transfers(self, timeout: Optional[float] = None, **filters: Any) -> List[Transfer]:
        """Return all transfers. Extra keyword filters (``category``, ``hashes``...) go in the query."""
        params = {key: value for key, value in filters.items() if value is not None}
        return self.request("GET", self.TRANSFERS_PATH, params, decoder=decode_transfers, timeout=timeout)

    def get_categories(self, timeout: Optional[float] = None) -> Dict[str, Category]:
        return self.request("GET", self.CATEGORIES_PATH, decoder=decode_categories, timeout=timeout)

    def set_torrent_category(
        self, category: str, *torrent_hashes: str, timeout: Optional[float] = None
    ) -> None:
        """Update the category for one or more torrents."""
        values = {"category": category, "hashes": "|".join(torrent_hashes)}
        self.request("POST", self.SET_CATEGORY_PATH, values, timeout=timeout)

    def request(
        self,
        method: str,
        path: str,
        values: Optional[Mapping[str, Any]] = None,
        decoder: Optional[Decoder] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """Send an API call and decode its JSON response.

        GET values go in the query string along with ``filter=all``; POST
        values are form-encoded into the body. ``decoder`` turns the parsed
        JSON into the caller's shape. Without one, the parsed JSON is
        returned as-is and an empty 2xx body yields ``None``.
        """
        method = method.upper()
        url = f"{self.base_url}{path.lstrip('/')}"
        deadline = self.timeout if timeout is None else timeout

        for attempt in range(1, self.MAX_ATTEMPTS + 1):
            generation = self._authenticator.generation
            response = self._send(method, url, values, deadline)
            try:
                return self._decode_response(response, decoder)
            except QbitDecodeError as exc:
                if attempt == self.MAX_ATTEMPTS:
                    raise
                logger.debug("%s %s did not decode (%s), logging in again", method, url, exc.reason)
                self._authenticator.relogin(generation, deadline)

        raise AssertionError("unreachable")  # pragma: no cover

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _send(
        self,
        method: str,
        url: str,
        values: Optional[Mapping[str, Any]],
        timeout: float,
    ) -> Response:
        headers = {"Accept": "application/json"}
        if self.auth:
            headers["Authorization"] = self.auth

        params: Optional[Dict[str, Any]] = None
        data: Optional[Dict[str, Any]] = None
        if method == "POST":
            headers["Content-Type"] = "application/x-www-form-urlencoded"
            data = dict(values or {})
        else:
            params = dict(values or {})
            params["filter"] = "all"

        try:
            return self._session.request(
                method,
                url,
                params=params,
                data=data,
                headers=headers,
                timeout=timeout,
            )
        except Timeout as exc:
            raise QbitTimeoutError(
                f"HTTP {method} {url} timed out after {timeout}s: {exc}", method=method, url=url
            ) from exc
        except RequestException as exc:
            raise QbitRequestError(f"HTTP {method} {url} failed: {exc}", method=method, url=url) from exc

    @staticmethod
    def _decode_response(response: Response, decoder: Optional[Decoder]) -> Any:
        """Decode ``response`` or raise QbitDecodeError.

        This is the only place that decides a response "looks like" an
        expired session; any failure here triggers the re-login path.
        """
        status = f"{response.status_code} {response.reason}"

        if decoder is None:
            if not response.ok:
                raise QbitDecodeError(
                    f"{status}: {response.url}: unexpected response",
                    status_code=response.status_code,
                    url=response.url,
                    reason="non-success status",
                )
            if not response.content.strip():
                return None

        try:
            payload = response.json()
        except ValueError as exc:
            raise QbitDecodeError(
                f"{status}: {response.url}: invalid JSON: {exc}",
                status_code=response.status_code,
                url=response.url,
                reason=f"invalid JSON: {exc}",
            ) from exc

        if decoder is None:
            return payload

        try:
            return decoder(payload)
        except (TypeError, ValueError, KeyError) as exc:
            raise QbitDecodeError(
                f"{status}: {response.url}: unexpected payload: {exc}",
                status_code=response.status_code,
                url=response.url,
                reason=f"unexpected payload: {exc}",
            ) from exc
