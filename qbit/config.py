"""
Module Name: config.py
Description:
    Connection configuration for the qBittorrent Web API client. Values can be
    passed in directly, loaded from a config-file style dictionary, or read
    from QBIT_* environment variables (optionally via a .env file).

Location:
    /qbit/config.py

"""

import os
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional
from urllib.parse import urlparse

import requests
from dotenv import find_dotenv, load_dotenv

from .exceptions import QbitConfigError

DEFAULT_TIMEOUT = 60.0


def _as_bool(value: Any, default: bool = True) -> bool:
    if isinstance(value, bool):
        return value
    if value is None or value == "":
        return default
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def _as_timeout(value: Any) -> float:
    if value is None or value == "":
        return DEFAULT_TIMEOUT
    try:
        timeout = float(value)
    except (TypeError, ValueError) as exc:
        raise QbitConfigError(f"Invalid timeout value: {value!r}") from exc
    if timeout <= 0:
        raise QbitConfigError(f"Timeout must be positive, got {timeout}")
    return timeout


def normalize_url(url: str) -> str:
    """Return the base URL with exactly one trailing slash."""
    trimmed = (url or "").strip()
    if not trimmed:
        raise QbitConfigError("qBittorrent URL is required")

    parsed = urlparse(trimmed)
    if parsed.scheme not in {"http", "https"} or not parsed.hostname:
        raise QbitConfigError(f"Invalid qBittorrent URL: {url!r}")

    return trimmed.rstrip("/") + "/"


@dataclass
class QbitConfig:
    """Input data needed to build a QbitClient.

    ``user``/``password`` log in to the Web API itself; ``http_user`` and
    ``http_pass`` are for an HTTP Basic-Auth reverse proxy in front of it.
    """

    url: str
    user: str = ""
    password: str = ""
    http_user: str = ""
    http_pass: str = ""
    session: Optional[requests.Session] = field(default=None, repr=False, compare=False)
    timeout: float = DEFAULT_TIMEOUT
    verify_cert: bool = True

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "QbitConfig":
        """Build a config from a parsed config file section."""
        return cls(
            url=str(data.get("url") or ""),
            user=str(data.get("user") or ""),
            password=str(data.get("pass") or data.get("password") or ""),
            http_user=str(data.get("http_user") or ""),
            http_pass=str(data.get("http_pass") or ""),
            timeout=_as_timeout(data.get("timeout")),
            verify_cert=_as_bool(data.get("verify_cert"), True),
        )

    @classmethod
    def from_env(cls, prefix: str = "QBIT_", env_file: Optional[str] = None) -> "QbitConfig":
        """Build a config from environment variables, loading a .env file first."""
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv(find_dotenv(usecwd=True))

        def env(name: str) -> Optional[str]:
            return os.environ.get(f"{prefix}{name}")

        return cls.from_dict(
            {
                "url": env("URL"),
                "user": env("USER"),
                "pass": env("PASS"),
                "http_user": env("HTTP_USER"),
                "http_pass": env("HTTP_PASS"),
                "timeout": env("TIMEOUT"),
                "verify_cert": env("VERIFY_CERT"),
            }
        )
