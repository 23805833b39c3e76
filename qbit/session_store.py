"""
Module Name: session_store.py
Description:
    Host-scoped cookie storage for the Web API session. The jar only accepts
    and returns cookies for the configured qBittorrent host, so the SID issued
    by a login never travels to another host.

Location:
    /qbit/session_store.py

"""

from http.cookiejar import DefaultCookiePolicy
from typing import List
from urllib.parse import urlparse

import requests
from requests.cookies import RequestsCookieJar

from .exceptions import QbitConfigError


class HostCookiePolicy(DefaultCookiePolicy):
    """Cookie policy restricted to one host.

    ``strict_domain`` rejects Domain attributes that would widen a cookie to a
    registrable parent such as ``.co.uk``.
    """

    def __init__(self, host: str):
        self.host = host.lower()
        super().__init__(allowed_domains=self._domains_for(self.host), strict_domain=True)

    @staticmethod
    def _domains_for(host: str) -> List[str]:
        # http.cookiejar keys cookies by the request host as it appears in the
        # URL, so IPv6 literals keep their brackets ("[::1]")
        if ":" in host and not host.startswith("["):
            host = f"[{host}]"
        domains = [host, f".{host}"]
        # dotless hosts (localhost, [::1]) are filed under "<host>.local"
        if "." not in host:
            domains.append(f"{host}.local")
        return domains


def build_cookie_jar(base_url: str) -> RequestsCookieJar:
    host = urlparse(base_url).hostname
    if not host:
        raise QbitConfigError(f"Cannot scope cookies, no host in URL {base_url!r}")
    return RequestsCookieJar(policy=HostCookiePolicy(host))


def attach_cookie_jar(session: requests.Session, base_url: str) -> RequestsCookieJar:
    """Replace the session's cookie jar with one scoped to ``base_url``."""
    jar = build_cookie_jar(base_url)
    session.cookies = jar
    return jar
