"""Test fixtures and utilities."""

import pytest
import responses

from qbit import QbitConfig

BASE_URL = "http://qbittorrent.test:8080/"
LOGIN_URL = f"{BASE_URL}api/v2/auth/login"
TRANSFERS_URL = f"{BASE_URL}api/v2/torrents/info"
CATEGORIES_URL = f"{BASE_URL}api/v2/torrents/categories"
SET_CATEGORY_URL = f"{BASE_URL}api/v2/torrents/setCategory"

# What qBittorrent serves when the SID cookie is missing or stale
FORBIDDEN_BODY = "Forbidden"
LOGIN_PAGE_HTML = "<!DOCTYPE html><html><head><title>qBittorrent Web UI</title></head><body></body></html>"

SAMPLE_TRANSFER = {
    "added_on": 1700000000,
    "amount_left": 0,
    "auto_tmm": True,
    "availability": -1,
    "category": "movies",
    "completed": 4404019200,
    "completion_on": 1700003600,
    "content_path": "/downloads/movies/Big.Buck.Bunny.2008.1080p",
    "dl_limit": -1,
    "dlspeed": 0,
    "downloaded": 4404019200,
    "downloaded_session": 0,
    "eta": 8640000,
    "f_l_piece_prio": False,
    "force_start": False,
    "hash": "dd8255ecdc7ca55fb0bbf81323d87062db1f6d1c",
    "last_activity": 1700100000,
    "magnet_uri": "magnet:?xt=urn:btih:dd8255ecdc7ca55fb0bbf81323d87062db1f6d1c",
    "max_ratio": 2.5,
    "max_seeding_time": -1,
    "name": "Big.Buck.Bunny.2008.1080p",
    "num_complete": 42,
    "num_incomplete": 3,
    "num_leechs": 1,
    "num_seeds": 7,
    "priority": 0,
    "progress": 0.9999999999999999,
    "ratio": 1.2345678901234567,
    "ratio_limit": -2,
    "save_path": "/downloads/movies/",
    "seeding_time": 86400,
    "seeding_time_limit": -2,
    "seen_complete": 1700003600,
    "seq_dl": False,
    "size": 4404019200,
    "state": "stalledUP",
    "super_seeding": False,
    "tags": "hd, archive",
    "time_active": 90000,
    "total_size": 9007199254740993,
    "tracker": "udp://tracker.example.org:1337/announce",
    "trackers_count": 2,
    "up_limit": -1,
    "uploaded": 5436943572,
    "uploaded_session": 1048576,
    "upspeed": 2048,
}

SAMPLE_CATEGORIES = {
    "movies": {"name": "movies", "savePath": "/downloads/movies"},
    "tv": {"name": "tv", "savePath": ""},
}


def add_login(body="Ok.", status=200, sid="abc123"):
    headers = {"Set-Cookie": f"SID={sid}; HttpOnly; path=/"} if sid else None
    responses.add(responses.POST, LOGIN_URL, body=body, status=status, headers=headers)


def login_calls():
    return [call for call in responses.calls if call.request.url == LOGIN_URL]


@pytest.fixture
def config():
    return QbitConfig(url=BASE_URL, user="admin", password="adminadmin")


@pytest.fixture
def proxy_config():
    return QbitConfig(
        url=BASE_URL,
        user="admin",
        password="adminadmin",
        http_user="proxy",
        http_pass="s3cret",
    )


ENV_KEYS = (
    "QBIT_URL",
    "QBIT_USER",
    "QBIT_PASS",
    "QBIT_HTTP_USER",
    "QBIT_HTTP_PASS",
    "QBIT_TIMEOUT",
    "QBIT_VERIFY_CERT",
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Isolate QBIT_* variables and run from an empty directory (no .env)."""
    for key in ENV_KEYS:
        # setenv first so values loaded from .env files are undone after the test
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    return monkeypatch
