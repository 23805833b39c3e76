"""Typed records decoded from qBittorrent Web API responses."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, List


class TorrentState(Enum):
    """Coarse torrent states for callers that don't care about the daemon's detail."""
    QUEUED = "queued"
    DOWNLOADING = "downloading"
    SEEDING = "seeding"
    PAUSED = "paused"
    ERROR = "error"
    COMPLETE = "complete"
    UNKNOWN = "unknown"


STATE_MAP: Dict[str, TorrentState] = {
    "pausedDL": TorrentState.PAUSED,
    "pausedUP": TorrentState.SEEDING,
    "stoppedDL": TorrentState.PAUSED,
    "stoppedUP": TorrentState.SEEDING,
    "queuedDL": TorrentState.QUEUED,
    "queuedUP": TorrentState.QUEUED,
    "stalledDL": TorrentState.DOWNLOADING,
    "stalledUP": TorrentState.SEEDING,
    "checkingDL": TorrentState.DOWNLOADING,
    "checkingUP": TorrentState.SEEDING,
    "downloading": TorrentState.DOWNLOADING,
    "forcedDL": TorrentState.DOWNLOADING,
    "uploading": TorrentState.SEEDING,
    "forcedUP": TorrentState.SEEDING,
    "metaDL": TorrentState.DOWNLOADING,
    "forcedMetaDL": TorrentState.DOWNLOADING,
    "allocating": TorrentState.DOWNLOADING,
    "moving": TorrentState.DOWNLOADING,
    "missingFiles": TorrentState.ERROR,
    "error": TorrentState.ERROR,
    "checkingResumeData": TorrentState.DOWNLOADING,
    "completed": TorrentState.COMPLETE,
}


def _field(data: Dict[str, Any], key: str, kind: type) -> Any:
    """Read ``key`` from a JSON object the way a typed decoder would.

    Missing keys and JSON nulls yield the zero value. Integers reject floats
    and booleans, floats accept integers.
    """
    value = data.get(key)
    if value is None:
        return kind()

    if kind is bool:
        ok = isinstance(value, bool)
    elif kind is int:
        ok = isinstance(value, int) and not isinstance(value, bool)
    elif kind is float:
        ok = isinstance(value, (int, float)) and not isinstance(value, bool)
    else:
        ok = isinstance(value, kind)

    if not ok:
        raise TypeError(
            f"field {key!r}: expected {kind.__name__}, got {type(value).__name__}"
        )
    return kind(value) if kind is float else value


@dataclass
class Transfer:
    """A transfer from the torrents/info endpoint."""
    added_on: int = 0
    amount_left: int = 0
    auto_tmm: bool = False
    availability: float = 0.0
    category: str = ""
    completed: int = 0
    completion_on: int = 0
    content_path: str = ""
    dl_limit: int = 0
    dlspeed: int = 0
    downloaded: int = 0
    downloaded_session: int = 0
    eta: int = 0
    f_l_piece_prio: bool = False
    force_start: bool = False
    hash: str = ""
    last_activity: int = 0
    magnet_uri: str = ""
    max_ratio: float = 0.0
    max_seeding_time: int = 0
    name: str = ""
    num_complete: int = 0
    num_incomplete: int = 0
    num_leechs: int = 0
    num_seeds: int = 0
    priority: int = 0
    progress: float = 0.0
    ratio: float = 0.0
    ratio_limit: float = 0.0
    save_path: str = ""
    seeding_time: int = 0
    seeding_time_limit: int = 0
    seen_complete: int = 0
    seq_dl: bool = False
    size: int = 0
    state: str = ""
    super_seeding: bool = False
    tags: str = ""
    time_active: int = 0
    total_size: int = 0
    tracker: str = ""
    trackers_count: int = 0
    up_limit: int = 0
    uploaded: int = 0
    uploaded_session: int = 0
    upspeed: int = 0

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> "Transfer":
        """Create from one element of the torrents/info array."""
        if not isinstance(data, dict):
            raise TypeError(f"transfer must be a JSON object, got {type(data).__name__}")
        # Annotations are strings under __future__ annotations; map them back.
        kinds = {"int": int, "float": float, "bool": bool, "str": str}
        return cls(**{f.name: _field(data, f.name, kinds[f.type]) for f in fields(cls)})

    @property
    def state_enum(self) -> TorrentState:
        return STATE_MAP.get(self.state, TorrentState.UNKNOWN)


@dataclass
class Category:
    """A torrent category."""
    name: str = ""
    save_path: str = ""

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> "Category":
        if not isinstance(data, dict):
            raise TypeError(f"category must be a JSON object, got {type(data).__name__}")
        return cls(name=_field(data, "name", str), save_path=_field(data, "savePath", str))


def decode_transfers(payload: Any) -> List[Transfer]:
    if not isinstance(payload, list):
        raise TypeError(f"expected a JSON array of transfers, got {type(payload).__name__}")
    return [Transfer.from_api_response(item) for item in payload]


def decode_categories(payload: Any) -> Dict[str, Category]:
    """Decode the categories object, keyed by category name."""
    if not isinstance(payload, dict):
        raise TypeError(f"expected a JSON object of categories, got {type(payload).__name__}")
    return {name: Category.from_api_response(item) for name, item in payload.items()}
