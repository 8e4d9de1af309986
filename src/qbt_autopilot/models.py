#!/usr/bin/env python3
"""Data models for qBittorrent automation."""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional


def _as_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _as_float(value: Any, default: float = 0.0) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


@dataclass
class Torrent:
    """Torrent record as reported by qBittorrent."""
    hash: str
    name: str
    progress: float = 0.0
    ratio: float = 0.0
    category: str = ""
    completion_on: Optional[int] = None  # epoch seconds
    amount_left: int = 0
    tracker: str = ""
    uploaded: int = 0
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "Torrent":
        """
        Build a Torrent from a qbittorrentapi torrent dictionary.

        qBittorrent reports ``completion_on`` as -1 (or 0 on old versions)
        for torrents that never completed; those become ``None``.

        Args:
            data: Torrent mapping from the client

        Returns:
            Torrent instance keeping the full record in ``raw``
        """
        completion_on = _as_int(data.get("completion_on"), 0)
        return cls(
            hash=str(data.get("hash", "")),
            name=str(data.get("name", "")),
            progress=_as_float(data.get("progress")),
            ratio=max(0.0, _as_float(data.get("ratio"))),
            category=data.get("category") or data.get("label") or "",
            completion_on=completion_on if completion_on > 0 else None,
            amount_left=_as_int(data.get("amount_left")),
            tracker=data.get("tracker") or "",
            uploaded=_as_int(data.get("uploaded")),
            raw=dict(data),
        )

    @property
    def is_complete(self) -> bool:
        """Check if every byte has been downloaded."""
        return self.amount_left <= 0

    def to_dict(self) -> Dict[str, Any]:
        """Full record suitable for JSON responses and event payloads."""
        if self.raw:
            return dict(self.raw)
        return {
            "hash": self.hash,
            "name": self.name,
            "progress": self.progress,
            "ratio": self.ratio,
            "category": self.category,
            "completion_on": self.completion_on,
            "amount_left": self.amount_left,
            "tracker": self.tracker,
            "uploaded": self.uploaded,
        }
