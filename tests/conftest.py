"""Shared pytest fixtures for the qbt-autopilot test suite."""

import time
from typing import Any, Callable, List, Tuple
from unittest.mock import MagicMock

import pytest

from qbt_autopilot.client import QBittorrentClient
from qbt_autopilot.config import (
    BehaviorConfig, Config, ConnectionConfig, IngestConfig, NotificationsConfig,
    ScheduleConfig, SeedConfig, WebConfig
)
from qbt_autopilot.constants import MessageCategory
from qbt_autopilot.events import EventBus
from qbt_autopilot.models import Torrent

# Fixed "current time" for tests that pass `now` explicitly
NOW = 1_700_000_000.0
DAY = 86400


@pytest.fixture
def make_torrent() -> Callable[..., Torrent]:
    """Factory building Torrent records from qBittorrent-style dictionaries."""
    def _make(**overrides: Any) -> Torrent:
        data = {
            "hash": "hash-a",
            "name": "Some.Show.S01",
            "progress": 1.0,
            "ratio": 0.5,
            "category": "",
            "completion_on": int(time.time()) - DAY,
            "amount_left": 0,
            "tracker": "http://tracker.example.com:6969/announce",
            "uploaded": 1_500_000_000,
        }
        data.update(overrides)
        return Torrent.from_api(data)
    return _make


@pytest.fixture
def config(tmp_path) -> Config:
    """Configuration independent of the environment."""
    return Config(
        connection=ConnectionConfig(
            host="qbt.local", port=8080, username="admin", password="secret", verify_ssl=False
        ),
        seed=SeedConfig(days=7, ratio=2.0, remove_public_when_complete=True),
        behavior=BehaviorConfig(delete_files=False, dry_run=False),
        ingest=IngestConfig(loaded_torrents_path=str(tmp_path / "loaded"), delay=0),
        schedule=ScheduleConfig(seed_interval=300, download_interval=5, login_retry_delay=60),
        web=WebConfig(enabled=False, host="127.0.0.1", port=9494),
        notifications=NotificationsConfig(
            enabled=False, urls=[], on_add=True, on_remove=True, on_error=True, on_complete=True
        ),
    )


@pytest.fixture
def client() -> MagicMock:
    """A QBittorrentClient double with harmless defaults."""
    mock_client = MagicMock(spec=QBittorrentClient)
    mock_client.is_connected = False
    mock_client.list_torrents.return_value = []
    mock_client.delete_torrent.return_value = True
    mock_client.add_torrent_file.return_value = True
    mock_client.transfer_summary.return_value = {}
    return mock_client


@pytest.fixture
def events() -> EventBus:
    return EventBus()


@pytest.fixture
def messages(events: EventBus) -> List[Tuple[str, MessageCategory, str]]:
    """Every message published on the ``events`` bus."""
    received: List[Tuple[str, MessageCategory, str]] = []
    events.on_message(lambda message, category, source: received.append((message, category, source)))
    return received
