#!/usr/bin/env python3
"""Configuration management for qBittorrent automation."""

import os
from dataclasses import dataclass, field

from .constants import (
    DOWNLOAD_CHECK_INTERVAL, INGEST_DELAY, LOADED_TORRENTS_PATH,
    LOGIN_RETRY_DELAY, SEED_CHECK_INTERVAL
)
from .utils import parse_bool, parse_float, parse_int, parse_list


@dataclass
class ConnectionConfig:
    """qBittorrent connection configuration."""
    host: str = field(default_factory=lambda: os.environ.get("QB_HOST", "localhost"))
    port: int = field(default_factory=lambda: parse_int("QB_PORT", 8080))
    username: str = field(default_factory=lambda: os.environ.get("QB_USERNAME", "admin"))
    password: str = field(default_factory=lambda: os.environ.get("QB_PASSWORD", "adminadmin"))
    verify_ssl: bool = field(default_factory=lambda: parse_bool("QB_VERIFY_SSL", False))

    def describe(self) -> str:
        """Connection details safe for logs and messages (no password)."""
        return f"host={self.host} port={self.port} username={self.username}"


@dataclass
class SeedConfig:
    """Seeding thresholds that make a completed torrent removable."""
    days: int = field(default_factory=lambda: parse_int("SEED_DAYS", 14, 0))
    ratio: float = field(default_factory=lambda: parse_float("SEED_RATIO", 2.0, 0))
    remove_public_when_complete: bool = field(
        default_factory=lambda: parse_bool("REMOVE_PUBLIC_WHEN_COMPLETE", False)
    )


@dataclass
class BehaviorConfig:
    """Removal behavior configuration."""
    delete_files: bool = field(default_factory=lambda: parse_bool("DELETE_FILES", False))
    dry_run: bool = field(default_factory=lambda: parse_bool("DRY_RUN", False))


@dataclass
class IngestConfig:
    """Torrent file ingest configuration."""
    loaded_torrents_path: str = field(
        default_factory=lambda: os.environ.get("LOADED_TORRENTS_PATH", LOADED_TORRENTS_PATH)
    )
    delay: float = field(default_factory=lambda: parse_float("INGEST_DELAY", INGEST_DELAY, 0))


@dataclass
class ScheduleConfig:
    """Polling intervals, in seconds."""
    seed_interval: int = field(default_factory=lambda: parse_int("SEED_CHECK_INTERVAL", SEED_CHECK_INTERVAL, 1))
    download_interval: int = field(
        default_factory=lambda: parse_int("DOWNLOAD_CHECK_INTERVAL", DOWNLOAD_CHECK_INTERVAL, 1)
    )
    login_retry_delay: int = field(default_factory=lambda: parse_int("LOGIN_RETRY_DELAY", LOGIN_RETRY_DELAY, 1))


@dataclass
class WebConfig:
    """Web API configuration."""
    enabled: bool = field(default_factory=lambda: parse_bool("WEB_ENABLED", True))
    host: str = field(default_factory=lambda: os.environ.get("WEB_HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: parse_int("WEB_PORT", 9494, 1))


@dataclass
class NotificationsConfig:
    """Apprise notification configuration."""
    enabled: bool = field(default_factory=lambda: parse_bool("NOTIFY_ENABLED", False))
    urls: list[str] = field(default_factory=lambda: parse_list("NOTIFY_URLS"))
    on_add: bool = field(default_factory=lambda: parse_bool("NOTIFY_ON_ADD", True))
    on_remove: bool = field(default_factory=lambda: parse_bool("NOTIFY_ON_REMOVE", True))
    on_error: bool = field(default_factory=lambda: parse_bool("NOTIFY_ON_ERROR", True))
    on_complete: bool = field(default_factory=lambda: parse_bool("NOTIFY_ON_COMPLETE", True))


@dataclass
class Config:
    """Main configuration container."""
    connection: ConnectionConfig = field(default_factory=ConnectionConfig)
    seed: SeedConfig = field(default_factory=SeedConfig)
    behavior: BehaviorConfig = field(default_factory=BehaviorConfig)
    ingest: IngestConfig = field(default_factory=IngestConfig)
    schedule: ScheduleConfig = field(default_factory=ScheduleConfig)
    web: WebConfig = field(default_factory=WebConfig)
    notifications: NotificationsConfig = field(default_factory=NotificationsConfig)

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        return cls()
