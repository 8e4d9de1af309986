#!/usr/bin/env python3
"""Constants and enumerations for qBittorrent automation."""

from enum import Enum
from typing import Final

# Module identity, used for route prefixes and message sources
MODULE_NAME: Final[str] = "Qbittorrent"
ROUTE_PREFIX: Final[str] = f"/{MODULE_NAME.lower()}"

# Time constants
SECONDS_PER_DAY: Final[int] = 86400
MS_PER_DAY: Final[int] = SECONDS_PER_DAY * 1000

# Scheduling defaults (seconds)
SEED_CHECK_INTERVAL: Final[int] = 300
DOWNLOAD_CHECK_INTERVAL: Final[int] = 5
LOGIN_RETRY_DELAY: Final[int] = 60
INGEST_DELAY: Final[float] = 2.0

# Network constants
DEFAULT_TIMEOUT: Final[int] = 30

# Labels
PUBLIC_LABEL: Final[str] = "public"
TORRENT_EXTENSION: Final[str] = ".torrent"

# File paths
LOADED_TORRENTS_PATH: Final[str] = "/config/loaded-torrents"


class RemovalReason(str, Enum):
    """Why a seeding torrent is eligible for removal."""
    NONE = "none"
    PUBLIC_TRACKER = "public_tracker"
    SEEDED_DAYS = "seeded_days"
    SEEDED_RATIO = "seeded_ratio"


class MessageCategory(str, Enum):
    """Category tag attached to user-facing messages."""
    ERROR = "error"
    INFO = "info"
    ADD = "add"
    REMOVE = "remove"
