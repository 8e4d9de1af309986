#!/usr/bin/env python3
"""qBittorrent Autopilot - torrent ingest, seeding cleanup and download alerts."""

__version__ = "1.0.0"
__license__ = "MIT"

from .automation import QbtAutomation
from .config import Config
from .events import EventBus

__all__ = ["QbtAutomation", "Config", "EventBus", "__version__"]
