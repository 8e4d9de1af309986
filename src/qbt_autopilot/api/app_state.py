#!/usr/bin/env python3
"""Application state shared between the automation and the web API."""

import time

from ..automation import QbtAutomation
from ..client import QBittorrentClient
from ..config import Config


class AppState:
    """Bridge between the background automation and the web API.

    Route handlers reach the qBittorrent client and the loops through
    this object instead of module globals.
    """

    def __init__(self, automation: QbtAutomation) -> None:
        self.automation = automation
        self.started_at = time.time()

    @property
    def config(self) -> Config:
        return self.automation.config

    @property
    def client(self) -> QBittorrentClient:
        return self.automation.client

    def get_status(self) -> dict:
        """Return a snapshot of the automation state.

        Returns:
            Dictionary with connection, loop and watcher details.
        """
        automation = self.automation
        return {
            "connected": automation.client.is_connected,
            "loops_started": automation.is_started,
            "login_attempts": automation.login_attempts,
            "seed_checks": automation.seed_task.cycles,
            "download_checks": automation.download_task.cycles,
            "downloads_in_progress": len(automation.watcher.in_progress),
        }
