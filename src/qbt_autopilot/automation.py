#!/usr/bin/env python3
"""Session lifecycle and wiring of the automation loops."""

import logging
import threading
from typing import Optional

from .client import QBittorrentClient
from .config import Config
from .constants import MODULE_NAME, MessageCategory
from .errors import ConnectionFailure
from .events import FILE_ADDED, EventBus
from .ingest import TorrentIngester
from .reaper import SeedReaper
from .scheduler import PeriodicTask
from .watcher import DownloadWatcher

logger = logging.getLogger(__name__)


class QbtAutomation:
    """Main orchestration class.

    ``setup()`` logs in on a background thread, retrying until it
    succeeds. Only after a confirmed login are the seed reaper and the
    download watcher started and the ingest handler subscribed to "file
    added" events. Any login error, not just an unreachable host, keeps
    the loops parked until the next attempt.
    """

    def __init__(self, config: Config, events: Optional[EventBus] = None,
                 client: Optional[QBittorrentClient] = None):
        """
        Initialize the orchestrator.

        Args:
            config: Application configuration
            events: Event bus shared with the host, a private one if omitted
            client: qBittorrent client wrapper, built from config if omitted
        """
        self.config = config
        self.events = events or EventBus()
        self.client = client or QBittorrentClient(config.connection)

        self.reaper = SeedReaper(self.client, config.seed, config.behavior, self.events)
        self.watcher = DownloadWatcher(self.client, self.events)
        self.ingester = TorrentIngester(self.client, config.ingest, self.events)

        self.seed_task = PeriodicTask("seed-reaper", config.schedule.seed_interval, self.reaper.check_seed)
        self.download_task = PeriodicTask(
            "download-watch", config.schedule.download_interval, self.watcher.check_downloads
        )

        self.login_attempts = 0
        self._started = False
        self._start_lock = threading.Lock()
        self._stop = threading.Event()
        self._login_thread: Optional[threading.Thread] = None

    @property
    def is_started(self) -> bool:
        """Check if the loops have been started."""
        return self._started

    def setup(self) -> None:
        """Start logging in on a background thread."""
        if self._login_thread is not None and self._login_thread.is_alive():
            return
        self._stop.clear()
        self._login_thread = threading.Thread(target=self.run_until_connected, name="qbt-login", daemon=True)
        self._login_thread.start()

    def login(self) -> bool:
        """
        Attempt a single login.

        Failures are logged and published as error messages with the
        connection details (never the password).

        Returns:
            True if a session was established
        """
        self.login_attempts += 1
        details = self.config.connection.describe()
        try:
            self.client.connect()
            return True
        except ConnectionFailure as e:
            if e.refused:
                message = f"Connection to qBittorrent refused ({details}): {e.message}"
            else:
                message = f"Could not log in to qBittorrent ({details}): {e.message}"
        except Exception as e:
            message = f"Unexpected error logging in to qBittorrent ({details}): {e}"
        logger.debug(f"[Login] Attempt {self.login_attempts} failed")
        self.events.emit_message(message, MessageCategory.ERROR, MODULE_NAME)
        return False

    def run_until_connected(self) -> bool:
        """
        Retry login with a fixed delay until it succeeds, then start the loops.

        Returns:
            True if connected, False if stopped first
        """
        delay = self.config.schedule.login_retry_delay
        while not self._stop.is_set():
            if self.login():
                if self.start_loops():
                    return True
                # Stopped while the login was in flight
                self.client.disconnect()
                return False
            logger.info(f"Retrying login in {delay}s...")
            if self._stop.wait(timeout=delay):
                break
        return False

    def start_loops(self) -> bool:
        """
        Subscribe the ingest handler and start both loops, exactly once.

        Returns:
            False if the automation has been stopped
        """
        with self._start_lock:
            if self._stop.is_set():
                return False
            if self._started:
                return True
            self._started = True
            self.events.on_file_added(self.ingester.handle_file_added)
            self.seed_task.start()
            self.download_task.start()

        logger.info(
            f"Automation started (seed check every {self.seed_task.interval}s, "
            f"download check every {self.download_task.interval}s)"
        )
        return True

    def check_seed_now(self) -> bool:
        """
        Ask the reaper to run immediately.

        Returns:
            False if the loops are not running yet
        """
        if not self._started:
            return False
        self.seed_task.trigger()
        return True

    def stop(self, timeout: Optional[float] = None) -> None:
        """Stop scheduling further cycles and abandon login retries."""
        with self._start_lock:
            self._stop.set()
        self.seed_task.stop(timeout)
        self.download_task.stop(timeout)
        if self._started:
            self.events.unsubscribe(FILE_ADDED, self.ingester.handle_file_added)
        self.client.disconnect()
        logger.info("Automation stopped")
