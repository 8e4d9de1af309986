#!/usr/bin/env python3
"""Submitting newly added .torrent files to qBittorrent."""

import logging
import threading
from pathlib import Path
from typing import Optional

from .client import QBittorrentClient
from .config import IngestConfig
from .constants import MODULE_NAME, MessageCategory
from .errors import RelocationFailure
from .events import EventBus
from .paths import containing_directory, file_name, is_torrent_file
from .resilient_move import move_file

logger = logging.getLogger(__name__)


class TorrentIngester:
    """Adds torrent files to qBittorrent and archives them afterwards."""

    def __init__(self, client: QBittorrentClient, config: IngestConfig, events: EventBus):
        """
        Initialize the ingester.

        Args:
            client: qBittorrent client wrapper
            config: Archive directory and submission delay
            events: Bus receiving add and error messages
        """
        self.client = client
        self.config = config
        self.events = events

    def handle_file_added(self, path: str) -> Optional[threading.Timer]:
        """
        React to a "file added" event.

        Non-torrent files are ignored. Submission is delayed by the
        configured amount to let the writer finish; with no delay the
        torrent is added on the calling thread.

        Args:
            path: Path of the new file

        Returns:
            The pending timer when submission was deferred, else None
        """
        if not is_torrent_file(path):
            logger.debug(f"[Ingest] Ignoring non-torrent file: {path}")
            return None

        if self.config.delay <= 0:
            self.add_torrent(path)
            return None

        timer = threading.Timer(self.config.delay, self.add_torrent, args=(path,))
        timer.daemon = True
        timer.start()
        return timer

    def add_torrent(self, path: str) -> bool:
        """
        Submit a torrent file and archive it on success.

        The torrent downloads next to its .torrent file. If submission
        fails the file stays where it is.

        Args:
            path: Path of the .torrent file

        Returns:
            True if qBittorrent accepted the torrent
        """
        if not self.client.add_torrent_file(path, containing_directory(path)):
            self.events.emit_message(f"Error adding {path}", MessageCategory.ERROR, MODULE_NAME)
            return False

        logger.debug(f"[Ingest] Submitted {path}")
        self.events.emit_message(f"Added {file_name(path)}", MessageCategory.ADD, MODULE_NAME)
        self.relocate(path)
        return True

    def relocate(self, path: str) -> Optional[Path]:
        """
        Move an added torrent file into the archive directory.

        Failures are reported, not retried.

        Returns:
            New location of the file, or None if the move failed
        """
        try:
            result = move_file(Path(path), Path(self.config.loaded_torrents_path))
        except RelocationFailure as e:
            self.events.emit_message(f"Error moving {path}: {e.message}", MessageCategory.ERROR, MODULE_NAME)
            return None

        logger.debug(f"[Ingest] Archived {path} -> {result.dest}")
        return result.dest
