#!/usr/bin/env python3
"""Detection of downloads that just finished."""

import logging
from typing import FrozenSet, List, Set

from .client import QBittorrentClient
from .events import EventBus
from .models import Torrent
from .utils import truncate_name

logger = logging.getLogger(__name__)


class DownloadWatcher:
    """Announces torrents whose remaining bytes dropped to zero.

    Only torrents seen downloading on a previous pass are announced, so
    torrents that were already complete when first listed never fire.
    """

    def __init__(self, client: QBittorrentClient, events: EventBus):
        self.client = client
        self.events = events
        self._in_progress: Set[str] = set()

    @property
    def in_progress(self) -> FrozenSet[str]:
        """Hashes that were still downloading on the last pass."""
        return frozenset(self._in_progress)

    def check_downloads(self) -> List[Torrent]:
        """
        Run one watch pass.

        A failed or empty listing leaves the in-progress set untouched.

        Returns:
            Torrents announced as finished during this pass
        """
        torrents = self.client.list_torrents()
        if not torrents:
            return []

        by_hash = {t.hash: t for t in torrents}
        still_downloading = {t.hash for t in torrents if not t.is_complete}

        finished = []
        for torrent_hash in self._in_progress:
            torrent = by_hash.get(torrent_hash)
            # Removed or renamed since the last pass
            if torrent is None:
                continue
            if torrent.is_complete:
                finished.append(torrent)

        for torrent in finished:
            logger.info(f"[Watcher] Download complete: {truncate_name(torrent.name)}")
            self.events.emit_download_complete(torrent)

        self._in_progress = still_downloading
        return finished
