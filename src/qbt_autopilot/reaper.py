#!/usr/bin/env python3
"""Removal of torrents that have seeded enough."""

import logging
from typing import List, Optional, Tuple

from .client import QBittorrentClient
from .config import BehaviorConfig, SeedConfig
from .constants import MODULE_NAME, MessageCategory, RemovalReason
from .evaluator import should_remove
from .events import EventBus
from .models import Torrent
from .utils import display_name, format_bytes, truncate_name

logger = logging.getLogger(__name__)


def seed_info(torrent: Torrent) -> str:
    """Upload and ratio summary appended to removal messages."""
    return f"[UL: {format_bytes(torrent.uploaded)} RATIO: {torrent.ratio:.2f}]"


def removal_message(reason: RemovalReason, torrent: Torrent) -> str:
    """
    Build the message announcing a removed torrent.

    Args:
        reason: Why the torrent was removed
        torrent: The removed torrent

    Returns:
        Human-readable message
    """
    name = display_name(torrent.name)

    if reason == RemovalReason.PUBLIC_TRACKER:
        return f"Removed {name} because it was on a public tracker."
    if reason == RemovalReason.SEEDED_DAYS:
        return f"Removed {name} because it has been seeded long enough. {seed_info(torrent)}"
    if reason == RemovalReason.SEEDED_RATIO:
        return f"Removed {name} because the ratio was enough. {seed_info(torrent)}"
    return f"Removed {name}. {seed_info(torrent)}"


class SeedReaper:
    """Deletes completed torrents that met the seeding thresholds."""

    def __init__(self, client: QBittorrentClient, seed: SeedConfig,
                 behavior: BehaviorConfig, events: EventBus):
        """
        Initialize the reaper.

        Args:
            client: qBittorrent client wrapper
            seed: Seeding thresholds
            behavior: Deletion behavior (dry run, delete files)
            events: Bus receiving removal and error messages
        """
        self.client = client
        self.seed = seed
        self.behavior = behavior
        self.events = events

    def find_candidates(self, torrents: List[Torrent],
                        now: Optional[float] = None) -> List[Tuple[Torrent, RemovalReason]]:
        """Pair every removable torrent with its removal reason."""
        candidates = []
        for torrent in torrents:
            reason = should_remove(torrent, self.seed, now)
            if reason != RemovalReason.NONE:
                candidates.append((torrent, reason))
        return candidates

    def check_seed(self) -> int:
        """
        Run one reaper pass.

        A failed listing skips the pass silently; the next scheduled
        pass tries again. A failed deletion is reported and not retried.

        Returns:
            Number of torrents removed
        """
        torrents = self.client.list_torrents()
        if torrents is None:
            logger.debug("[Reaper] Could not list torrents, skipping this pass")
            return 0

        removed = 0
        for torrent, reason in self.find_candidates(torrents):
            if self.behavior.dry_run:
                logger.info(
                    f"[DRY RUN] Would remove {truncate_name(torrent.name)} "
                    f"({reason.value}, {seed_info(torrent)})"
                )
                continue

            if not self.client.delete_torrent(torrent.hash, self.behavior.delete_files):
                self.events.emit_message(f"Error removing {torrent.name}", MessageCategory.ERROR, MODULE_NAME)
                continue

            removed += 1
            message = removal_message(reason, torrent)
            logger.debug(f"[Reaper] Deleted {torrent.hash} ({reason.value})")
            self.events.emit_message(message, MessageCategory.REMOVE, MODULE_NAME)

        if removed:
            logger.info(f"[Reaper] Removed {removed} torrent(s)")
        return removed
