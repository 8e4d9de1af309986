#!/usr/bin/env python3
"""Seeding threshold evaluation."""

import math
import time
from typing import Optional

from .config import SeedConfig
from .constants import MS_PER_DAY, PUBLIC_LABEL, RemovalReason
from .models import Torrent


def days_ago(timestamp: float, now: Optional[float] = None) -> int:
    """
    Whole days between an epoch timestamp and now.

    The difference is absolute so a completion time slightly in the
    future (clock skew) never gives a negative count.

    Args:
        timestamp: Epoch seconds
        now: Epoch seconds to compare against, defaults to the current time

    Returns:
        Number of whole days elapsed
    """
    if now is None:
        now = time.time()
    delta_ms = abs(timestamp * 1000 - now * 1000)
    return int(math.floor(delta_ms / MS_PER_DAY))


def should_remove(torrent: Torrent, policy: SeedConfig,
                  now: Optional[float] = None) -> RemovalReason:
    """
    Decide whether a torrent has seeded enough to be removed.

    Incomplete torrents are never removed. Otherwise the public tracker,
    seeded days and ratio checks run in that order and the last one that
    holds decides the reason.

    A torrent without a completion timestamp never passes the public or
    seeded-days checks. Counting its age from the epoch instead would
    remove it on the first pass.

    Args:
        torrent: Torrent to evaluate
        policy: Seeding thresholds
        now: Epoch seconds, defaults to the current time

    Returns:
        Removal reason, RemovalReason.NONE to keep the torrent
    """
    reason = RemovalReason.NONE
    if torrent.progress < 1:
        return reason

    if (torrent.category == PUBLIC_LABEL
            and policy.remove_public_when_complete
            and torrent.completion_on is not None):
        reason = RemovalReason.PUBLIC_TRACKER

    if torrent.completion_on is not None and days_ago(torrent.completion_on, now) >= policy.days:
        reason = RemovalReason.SEEDED_DAYS

    if torrent.ratio >= policy.ratio:
        reason = RemovalReason.SEEDED_RATIO

    return reason
