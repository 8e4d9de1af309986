#!/usr/bin/env python3
"""Notification support via Apprise for automation messages."""

import logging

import apprise

from .constants import MODULE_NAME, MessageCategory
from .models import Torrent
from .utils import display_name

logger = logging.getLogger(__name__)


class Notifier:
    """Forwards bus messages and finished downloads to Apprise URLs.

    Each message category can be switched off. Without URLs every call
    is a no-op.
    """

    def __init__(self, enabled: bool, urls: list[str],
                 on_add: bool = True, on_remove: bool = True,
                 on_error: bool = True, on_complete: bool = True) -> None:
        """Initialize the notifier.

        Args:
            enabled: Whether notifications are enabled
            urls: List of Apprise notification URLs
            on_add: Notify when a torrent file is added
            on_remove: Notify when a seeded torrent is removed
            on_error: Notify on errors
            on_complete: Notify when a download finishes
        """
        self._enabled = enabled
        self._categories = {
            MessageCategory.ADD: on_add,
            MessageCategory.REMOVE: on_remove,
            MessageCategory.ERROR: on_error,
            MessageCategory.INFO: True,
        }
        self._on_complete = on_complete
        self._apprise = None

        if not enabled or not urls:
            if enabled and not urls:
                logger.warning("[Notifications] Enabled but no NOTIFY_URLS configured")
            return

        self._apprise = apprise.Apprise()
        for url in urls:
            self._apprise.add(url)
        logger.info(f"[Notifications] Initialized with {len(self._apprise)} service(s)")

    @classmethod
    def from_config(cls, config) -> "Notifier":
        """Build a notifier from a NotificationsConfig."""
        return cls(
            enabled=config.enabled,
            urls=config.urls,
            on_add=config.on_add,
            on_remove=config.on_remove,
            on_error=config.on_error,
            on_complete=config.on_complete,
        )

    @property
    def is_active(self) -> bool:
        """Check if notifications are active and configured."""
        return self._enabled and self._apprise is not None

    def send_message(self, message: str, category: MessageCategory, source: str = MODULE_NAME) -> int:
        """Forward a bus message.

        Args:
            message: Human-readable message
            category: Message category
            source: Name of the emitting module

        Returns:
            Number of services successfully notified
        """
        if not self.is_active or not self._categories.get(category, False):
            return 0

        notify_type = apprise.NotifyType.FAILURE if category == MessageCategory.ERROR else apprise.NotifyType.INFO
        return self._send(f"{source}: {category.value.capitalize()}", message, notify_type)

    def notify_download_complete(self, torrent: Torrent) -> int:
        """Send notification for a finished download."""
        if not self.is_active or not self._on_complete:
            return 0

        return self._send(
            f"{MODULE_NAME}: Download Complete",
            f"Finished downloading {display_name(torrent.name)}",
            apprise.NotifyType.SUCCESS,
        )

    def _send(self, title: str, body: str, notify_type) -> int:
        """Deliver one notification; Apprise errors are logged, never raised."""
        try:
            delivered = self._apprise.notify(title=title, body=body, notify_type=notify_type)
        except Exception as e:
            logger.error(f"[Notifications] Could not deliver '{title}': {e}")
            return 0

        if not delivered:
            logger.warning(f"[Notifications] No service accepted '{title}'")
            return 0
        count = len(self._apprise)
        logger.debug(f"[Notifications] '{title}' sent to {count} service(s)")
        return count
