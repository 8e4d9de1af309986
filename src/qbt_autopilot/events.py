#!/usr/bin/env python3
"""In-process event bus connecting the automation to its host."""

import logging
import threading
from collections import defaultdict
from typing import Any, Callable, DefaultDict, List

from .constants import MessageCategory
from .models import Torrent

logger = logging.getLogger(__name__)

FILE_ADDED = "file.add"
DOWNLOAD_COMPLETE = "download.complete"
MESSAGE = "message"

FileAddedHandler = Callable[[str], Any]
DownloadCompleteHandler = Callable[[Torrent], Any]
MessageHandler = Callable[[str, MessageCategory, str], Any]


class EventBus:
    """Synchronous publish/subscribe hub.

    Handlers run on the publisher's thread. A handler that raises is
    logged and skipped so that one bad listener cannot break a polling
    loop.
    """

    def __init__(self) -> None:
        self._handlers: DefaultDict[str, List[Callable[..., Any]]] = defaultdict(list)
        self._lock = threading.Lock()

    def subscribe(self, event: str, handler: Callable[..., Any]) -> None:
        """Register a handler for an event name."""
        with self._lock:
            self._handlers[event].append(handler)

    def unsubscribe(self, event: str, handler: Callable[..., Any]) -> None:
        """Remove a previously registered handler, if present."""
        with self._lock:
            if handler in self._handlers[event]:
                self._handlers[event].remove(handler)

    def publish(self, event: str, *args: Any) -> int:
        """
        Call every handler registered for an event.

        Args:
            event: Event name
            *args: Payload passed to each handler

        Returns:
            Number of handlers that ran without raising
        """
        with self._lock:
            handlers = list(self._handlers[event])

        delivered = 0
        for handler in handlers:
            try:
                handler(*args)
                delivered += 1
            except Exception as e:
                logger.error(f"Handler for '{event}' failed: {e}", exc_info=True)
        return delivered

    # Typed helpers

    def on_file_added(self, handler: FileAddedHandler) -> None:
        self.subscribe(FILE_ADDED, handler)

    def publish_file_added(self, path: str) -> int:
        return self.publish(FILE_ADDED, path)

    def on_download_complete(self, handler: DownloadCompleteHandler) -> None:
        self.subscribe(DOWNLOAD_COMPLETE, handler)

    def emit_download_complete(self, torrent: Torrent) -> int:
        return self.publish(DOWNLOAD_COMPLETE, torrent)

    def on_message(self, handler: MessageHandler) -> None:
        self.subscribe(MESSAGE, handler)

    def emit_message(self, message: str, category: MessageCategory, source: str) -> int:
        """Publish a user-facing message tagged with a category and its source."""
        return self.publish(MESSAGE, message, category, source)
