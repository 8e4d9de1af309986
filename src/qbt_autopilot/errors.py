#!/usr/bin/env python3
"""Exceptions raised by qBittorrent automation."""


class AutopilotError(Exception):
    """Base class for automation errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConnectionFailure(AutopilotError):
    """A session with qBittorrent could not be established.

    ``refused`` is set when the Web UI could not be reached at all, as
    opposed to a rejected login.
    """

    def __init__(self, message: str, refused: bool = False) -> None:
        super().__init__(message)
        self.refused = refused


class RequestFailure(AutopilotError):
    """A single qBittorrent API request failed."""


class RelocationFailure(AutopilotError):
    """A torrent file could not be moved into the archive directory."""
