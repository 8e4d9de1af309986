#!/usr/bin/env python3
"""qBittorrent client wrapper used by the automation loops."""

import logging
from typing import Any, Callable, Dict, List, Optional

import qbittorrentapi
import urllib3

from .config import ConnectionConfig
from .constants import DEFAULT_TIMEOUT
from .errors import ConnectionFailure, RequestFailure
from .models import Torrent

# Suppress SSL warnings when SSL verification is disabled
urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

logger = logging.getLogger(__name__)


class QBittorrentClient:
    """Session-owning wrapper around qbittorrentapi.

    Every call is a fresh round trip. Request methods never raise: they
    log the failure and return None or False. A request that loses the
    connection drops the session, and the next request logs in again.
    """

    def __init__(self, config: ConnectionConfig):
        """
        Initialize client wrapper.

        Args:
            config: Connection configuration
        """
        self.config = config
        self._client: Optional[qbittorrentapi.Client] = None
        self._quiet: bool = False

    @property
    def is_connected(self) -> bool:
        """Check if a session is currently held."""
        return self._client is not None

    @property
    def client(self) -> qbittorrentapi.Client:
        """Get the underlying client, logging in again if the session was dropped."""
        # Read once: another thread may drop the session concurrently
        client = self._client
        if client is None:
            client = self.connect(quiet=True)
        return client

    def connect(self, *, quiet: bool = False) -> qbittorrentapi.Client:
        """
        Log in to qBittorrent and keep the session.

        Args:
            quiet: If True, log the connection at debug level

        Returns:
            The logged-in qbittorrentapi client

        Raises:
            ConnectionFailure: If the Web UI is unreachable or rejects the login
        """
        client = qbittorrentapi.Client(
            host=self.config.host,
            port=self.config.port,
            username=self.config.username,
            password=self.config.password,
            VERIFY_WEBUI_CERTIFICATE=self.config.verify_ssl,
            REQUESTS_ARGS={'timeout': DEFAULT_TIMEOUT}
        )

        # Suppress SSL logging for connection
        original_level = logging.getLogger("urllib3.connectionpool").level
        logging.getLogger("urllib3.connectionpool").setLevel(logging.ERROR)

        try:
            client.auth_log_in()
        except qbittorrentapi.LoginFailed as e:
            raise ConnectionFailure(f"Login rejected by qBittorrent: {e}") from e
        except qbittorrentapi.HTTPError as e:
            raise ConnectionFailure(f"qBittorrent refused the login request: {e}") from e
        except qbittorrentapi.APIConnectionError as e:
            raise ConnectionFailure(f"Could not reach qBittorrent: {e}", refused=True) from e
        except qbittorrentapi.APIError as e:
            raise ConnectionFailure(f"Unexpected error during login: {e}") from e
        finally:
            # Restore original logging level
            logging.getLogger("urllib3.connectionpool").setLevel(original_level)

        self._client = client
        self._quiet = quiet
        log_fn = logger.debug if quiet else logger.info
        log_fn(f"Connected to qBittorrent at {self.config.host}:{self.config.port}")
        return client

    def disconnect(self) -> None:
        """Disconnect from qBittorrent."""
        if self._client:
            try:
                self._client.auth_log_out()
                log_fn = logger.debug if self._quiet else logger.info
                log_fn("Disconnected from qBittorrent")
            except Exception as e:
                logger.debug(f"Logout error (ignored): {e}")
            finally:
                self._client = None
                self._quiet = False

    def _call(self, action: str, request: Callable[[qbittorrentapi.Client], Any]) -> Any:
        """
        Run a single API request against the current session.

        Args:
            action: What the request does, for error messages
            request: Callable receiving the qbittorrentapi client

        Returns:
            Whatever the request returned

        Raises:
            RequestFailure: If the session or the request failed
        """
        try:
            return request(self.client)
        except ConnectionFailure as e:
            raise RequestFailure(f"Not connected while {action}: {e.message}") from e
        except qbittorrentapi.HTTPError as e:
            raise RequestFailure(f"qBittorrent rejected {action}: {e}") from e
        except qbittorrentapi.APIConnectionError as e:
            self._client = None
            raise RequestFailure(f"API connection error {action}: {e}") from e
        except qbittorrentapi.APIError as e:
            raise RequestFailure(f"API error {action}: {e}") from e

    def list_torrents(self) -> Optional[List[Torrent]]:
        """
        Get all torrents.

        Returns:
            List of torrents, or None on API failure
        """
        try:
            raw_torrents = self._call("fetching torrents", lambda c: c.torrents_info())
        except RequestFailure as e:
            logger.error(e.message)
            return None
        return [Torrent.from_api(t) for t in raw_torrents]

    def delete_torrent(self, torrent_hash: str, delete_files: bool = False) -> bool:
        """
        Delete a single torrent.

        Args:
            torrent_hash: Hash of the torrent to delete
            delete_files: Whether to delete downloaded data as well

        Returns:
            True if successful
        """
        try:
            self._call(
                "deleting torrent",
                lambda c: c.torrents_delete(delete_files=delete_files, torrent_hashes=torrent_hash)
            )
            return True
        except RequestFailure as e:
            logger.error(f"{e.message} ({torrent_hash})")
            return False

    def add_torrent_file(self, path: str, save_path: str) -> bool:
        """
        Submit a .torrent file.

        Args:
            path: Path of the .torrent file on disk
            save_path: Directory qBittorrent should download into

        Returns:
            True if qBittorrent accepted the torrent
        """
        try:
            result = self._call(
                "adding torrent",
                lambda c: c.torrents_add(torrent_files=path, save_path=save_path)
            )
        except RequestFailure as e:
            logger.error(f"{e.message} ({path})")
            return False

        # Older Web API versions answer 'Ok.' or 'Fails.', newer ones return JSON
        if isinstance(result, str) and result.strip().lower().startswith("fails"):
            logger.warning(f"qBittorrent returned failure response for {path}: {result}")
            return False
        return True

    def transfer_summary(self) -> Optional[Dict[str, Any]]:
        """
        Get global transfer statistics.

        Returns:
            Transfer info dictionary, or None on API failure
        """
        try:
            info = self._call("fetching transfer info", lambda c: c.transfer_info())
        except RequestFailure as e:
            logger.error(e.message)
            return None
        return dict(info)

    def app_version(self) -> Optional[str]:
        """qBittorrent version string, or None if it cannot be read."""
        try:
            return str(self._call("fetching version", lambda c: c.app_version()))
        except RequestFailure as e:
            logger.debug(e.message)
            return None
