"""Torrent list and transfer statistics routes.

Mounted under ``/qbittorrent``. Both routes answer 400 with an empty
body when qBittorrent cannot be queried.
"""

import logging

from fastapi import APIRouter, Request, Response

from ...paths import second_level_domain
from ..app_state import AppState

logger = logging.getLogger(__name__)

router = APIRouter()


def get_app_state(request: Request) -> AppState:
    """Retrieve the shared AppState from the application."""
    return request.app.state.app_state


@router.get("/list")
def list_torrents(request: Request):
    """List all torrents, each tagged with the name of its tracker."""
    torrents = get_app_state(request).client.list_torrents()
    if torrents is None:
        return Response(status_code=400)

    results = []
    for torrent in torrents:
        item = torrent.to_dict()
        item["trackerName"] = second_level_domain(torrent.tracker)
        results.append(item)
    return results


@router.get("/transferinfo")
def transfer_info(request: Request):
    """Global transfer statistics, as reported by qBittorrent."""
    info = get_app_state(request).client.transfer_summary()
    if info is None:
        return Response(status_code=400)
    return info
