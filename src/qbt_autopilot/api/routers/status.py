"""Status and health-check router for the qbt-autopilot web API."""

import logging
import time

from fastapi import APIRouter, Request

from ... import __version__
from ..app_state import AppState
from ..models import HealthResponse, StatusResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def get_app_state(request: Request) -> AppState:
    """Retrieve the shared AppState from the application."""
    return request.app.state.app_state


@router.get("/health", response_model=HealthResponse)
def health(request: Request) -> HealthResponse:
    """Health-check endpoint."""
    app_state = get_app_state(request)
    return HealthResponse(
        status="ok",
        version=__version__,
        uptime_seconds=round(time.time() - app_state.started_at, 2),
    )


@router.get("/status", response_model=StatusResponse)
def status(request: Request) -> StatusResponse:
    """Automation status merged with the configured thresholds.

    The qBittorrent version is only looked up while a session is held,
    so this endpoint never triggers a login.
    """
    app_state = get_app_state(request)
    config = app_state.config
    run_status = app_state.get_status()

    qbt_version = None
    if run_status["connected"]:
        qbt_version = app_state.client.app_version()

    return StatusResponse(
        version=__version__,
        qbittorrent_version=qbt_version,
        seed_days=config.seed.days,
        seed_ratio=config.seed.ratio,
        remove_public_when_complete=config.seed.remove_public_when_complete,
        dry_run=config.behavior.dry_run,
        delete_files=config.behavior.delete_files,
        **run_status,
    )
