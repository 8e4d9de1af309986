"""Actions router for the qbt-autopilot web API."""

import logging

from fastapi import APIRouter, Request

from ..app_state import AppState
from ..models import ActionResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def get_app_state(request: Request) -> AppState:
    """Retrieve the shared AppState from the application."""
    return request.app.state.app_state


@router.post("/actions/check-seed", response_model=ActionResponse)
def trigger_seed_check(request: Request) -> ActionResponse:
    """Trigger a seed check.

    Wakes the reaper loop so it runs now instead of at its next tick.
    """
    app_state = get_app_state(request)
    if not app_state.automation.check_seed_now():
        return ActionResponse(
            success=False,
            message="Not connected to qBittorrent yet",
        )

    logger.info("Seed check triggered via API")
    return ActionResponse(
        success=True,
        message="Seed check triggered successfully",
    )
