"""FastAPI application factory."""

from fastapi import FastAPI

from .. import __version__
from ..constants import ROUTE_PREFIX
from .app_state import AppState


def create_app(app_state: AppState) -> FastAPI:
    """Create and configure FastAPI application."""
    app = FastAPI(
        title="qbt-autopilot",
        version=__version__,
        docs_url="/api/docs",
        openapi_url="/api/openapi.json",
    )

    # Store app_state for dependency injection
    app.state.app_state = app_state

    # Import and include routers
    from .routers import actions, status, torrents

    app.include_router(torrents.router, prefix=ROUTE_PREFIX, tags=["torrents"])
    app.include_router(status.router, prefix="/api", tags=["status"])
    app.include_router(actions.router, prefix="/api", tags=["actions"])

    return app
