"""Pydantic response models for the qbt-autopilot web API."""

from typing import Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Response model for the health-check endpoint."""

    status: str = "ok"
    version: str
    uptime_seconds: float


class StatusResponse(BaseModel):
    """Response model for the status endpoint."""

    version: str
    connected: bool
    loops_started: bool
    login_attempts: int
    seed_checks: int
    download_checks: int
    downloads_in_progress: int
    seed_days: int
    seed_ratio: float
    remove_public_when_complete: bool
    dry_run: bool
    delete_files: bool
    qbittorrent_version: Optional[str] = None


class ActionResponse(BaseModel):
    """Response model for action endpoints."""

    success: bool
    message: str
