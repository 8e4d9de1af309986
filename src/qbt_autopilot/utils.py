#!/usr/bin/env python3
"""Utility functions for qBittorrent automation."""

import logging
import os
from typing import Optional

from .constants import TORRENT_EXTENSION

logger = logging.getLogger(__name__)


_BOOL_TRUE = frozenset(('true', '1', 'yes', 'on'))
_BOOL_FALSE = frozenset(('false', '0', 'no', 'off'))

_SIZE_UNITS = ("B", "kB", "MB", "GB", "TB", "PB")


def parse_bool(env_var: str, default: bool = False) -> bool:
    """
    Parse boolean environment variable.

    Args:
        env_var: Environment variable name
        default: Default value if not set

    Returns:
        Parsed boolean value
    """
    raw = os.environ.get(env_var)
    if raw is None:
        return default
    lower = raw.strip().lower()
    if lower not in _BOOL_TRUE and lower not in _BOOL_FALSE:
        logger.warning(f"{env_var}='{raw}' is not a recognized boolean, treating as False")
    return lower in _BOOL_TRUE


def parse_float(env_var: str, default: float, min_val: Optional[float] = None) -> float:
    """
    Parse float environment variable with optional minimum value.

    Args:
        env_var: Environment variable name
        default: Default value if not set
        min_val: Minimum allowed value

    Returns:
        Parsed float value
    """
    try:
        value = float(os.environ.get(env_var, str(default)))
        if min_val is not None and value < min_val:
            logger.warning(f"{env_var}={value} is below minimum {min_val}, using minimum")
            return min_val
        return value
    except (ValueError, TypeError):
        logger.warning(f"Invalid float value for {env_var}, using default {default}")
        return default


def parse_int(env_var: str, default: int, min_val: Optional[int] = None) -> int:
    """
    Parse integer environment variable with optional minimum value.

    Args:
        env_var: Environment variable name
        default: Default value if not set
        min_val: Minimum allowed value

    Returns:
        Parsed integer value
    """
    try:
        value = int(os.environ.get(env_var, str(default)))
        if min_val is not None and value < min_val:
            logger.warning(f"{env_var}={value} is below minimum {min_val}, using minimum")
            return min_val
        return value
    except (ValueError, TypeError):
        logger.warning(f"Invalid integer value for {env_var}, using default {default}")
        return default


def parse_list(env_var: str) -> list[str]:
    """Parse a comma-separated environment variable into a list of strings."""
    return [item.strip() for item in os.environ.get(env_var, "").split(",") if item.strip()]


def truncate_name(name: str, max_length: int = 60) -> str:
    """
    Truncate a torrent name for display.

    Args:
        name: Torrent name to truncate
        max_length: Maximum length

    Returns:
        Truncated name with ellipsis if needed
    """
    if len(name) <= max_length:
        return name
    return name[:max_length - 3] + "..."


def display_name(name: str) -> str:
    """
    Turn a torrent name into something readable for messages.

    A trailing ``.torrent`` is dropped and dots become spaces, so
    ``Some.Show.S01.torrent`` reads ``Some Show S01``.
    """
    if name.endswith(TORRENT_EXTENSION):
        name = name[:-len(TORRENT_EXTENSION)]
    return name.replace(".", " ")


def format_bytes(size: Optional[float]) -> str:
    """
    Format a byte count with decimal (SI) units.

    Args:
        size: Number of bytes

    Returns:
        Human readable size such as ``1.50 GB``
    """
    if size is None:
        return "0 B"
    try:
        value = float(size)
    except (ValueError, TypeError):
        return "0 B"

    negative = value < 0
    value = abs(value)
    if value < 1000:
        text = f"{value:.0f} B"
    else:
        unit_index = 0
        while value >= 1000 and unit_index < len(_SIZE_UNITS) - 1:
            value /= 1000
            unit_index += 1
        text = f"{value:.2f} {_SIZE_UNITS[unit_index]}"
    return f"-{text}" if negative else text
