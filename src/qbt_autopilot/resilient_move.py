#!/usr/bin/env python3
"""Moving ingested torrent files into the archive directory.

Watch folders are often network mounts while the archive lives on local
disk, so a plain rename can fail with EXDEV. In that case the file is
copied and the source removed afterwards.
"""

import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path

from .errors import RelocationFailure

logger = logging.getLogger(__name__)


@dataclass
class MoveResult:
    """Result of a file move."""

    source: Path
    dest: Path
    copied: bool = False


def _is_same_filesystem(source: Path, dest_parent: Path) -> bool:
    """Check if source and dest parent are on the same filesystem."""
    try:
        return os.stat(source).st_dev == os.stat(dest_parent).st_dev
    except OSError:
        return False


def move_file(source: Path, dest_dir: Path) -> MoveResult:
    """Move a file into a directory, replacing any file with the same name.

    The directory is created if missing.

    Args:
        source: File to move.
        dest_dir: Directory receiving the file.

    Returns:
        MoveResult describing how the file was moved.

    Raises:
        RelocationFailure: If the file could not be placed at the destination,
            or a cross-filesystem copy left the original behind.
    """
    dest = dest_dir / source.name
    result = MoveResult(source=source, dest=dest)

    try:
        dest_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise RelocationFailure(f"Cannot create {dest_dir}: {e}") from e

    if not source.is_file():
        raise RelocationFailure(f"Source file does not exist: {source}")

    # Same filesystem: os.replace is atomic and overwrites
    if _is_same_filesystem(source, dest_dir):
        try:
            os.replace(str(source), str(dest))
            return result
        except OSError:
            logger.debug(f"[Move] os.replace failed, falling back to copy: {source.name}")

    try:
        shutil.copy2(str(source), str(dest))
    except FileNotFoundError as e:
        raise RelocationFailure(f"File disappeared during copy: {source.name}") from e
    except OSError as e:
        raise RelocationFailure(f"OS error copying {source.name}: {e}") from e

    result.copied = True
    try:
        source.unlink()
    except OSError as e:
        raise RelocationFailure(f"Copied to {dest} but could not remove the original: {e}") from e
    return result
