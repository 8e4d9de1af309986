#!/usr/bin/env python3
"""String helpers for torrent file paths and tracker URLs.

Paths arrive from watchers on any platform, so these work on plain
strings and accept both ``\\`` and ``/`` separators instead of going
through ``os.path``.
"""

from .constants import TORRENT_EXTENSION


def containing_directory(path: str) -> str:
    """
    Return everything before the last path separator.

    Backslashes are checked first. A path without any separator is
    returned unchanged.
    """
    if "\\" in path:
        return path[:path.rindex("\\")]
    if "/" in path:
        return path[:path.rindex("/")]
    return path


def file_name(path: str) -> str:
    """Return the last component of a path using either separator."""
    return path.replace("\\", "/").rsplit("/", 1)[-1]


def is_torrent_file(path: str) -> bool:
    """True if the path ends with ``.torrent`` (case-sensitive)."""
    return path.endswith(TORRENT_EXTENSION)


def extract_hostname(url: str) -> str:
    """Strip scheme, path, port and query from a URL."""
    host = url.split("//", 1)[1] if "//" in url else url
    host = host.split("/")[0]
    host = host.split(":")[0]
    return host.split("?")[0]


def second_level_domain(url: str) -> str:
    """
    Best-effort registrable name of a tracker URL.

    ``http://tracker.example.com:6969/announce`` gives ``example``. When
    the last two labels are both two characters long (``.co.uk``) one
    more label is pulled in, so ``foo.bar.co.uk`` gives ``bar``. This is
    a heuristic, not a public suffix list lookup.

    Args:
        url: Tracker URL

    Returns:
        First label of the registrable domain, or an empty string
    """
    if not url:
        return ""

    labels = extract_hostname(url).split(".")
    if len(labels) > 2:
        domain = labels[-2:]
        if len(domain[0]) == 2 and len(domain[1]) == 2:
            domain = labels[-3:]
    else:
        domain = labels
    return domain[0]
