"""Determinism utilities for reproducible reports.

When --deterministic mode is enabled the scan timestamp is fixed to a known
epoch, so two runs over an unchanged tree produce byte-identical reports.
"""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path

# Fixed timestamp for deterministic mode (same layout as the live one)
FIXED_TIMESTAMP = "2000-01-01 00:00:00"

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

DETERMINISTIC_ENV = "PROJECT_DIGEST_DETERMINISTIC"


def env_requires_deterministic() -> bool:
    """Return True when the environment asks for deterministic output."""
    return os.environ.get(DETERMINISTIC_ENV, "").lower() in ("1", "true", "yes", "on")


def scan_timestamp(deterministic: bool = False) -> str:
    """Return the timestamp printed in the report header.

    In deterministic mode, returns FIXED_TIMESTAMP.
    Otherwise returns the current local time.
    """
    if deterministic or env_requires_deterministic():
        return FIXED_TIMESTAMP
    return datetime.now().strftime(TIMESTAMP_FORMAT)


def normalize_path(path: Path, root: Path) -> str:
    """Convert a path to root-relative, POSIX-normalized string.

    Ensures consistent paths across Windows/Linux/macOS.
    """
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        # Path is not under root, return absolute POSIX
        return path.as_posix()
