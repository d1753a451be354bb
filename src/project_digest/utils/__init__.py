"""Shared utilities for project_digest."""

from project_digest.utils.determinism import (
    FIXED_TIMESTAMP,
    env_requires_deterministic,
    normalize_path,
    scan_timestamp,
)
from project_digest.utils.exit_codes import ExitCode

__all__ = [
    "ExitCode",
    "FIXED_TIMESTAMP",
    "env_requires_deterministic",
    "normalize_path",
    "scan_timestamp",
]
