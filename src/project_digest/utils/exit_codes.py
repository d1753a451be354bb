"""Centralized exit-code contract for the CLI.

Code  Meaning
----  -------
  0   Success — report written
  2   Error — missing project root, invalid config, unwritable output
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    ERROR = 2
