"""Line statistics — per-extension file and line counts."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from project_digest.core.config import DEFAULT_MAX_FILE_BYTES
from project_digest.model.file_record import FileRecord
from project_digest.model.stats import ProjectStats

_logger = logging.getLogger(__name__)


def count_lines(path: Path) -> int:
    """Number of newline-delimited records in *path* read as UTF-8 text.

    Raises ``OSError`` / ``UnicodeDecodeError`` when the file cannot be read.
    """
    with path.open(encoding="utf-8") as fh:
        return sum(1 for _ in fh)


class LineStatsCollector:
    """Aggregates file and line counts per extension.

    Files above ``max_file_bytes`` are left out. A file that cannot be read
    still counts as a file, with zero lines.
    """

    id: str = "line_stats"
    version: str = "1.0.0"

    def __init__(self, max_file_bytes: int = DEFAULT_MAX_FILE_BYTES):
        self.max_file_bytes = max_file_bytes

    def run(self, root: Path, files: Iterable[FileRecord]) -> ProjectStats:
        stats = ProjectStats()

        for record in files:
            if record.size > self.max_file_bytes:
                continue

            try:
                line_count = count_lines(record.path)
            except (OSError, UnicodeDecodeError) as exc:
                _logger.warning("could not count lines in %s: %s", record.rel_path, exc)
                line_count = 0

            stats.add(record.stats_key, line_count)

        _logger.debug(
            "stats for %s: %d files, %d lines",
            root,
            stats.total_files,
            stats.total_lines,
        )
        return stats
