"""File discovery — walk the scan root respecting exclusion rules."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator

from project_digest.core.config import ScanConfig
from project_digest.core.filters import PathFilter
from project_digest.model.file_record import FileRecord

_logger = logging.getLogger(__name__)


def iter_files(
    config: ScanConfig,
    path_filter: PathFilter | None = None,
) -> Iterator[FileRecord]:
    """Yield every eligible file under *config.root*.

    Each call performs a fresh walk. Excluded directories are pruned before
    descending; files must pass the exclusion patterns and the extension
    allow-list. Size is *not* filtered here: callers apply the
    ``max_file_bytes`` bound the way their phase needs it.
    """
    root = config.root.resolve()
    pf = path_filter or PathFilter(config)

    def _on_error(err: OSError) -> None:
        _logger.debug("skipping unreadable directory %s: %s", err.filename, err)

    for dirpath, dirnames, filenames in os.walk(
        root, onerror=_on_error, followlinks=config.follow_symlinks
    ):
        current = Path(dirpath)
        rel_dir = current.relative_to(root).as_posix()
        prefix = "" if rel_dir == "." else rel_dir + "/"

        dirnames[:] = sorted(
            d
            for d in dirnames
            if not pf.dir_excluded(prefix + d)
            and (config.follow_symlinks or not (current / d).is_symlink())
        )

        for name in sorted(filenames):
            path = current / name
            rel = prefix + name
            try:
                if path.is_symlink() and not config.follow_symlinks:
                    continue
                if not path.is_file():
                    continue
                if not pf.file_included(rel) or pf.is_output(path):
                    continue
                record = FileRecord.from_path(path, root)
            except OSError as exc:
                # Removed or unreadable between listing and stat.
                _logger.debug("skipping %s: %s", rel, exc)
                continue
            yield record
