"""FileRecord — one file found by a traversal, derived per walk."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from project_digest.core.filters import file_extension
from project_digest.utils.determinism import normalize_path


@dataclass(frozen=True, slots=True)
class FileRecord:
    """A file under the scan root.

    Not persisted: every phase rebuilds its records from a fresh walk.
    """

    path: Path          # absolute
    rel_path: str       # POSIX-style, relative to the scan root
    size: int           # bytes
    extension: str      # lowercase, no dot, "" when absent

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def stats_key(self) -> str:
        """Statistics bucket: the extension, or the file name when there is none."""
        return self.extension or self.name

    @classmethod
    def from_path(cls, path: Path, root: Path) -> "FileRecord":
        """Build a record by stat-ing *path*; raises ``OSError`` if it vanished."""
        return cls(
            path=path,
            rel_path=normalize_path(path, root),
            size=path.stat().st_size,
            extension=file_extension(path.name),
        )
