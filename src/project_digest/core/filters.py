"""Path filter — decide whether a root-relative path is excluded.

Pattern language for excluded files:

  ``*``  any sequence of characters (including ``/``)
  ``?``  exactly one character

Every other character is literal. Patterns are anchored at both ends and
matched against the whole POSIX-style relative path.
"""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path, PurePath
from typing import Iterable

from project_digest.core.config import ScanConfig


def _posix(rel_path: str | PurePath) -> str:
    if isinstance(rel_path, PurePath):
        return rel_path.as_posix()
    return rel_path.replace("\\", "/")


@lru_cache(maxsize=512)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Translate a ``*``/``?`` glob into an anchored regex."""
    parts: list[str] = []
    for ch in pattern:
        if ch == "*":
            parts.append(".*")
        elif ch == "?":
            parts.append(".")
        else:
            parts.append(re.escape(ch))
    return re.compile("".join(parts), re.DOTALL)


def matches_pattern(rel_path: str | PurePath, pattern: str) -> bool:
    return compile_pattern(pattern).fullmatch(_posix(rel_path)) is not None


def is_excluded_dir(rel_path: str | PurePath, exclude_dirs: Iterable[str]) -> bool:
    """True iff *rel_path* equals an excluded directory or lies beneath one.

    Matching is segment-exact: ``libsrc`` is not excluded by ``lib``.
    """
    rel = _posix(rel_path)
    for d in exclude_dirs:
        d = _posix(d).strip("/")
        if not d:
            continue
        if rel == d or rel.startswith(d + "/"):
            return True
    return False


def is_excluded_file(rel_path: str | PurePath, patterns: Iterable[str]) -> bool:
    return any(matches_pattern(rel_path, p) for p in patterns)


def file_extension(name: str) -> str:
    """Lowercase suffix without the dot, ``""`` for extension-less names."""
    return PurePath(name).suffix.lower().lstrip(".")


class PathFilter:
    """All inclusion/exclusion rules of one :class:`ScanConfig`, precompiled."""

    def __init__(self, config: ScanConfig):
        self.config = config
        self.exclude_dirs = config.exclude_dirs
        self._file_patterns = [compile_pattern(p) for p in config.exclude_files]
        self._exts = frozenset(e.lower() for e in config.include_exts)
        self._names = frozenset(config.include_exts)
        try:
            self._output = config.output.resolve()
        except OSError:
            self._output = None

    def dir_excluded(self, rel_path: str | PurePath) -> bool:
        return is_excluded_dir(rel_path, self.exclude_dirs)

    def file_excluded(self, rel_path: str | PurePath) -> bool:
        rel = _posix(rel_path)
        return any(p.fullmatch(rel) for p in self._file_patterns)

    def extension_included(self, name: str) -> bool:
        """Extension allow-list; exact file names (e.g. ``Dockerfile``) also count."""
        if name in self._names:
            return True
        ext = file_extension(name)
        return bool(ext) and ext in self._exts

    def is_output(self, path: Path) -> bool:
        """True for the report file itself, which is never scanned."""
        return self._output is not None and path.resolve() == self._output

    def file_included(self, rel_path: str | PurePath) -> bool:
        """Not under an excluded dir, not matching a pattern, extension allowed."""
        rel = _posix(rel_path)
        if self.dir_excluded(rel):
            return False
        if self.file_excluded(rel):
            return False
        return self.extension_included(rel.rpartition("/")[2])
