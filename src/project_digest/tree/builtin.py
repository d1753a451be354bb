"""Built-in tree generator — iterative, bounded by ``max_tree_items``.

``list_children`` and ``iter_entries`` are the single source of what a tree
shows; the native provider feeds the same listing to ``tree``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from project_digest.core.config import ScanConfig
from project_digest.core.filters import PathFilter
from project_digest.tree.base import LAST, SPACE, TEE, VERT, TreeResult, root_label

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TreeEntry:
    path: Path
    rel: str
    name: str
    is_dir: bool


@dataclass(slots=True)
class _Frame:
    entries: list[TreeEntry]
    prefix: str
    index: int = 0


def list_children(
    directory: Path, rel_dir: str, config: ScanConfig, pf: PathFilter
) -> list[TreeEntry]:
    """Kept children of *directory*: directories first, then by name."""
    entries: list[TreeEntry] = []
    try:
        with os.scandir(directory) as it:
            listing = list(it)
    except OSError as exc:
        _logger.debug("cannot list %s: %s", directory, exc)
        return entries

    for e in listing:
        rel = f"{rel_dir}/{e.name}" if rel_dir else e.name
        try:
            if e.is_symlink() and not config.follow_symlinks:
                continue
            if e.is_dir(follow_symlinks=config.follow_symlinks):
                if not pf.dir_excluded(rel):
                    entries.append(TreeEntry(Path(e.path), rel, e.name, True))
            elif pf.file_included(rel) and not pf.is_output(Path(e.path)):
                entries.append(TreeEntry(Path(e.path), rel, e.name, False))
        except OSError as exc:
            _logger.debug("skipping %s: %s", rel, exc)

    entries.sort(key=lambda en: (not en.is_dir, en.name))
    return entries


def iter_entries(config: ScanConfig, pf: PathFilter) -> Iterator[TreeEntry]:
    """Every kept entry under the root, depth-first in display order."""
    root = config.root.resolve()
    stack = [iter(list_children(root, "", config, pf))]
    while stack:
        entry = next(stack[-1], None)
        if entry is None:
            stack.pop()
            continue
        yield entry
        if entry.is_dir:
            stack.append(iter(list_children(entry.path, entry.rel, config, pf)))


class BuiltinTreeProvider:
    """Pure-Python tree renderer; always available.

    Uses an explicit stack of ``(entries, prefix)`` frames instead of
    recursion, so nesting depth is bounded only by memory.
    """

    name = "builtin"

    def available(self) -> bool:
        return True

    def render(self, config: ScanConfig, path_filter: PathFilter) -> TreeResult:
        root = config.root.resolve()
        limit = config.max_tree_items
        result = TreeResult(lines=[root_label(config)], limit=limit, provider=self.name)

        stack = [_Frame(list_children(root, "", config, path_filter), "")]
        while stack:
            frame = stack[-1]
            if frame.index >= len(frame.entries):
                stack.pop()
                continue
            if result.items >= limit:
                result.truncated = True
                break

            entry = frame.entries[frame.index]
            frame.index += 1
            is_last = frame.index == len(frame.entries)
            result.lines.append(frame.prefix + (LAST if is_last else TEE) + entry.name)
            result.items += 1

            if entry.is_dir:
                child_prefix = frame.prefix + (SPACE if is_last else VERT)
                stack.append(
                    _Frame(
                        list_children(entry.path, entry.rel, config, path_filter),
                        child_prefix,
                    )
                )

        return result
