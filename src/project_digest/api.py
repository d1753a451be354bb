"""
project_digest.api
==================

Programmatic entrypoints: build the report text, or build and write it.

Goals:
  - No argparse / CLI dependencies
  - Deterministic mode support (fixed timestamp)
  - Per-file failures degrade into the report, never abort it

Usage::

    from project_digest.api import build_report, write_report
    from project_digest.core.config import ScanConfig

    text = build_report(ScanConfig(root=Path("."), show_stats=True))
    out = write_report(ScanConfig(root=Path("."), output=Path("digest.md")))
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from project_digest.analyzers.line_stats import LineStatsCollector
from project_digest.core.config import ScanConfig
from project_digest.core.discover import iter_files
from project_digest.core.filters import PathFilter
from project_digest.reports.markdown import (
    render_contents,
    render_header,
    render_stats,
    render_tree_section,
)
from project_digest.tree import TreeProvider, render_tree
from project_digest.utils.determinism import scan_timestamp

_logger = logging.getLogger(__name__)


class ProjectRootError(FileNotFoundError):
    """The project root is missing or is not a directory."""


def check_root(root: Path) -> Path:
    """Resolve *root*, raising :class:`ProjectRootError` if it is unusable."""
    root_p = root.resolve()
    if not root_p.exists():
        raise ProjectRootError(f"project directory does not exist: {root_p}")
    if not root_p.is_dir():
        raise ProjectRootError(f"project path is not a directory: {root_p}")
    return root_p


def build_report(
    config: ScanConfig,
    *,
    tree_providers: Sequence[TreeProvider] | None = None,
    timestamp: str | None = None,
) -> str:
    """Assemble the full report text for *config*.

    Parameters
    ----------
    config:
        Scan configuration; ``root`` must be an existing directory.
    tree_providers:
        Override provider selection (e.g. force the builtin provider).
    timestamp:
        Override the header timestamp.

    Raises
    ------
    ProjectRootError
        If ``config.root`` does not exist or is not a directory.
    """
    check_root(config.root)
    path_filter = PathFilter(config)

    sections = [
        render_header(config, timestamp or scan_timestamp(config.deterministic))
    ]

    if config.show_stats:
        collector = LineStatsCollector(max_file_bytes=config.max_file_bytes)
        stats = collector.run(config.root, iter_files(config, path_filter))
        sections.append(render_stats(stats))

    tree = render_tree(config, path_filter, tree_providers)
    _logger.debug("tree rendered by '%s' (%d items)", tree.provider, tree.items)
    if tree.truncated:
        _logger.info("tree truncated at %d items", tree.limit)
    sections.append(render_tree_section(tree))

    if config.include_contents:
        sections.append(
            render_contents(iter_files(config, path_filter), config.max_file_bytes)
        )

    return "".join(sections)


def write_report(
    config: ScanConfig,
    *,
    tree_providers: Sequence[TreeProvider] | None = None,
    timestamp: str | None = None,
) -> Path:
    """Build the report and write it to ``config.output`` (overwriting).

    Nothing is written when the root check fails.
    """
    text = build_report(config, tree_providers=tree_providers, timestamp=timestamp)
    out = config.output
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text, encoding="utf-8")
    _logger.debug("wrote %d characters to %s", len(text), out)
    return out
