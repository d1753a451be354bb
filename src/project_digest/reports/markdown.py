"""Report sections, rendered as Markdown-flavoured text.

Layout (in order)::

    # PROJECT ANALYSIS      header
    # PROJECT STATISTICS    only with show_stats
    # PROJECT STRUCTURE     tree
    # FILE CONTENTS         unless tree_only / no_content
"""

from __future__ import annotations

from typing import Iterable

from project_digest.core.config import ScanConfig
from project_digest.model.file_record import FileRecord
from project_digest.model.stats import ProjectStats
from project_digest.reports.content import render_file_block
from project_digest.tree.base import TreeResult

SEPARATOR = "---"


def render_header(config: ScanConfig, timestamp: str) -> str:
    lines = [
        "# PROJECT ANALYSIS",
        "",
        f"**Project:** {config.project_name}",
        f"**Scan date:** {timestamp}",
        f"**Scanned directory:** {config.root.resolve()}",
        "",
        SEPARATOR,
        "",
    ]
    return "\n".join(lines) + "\n"


def render_stats(stats: ProjectStats) -> str:
    lines = [
        "# PROJECT STATISTICS",
        "",
        f"**Total files:** {stats.total_files}",
        f"**Total lines:** {stats.total_lines}",
        "",
        "| Extension | Files | Lines |",
        "|-----------|------:|------:|",
    ]
    for key, entry in stats.rows():
        lines.append(f"| {key} | {entry.files} | {entry.lines} |")
    lines.append(f"| **Total** | {stats.total_files} | {stats.total_lines} |")
    lines += ["", SEPARATOR, ""]
    return "\n".join(lines) + "\n"


def render_tree_section(tree: TreeResult) -> str:
    return f"# PROJECT STRUCTURE\n\n{tree.render()}\n\n{SEPARATOR}\n\n"


def render_contents(files: Iterable[FileRecord], max_file_bytes: int) -> str:
    """One subsection per file, sorted by full path."""
    blocks = [
        render_file_block(record, max_file_bytes)
        for record in sorted(files, key=lambda r: r.path)
    ]
    if not blocks:
        return "# FILE CONTENTS\n\n*No files matched the inclusion rules.*\n"
    return "# FILE CONTENTS\n\n" + "\n".join(blocks)
