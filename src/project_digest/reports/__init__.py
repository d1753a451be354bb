"""Reports — section rendering for the project digest."""

from project_digest.reports.content import language_for, render_file_block
from project_digest.reports.markdown import (
    render_contents,
    render_header,
    render_stats,
    render_tree_section,
)

__all__ = [
    "language_for",
    "render_contents",
    "render_file_block",
    "render_header",
    "render_stats",
    "render_tree_section",
]
