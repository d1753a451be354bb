"""Analyzers aggregate facts about the discovered files.

Each analyzer exposes ``id``, ``version`` and ``run(root, files)``.

Available analyzers:
    - LineStatsCollector: per-extension file and line counts
"""

from __future__ import annotations

from project_digest.analyzers.line_stats import LineStatsCollector, count_lines

__all__ = ["LineStatsCollector", "count_lines"]
