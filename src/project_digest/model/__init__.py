"""Data model shared by the traversal, statistics and report layers."""

from __future__ import annotations

from project_digest.model.file_record import FileRecord
from project_digest.model.stats import ExtensionStats, ProjectStats

__all__ = ["ExtensionStats", "FileRecord", "ProjectStats"]
