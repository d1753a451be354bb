"""Per-extension statistics built during one traversal."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class ExtensionStats:
    files: int = 0
    lines: int = 0


@dataclass
class ProjectStats:
    """Extension → (file count, line count), filled incrementally."""

    by_extension: dict[str, ExtensionStats] = field(default_factory=dict)

    def add(self, key: str, lines: int) -> None:
        entry = self.by_extension.setdefault(key, ExtensionStats())
        entry.files += 1
        entry.lines += lines

    @property
    def total_files(self) -> int:
        return sum(e.files for e in self.by_extension.values())

    @property
    def total_lines(self) -> int:
        return sum(e.lines for e in self.by_extension.values())

    def rows(self) -> list[tuple[str, ExtensionStats]]:
        """One row per extension, sorted alphabetically by extension name."""
        return sorted(self.by_extension.items())

    def to_dict(self) -> dict:
        return {
            "total_files": self.total_files,
            "total_lines": self.total_lines,
            "by_extension": {
                key: {"files": e.files, "lines": e.lines} for key, e in self.rows()
            },
        }
