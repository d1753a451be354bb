"""Tree provider protocol and the result type shared by all providers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from project_digest.core.config import ScanConfig
from project_digest.core.filters import PathFilter

TEE = "├── "
LAST = "└── "
VERT = "│   "
SPACE = "    "


class TreeProviderError(RuntimeError):
    """A provider could not produce a tree; callers fall back to another one."""


@dataclass
class TreeResult:
    """Rendered tree lines (root line first) and truncation state."""

    lines: list[str] = field(default_factory=list)
    items: int = 0
    truncated: bool = False
    limit: int = 0
    provider: str = ""

    def truncation_notice(self) -> str:
        return f"... (tree truncated: limit of {self.limit} items reached)"

    def render(self) -> str:
        out = list(self.lines)
        if self.truncated:
            out.append(self.truncation_notice())
        return "\n".join(out)


@runtime_checkable
class TreeProvider(Protocol):
    """Every provider exposes ``name``, ``available()`` and ``render()``."""

    name: str

    def available(self) -> bool:
        ...

    def render(self, config: ScanConfig, path_filter: PathFilter) -> TreeResult:
        """Render the filtered tree of *config.root*."""
        ...


def root_label(config: ScanConfig) -> str:
    return f"{config.project_name}/"
