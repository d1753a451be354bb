"""Native tree provider — delegates drawing to the external ``tree`` utility.

The entries are selected by the same listing the builtin provider walks
(:func:`iter_entries`) and handed to ``tree --fromfile`` on stdin, so both
providers show exactly the same paths. ``tree`` only lays them out. The
root line is relabelled and the item cap is applied to the output. Any
failure raises :class:`TreeProviderError` so the caller can fall back to
the builtin provider.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess

from project_digest.core.config import ScanConfig
from project_digest.core.filters import PathFilter
from project_digest.tree.base import TreeProviderError, TreeResult, root_label
from project_digest.tree.builtin import iter_entries

_logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT = 30.0  # seconds

# tree(1) pads its utf-8 indent with no-break spaces.
_NBSP = "\u00a0"


class NativeTreeProvider:
    """Runs ``tree --fromfile`` in a subprocess."""

    name = "native"

    def __init__(self, executable: str = "tree", timeout: float = _DEFAULT_TIMEOUT):
        self.executable = executable
        self.timeout = timeout

    def available(self) -> bool:
        return shutil.which(self.executable) is not None

    def build_command(self) -> list[str]:
        # "." makes --fromfile read the listing from stdin.
        return [
            self.executable,
            "--fromfile",
            "-a",
            "-n",
            "--noreport",
            "--dirsfirst",
            "--charset",
            "utf-8",
            ".",
        ]

    def build_listing(self, config: ScanConfig, path_filter: PathFilter) -> str:
        """Newline-separated relative paths; directories end with ``/``."""
        lines: list[str] = []
        for entry in iter_entries(config, path_filter):
            if "\n" in entry.rel or "\r" in entry.rel:
                raise TreeProviderError(f"path not expressible for tree: {entry.rel!r}")
            lines.append(entry.rel + "/" if entry.is_dir else entry.rel)
        return "".join(line + "\n" for line in lines)

    def render(self, config: ScanConfig, path_filter: PathFilter) -> TreeResult:
        listing = self.build_listing(config, path_filter)
        cmd = self.build_command()
        _logger.debug("running %s", " ".join(cmd))
        try:
            proc = subprocess.run(
                cmd,
                cwd=str(config.root.resolve()),
                input=listing,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
                # Bytewise name ordering, same as the builtin provider.
                env={**os.environ, "LC_ALL": "C"},
            )
        except (OSError, subprocess.SubprocessError) as exc:
            raise TreeProviderError(f"{self.executable} failed: {exc}") from exc

        if proc.returncode != 0:
            raise TreeProviderError(
                f"{self.executable} exited with {proc.returncode}: {proc.stderr.strip()}"
            )

        raw = [
            line.replace(_NBSP, " ")
            for line in proc.stdout.splitlines()
            if line.strip()
        ]
        if not raw:
            raise TreeProviderError(f"{self.executable} produced no output")

        limit = config.max_tree_items
        entries = raw[1:]
        return TreeResult(
            lines=[root_label(config)] + entries[:limit],
            items=min(len(entries), limit),
            truncated=len(entries) > limit,
            limit=limit,
            provider=self.name,
        )
