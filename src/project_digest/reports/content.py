"""File content emitter — one fenced block per included file."""

from __future__ import annotations

import logging
import re
from itertools import islice
from pathlib import Path
from typing import Iterator, TextIO

from project_digest.model.file_record import FileRecord

_logger = logging.getLogger(__name__)

# Oversized files show only this many leading lines.
PREVIEW_LINES = 50

LANGUAGE_BY_EXTENSION: dict[str, str] = {
    "py": "python",
    "pyi": "python",
    "js": "javascript",
    "jsx": "jsx",
    "mjs": "javascript",
    "cjs": "javascript",
    "ts": "typescript",
    "tsx": "tsx",
    "vue": "vue",
    "svelte": "svelte",
    "java": "java",
    "kt": "kotlin",
    "scala": "scala",
    "cs": "csharp",
    "go": "go",
    "rs": "rust",
    "c": "c",
    "h": "c",
    "cpp": "cpp",
    "cc": "cpp",
    "hpp": "cpp",
    "rb": "ruby",
    "php": "php",
    "swift": "swift",
    "html": "html",
    "css": "css",
    "scss": "scss",
    "sass": "sass",
    "less": "less",
    "json": "json",
    "yaml": "yaml",
    "yml": "yaml",
    "toml": "toml",
    "ini": "ini",
    "cfg": "ini",
    "xml": "xml",
    "sql": "sql",
    "graphql": "graphql",
    "proto": "protobuf",
    "sh": "bash",
    "bash": "bash",
    "zsh": "zsh",
    "ps1": "powershell",
    "md": "markdown",
    "rst": "rst",
}

_BACKTICK_RUN = re.compile(r"^`{3,}", re.MULTILINE)


def language_for(record: FileRecord) -> str:
    """Fence tag for *record*; ``""`` when the extension is unmapped."""
    if record.name == "Dockerfile":
        return "dockerfile"
    return LANGUAGE_BY_EXTENSION.get(record.extension, "")


def _fence_for(text: str) -> str:
    # Longer than any backtick run opening a line inside the content.
    longest = max((len(m.group(0)) for m in _BACKTICK_RUN.finditer(text)), default=0)
    return "`" * max(3, longest + 1)


def _fenced(text: str, lang: str = "") -> str:
    if text and not text.endswith("\n"):
        text += "\n"
    fence = _fence_for(text)
    return f"{fence}{lang}\n{text}{fence}"


def _bounded_lines(fh: TextIO, max_chars: int) -> Iterator[str]:
    """Lines of *fh*, each cut to *max_chars*; the cut remainder is skipped."""
    while True:
        line = fh.readline(max_chars)
        if not line:
            return
        rest = line
        while rest and not rest.endswith("\n"):
            rest = fh.readline(max_chars)
        yield line


def read_head(
    path: Path, limit: int = PREVIEW_LINES, max_line_chars: int | None = None
) -> list[str]:
    """First *limit* lines of *path* without reading the whole file.

    With *max_line_chars*, each line is read at most that far, so a huge
    single-line file is never pulled into memory whole.
    """
    with path.open(encoding="utf-8") as fh:
        source = fh if max_line_chars is None else _bounded_lines(fh, max_line_chars)
        return [line.rstrip("\r\n") for line in islice(source, limit)]


def render_file_body(record: FileRecord, max_file_bytes: int) -> str:
    """Fenced content, truncated preview, or an "unavailable" placeholder."""
    try:
        if record.size > max_file_bytes:
            head = read_head(record.path, max_line_chars=max(max_file_bytes, 1))
            notice = (
                f"*File too large ({record.size} bytes), "
                f"showing first {PREVIEW_LINES} lines only.*"
            )
            return notice + "\n\n" + _fenced("\n".join(head))
        text = record.path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        _logger.warning("could not read %s: %s", record.rel_path, exc)
        return f"*File unavailable: {exc.__class__.__name__}: {exc}*"

    return _fenced(text, language_for(record))


def render_file_block(record: FileRecord, max_file_bytes: int) -> str:
    return f"## {record.rel_path}\n\n{render_file_body(record, max_file_bytes)}\n\n---\n"
