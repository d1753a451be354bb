"""Scan configuration dataclass and built-in defaults."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path, PurePosixPath
from typing import Any, Iterable, Mapping

DEFAULT_OUTPUT = "project_analysis.md"

# Files above this size are truncated in the report and skipped by stats.
DEFAULT_MAX_FILE_BYTES = 100_000

DEFAULT_MAX_TREE_ITEMS = 2000

# Directory names excluded relative to the scan root (order is preserved).
DEFAULT_EXCLUDE_DIRS: tuple[str, ...] = (
    "node_modules",
    ".git",
    ".svn",
    ".hg",
    ".github",
    "__pycache__",
    ".venv",
    "venv",
    "env",
    ".tox",
    ".mypy_cache",
    ".pytest_cache",
    ".ruff_cache",
    ".idea",
    ".vscode",
    "dist",
    "build",
    "coverage",
    ".next",
    ".nuxt",
    ".cache",
    "target",
    "vendor",
)

DEFAULT_INCLUDE_EXTS: tuple[str, ...] = (
    # Python
    "py", "pyi",
    # JavaScript/TypeScript
    "js", "jsx", "ts", "tsx", "mjs", "cjs",
    # Vue / Svelte
    "vue", "svelte",
    # Java/JVM
    "java", "kt", "scala",
    # C#/.NET
    "cs",
    # Go / Rust
    "go", "rs",
    # C/C++
    "c", "cpp", "cc", "h", "hpp",
    # Ruby / PHP / Swift
    "rb", "php", "swift",
    # Web
    "html", "css", "scss", "sass", "less",
    # Data / config
    "json", "yaml", "yml", "toml", "ini", "cfg", "xml", "sql", "graphql", "proto",
    # Shell
    "sh", "bash", "zsh", "ps1",
    # Docs
    "md", "rst",
    # Extension-less file names
    "Dockerfile",
)

DEFAULT_EXCLUDE_FILES: tuple[str, ...] = (
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    "*.lock",
    "*.min.js",
    "*.min.css",
    "*.map",
    "*.pyc",
    "*.log",
    "*.DS_Store",
)


def normalize_ext(value: str) -> str:
    """Strip whitespace and a leading dot from an include-list entry."""
    return value.strip().lstrip(".")


def normalize_dir(value: str) -> str:
    """Reduce an exclude-dir entry to a clean relative POSIX path.

    ``./build``, ``build/`` and ``build\\`` all become ``build``; ``.`` becomes
    the empty string and is dropped by the caller.
    """
    text = value.strip().replace("\\", "/")
    if not text:
        return ""
    posix = PurePosixPath(text).as_posix().strip("/")
    return "" if posix == "." else posix


def _dedupe(items: Iterable[str]) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for item in items:
        if item and item not in seen:
            seen[item] = None
    return tuple(seen)


@dataclass(frozen=True)
class ScanConfig:
    """Immutable scan configuration.

    One value is built per run (defaults < config file < CLI flags) and
    passed explicitly to every component.
    """

    root: Path = field(default_factory=lambda: Path("."))
    output: Path = field(default_factory=lambda: Path(DEFAULT_OUTPUT))
    max_file_bytes: int = DEFAULT_MAX_FILE_BYTES
    exclude_dirs: tuple[str, ...] = DEFAULT_EXCLUDE_DIRS
    include_exts: tuple[str, ...] = DEFAULT_INCLUDE_EXTS
    exclude_files: tuple[str, ...] = DEFAULT_EXCLUDE_FILES
    tree_only: bool = False
    no_content: bool = False
    show_stats: bool = False
    max_tree_items: int = DEFAULT_MAX_TREE_ITEMS
    native_tree: bool = True
    follow_symlinks: bool = False
    deterministic: bool = False

    def __post_init__(self) -> None:
        # Normalise list-ish inputs so callers may pass lists or sets.
        object.__setattr__(self, "root", Path(self.root))
        object.__setattr__(self, "output", Path(self.output))
        object.__setattr__(
            self,
            "exclude_dirs",
            _dedupe(normalize_dir(d) for d in self.exclude_dirs),
        )
        object.__setattr__(
            self, "include_exts", _dedupe(normalize_ext(e) for e in self.include_exts)
        )
        object.__setattr__(self, "exclude_files", _dedupe(self.exclude_files))
        if self.max_file_bytes < 0:
            raise ValueError(f"max_file_bytes must be >= 0, got {self.max_file_bytes}")
        if self.max_tree_items < 1:
            raise ValueError(f"max_tree_items must be >= 1, got {self.max_tree_items}")

    @property
    def include_contents(self) -> bool:
        """Whether the FILE CONTENTS section is part of the report."""
        return not (self.tree_only or self.no_content)

    @property
    def project_name(self) -> str:
        return self.root.resolve().name

    def with_additions(
        self,
        *,
        exts: Iterable[str] = (),
        dirs: Iterable[str] = (),
        exclude_files: Iterable[str] = (),
    ) -> "ScanConfig":
        """Return a copy with extra include extensions / excluded dirs / patterns."""
        return replace(
            self,
            include_exts=self.include_exts + tuple(exts),
            exclude_dirs=self.exclude_dirs + tuple(dirs),
            exclude_files=self.exclude_files + tuple(exclude_files),
        )

    def merged(self, overrides: Mapping[str, Any]) -> "ScanConfig":
        """Apply a mapping of config-file style keys on top of this config.

        Keys follow ``digest_config.schema.json``. ``add_*`` keys extend the
        corresponding list instead of replacing it.
        """
        fields: dict[str, Any] = {}
        if "output" in overrides:
            fields["output"] = Path(overrides["output"])
        if "max_file_size" in overrides:
            fields["max_file_bytes"] = int(overrides["max_file_size"])
        if "exclude_dirs" in overrides:
            fields["exclude_dirs"] = tuple(overrides["exclude_dirs"])
        if "include_exts" in overrides:
            fields["include_exts"] = tuple(overrides["include_exts"])
        if "exclude_files" in overrides:
            fields["exclude_files"] = tuple(overrides["exclude_files"])
        for key in ("tree_only", "no_content", "show_stats", "native_tree"):
            if key in overrides:
                fields[key] = bool(overrides[key])
        if "max_tree_items" in overrides:
            fields["max_tree_items"] = int(overrides["max_tree_items"])

        cfg = replace(self, **fields)
        return cfg.with_additions(
            exts=overrides.get("add_exts", ()),
            dirs=overrides.get("add_dirs", ()),
            exclude_files=overrides.get("add_exclude_files", ()),
        )
