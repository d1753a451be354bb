"""CLI entry-point for project_digest.

Usage:
    python -m project_digest [PATH] [-o OUTPUT]
    python -m project_digest PATH --stats --no-content
    python -m project_digest PATH --tree-only --max-tree-items 500
    python -m project_digest PATH --add-ext vue svelte --add-dir fixtures
    python -m project_digest PATH --config digest.yaml --deterministic
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from project_digest import __version__
from project_digest.api import ProjectRootError, check_root, write_report
from project_digest.contracts.load import ConfigError, find_config_file, load_config_file
from project_digest.core.config import ScanConfig
from project_digest.utils.determinism import env_requires_deterministic
from project_digest.utils.exit_codes import ExitCode

_logger = logging.getLogger("project_digest")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="project-digest",
        description="Write a single text report of a project's tree and sources.",
    )
    p.add_argument(
        "path",
        nargs="?",
        type=Path,
        default=Path("."),
        help="Project root directory (default: current directory).",
    )
    p.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Report file to write (default: project_analysis.md).",
    )
    p.add_argument(
        "--max-size",
        dest="max_file_size",
        type=int,
        default=None,
        metavar="BYTES",
        help="Files larger than this show only their first 50 lines.",
    )
    p.add_argument(
        "--exclude-dir",
        dest="exclude_dirs",
        nargs="+",
        action="extend",
        default=None,
        metavar="DIR",
        help="Replace the excluded directory list.",
    )
    p.add_argument(
        "--include-ext",
        dest="include_exts",
        nargs="+",
        action="extend",
        default=None,
        metavar="EXT",
        help="Replace the included extension list.",
    )
    p.add_argument(
        "--exclude-file",
        dest="exclude_files",
        nargs="+",
        action="extend",
        default=None,
        metavar="PATTERN",
        help="Replace the excluded file patterns (* and ? wildcards).",
    )
    p.add_argument(
        "--add-ext",
        dest="add_exts",
        nargs="+",
        action="extend",
        default=None,
        metavar="EXT",
        help="Add extensions to the included list.",
    )
    p.add_argument(
        "--add-dir",
        dest="add_dirs",
        nargs="+",
        action="extend",
        default=None,
        metavar="DIR",
        help="Add directories to the excluded list.",
    )
    p.add_argument(
        "--tree-only",
        dest="tree_only",
        action="store_true",
        default=None,
        help="Only write the project structure (no file contents).",
    )
    p.add_argument(
        "--no-content",
        dest="no_content",
        action="store_true",
        default=None,
        help="Skip the file contents section.",
    )
    p.add_argument(
        "--stats",
        dest="show_stats",
        action="store_true",
        default=None,
        help="Include per-extension file and line statistics.",
    )
    p.add_argument(
        "--max-tree-items",
        dest="max_tree_items",
        type=int,
        default=None,
        metavar="N",
        help="Maximum number of tree entries (default: 2000).",
    )
    p.add_argument(
        "--no-native-tree",
        dest="native_tree",
        action="store_false",
        default=None,
        help="Never use the external 'tree' utility.",
    )
    p.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML config file (default: <root>/.project-digest.yaml if present).",
    )
    p.add_argument(
        "--deterministic",
        action="store_true",
        default=False,
        help="Use a fixed scan timestamp so reruns are byte-identical.",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Verbose logging.")
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return p


_OVERRIDE_KEYS = (
    "output",
    "max_file_size",
    "exclude_dirs",
    "include_exts",
    "exclude_files",
    "add_exts",
    "add_dirs",
    "tree_only",
    "no_content",
    "show_stats",
    "max_tree_items",
    "native_tree",
)


def _cli_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Flags the user actually passed, keyed like the config file."""
    return {
        key: getattr(args, key)
        for key in _OVERRIDE_KEYS
        if getattr(args, key) is not None
    }


def build_config(args: argparse.Namespace) -> ScanConfig:
    """defaults < config file < CLI flags.

    Raises ``ProjectRootError`` for an unusable root and ``ConfigError`` for a
    bad config file.
    """
    root = check_root(args.path)
    config = ScanConfig(
        root=root,
        deterministic=args.deterministic or env_requires_deterministic(),
    )

    config_path = args.config or find_config_file(root)
    if config_path is not None:
        _logger.debug("loading config from %s", config_path)
        file_overrides = load_config_file(config_path)
        # Relative outputs in a config file are relative to the project root.
        if "output" in file_overrides and not Path(file_overrides["output"]).is_absolute():
            file_overrides = {**file_overrides, "output": root / file_overrides["output"]}
        config = config.merged(file_overrides)

    return config.merged(_cli_overrides(args))


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        config = build_config(args)
    except (ProjectRootError, ConfigError, ValueError) as exc:
        # ValueError: ScanConfig rejects negative sizes / limits
        print(f"error: {exc}", file=sys.stderr)
        return ExitCode.ERROR

    try:
        out = write_report(config)
    except ProjectRootError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return ExitCode.ERROR
    except OSError as exc:
        print(f"error: cannot write report: {exc}", file=sys.stderr)
        return ExitCode.ERROR

    print(f"Report written to {out}", file=sys.stderr)
    return ExitCode.SUCCESS


if __name__ == "__main__":
    raise SystemExit(main())
