"""End-to-end tests for report assembly (build_report / write_report)."""

from __future__ import annotations

import re
from pathlib import Path

import pytest

from project_digest.api import ProjectRootError, build_report, write_report
from project_digest.core.config import ScanConfig
from project_digest.tree import BuiltinTreeProvider

BUILTIN = [BuiltinTreeProvider()]

_SCAN_DATE = re.compile(r"^\*\*Scan date:\*\* .*$", re.MULTILINE)


def _section(report: str, title: str) -> str:
    """Text of the ``# title`` section up to the next top-level heading."""
    start = report.index(f"# {title}\n")
    nxt = report.find("\n# ", start + 1)
    return report[start:] if nxt == -1 else report[start:nxt + 1]


class TestTypescriptScenario:
    """src/index.ts + src/utils.ts with default-excluded lockfile and node_modules."""

    def test_tree(self, ts_project: Path) -> None:
        report = build_report(ScanConfig(root=ts_project), tree_providers=BUILTIN)
        tree = _section(report, "PROJECT STRUCTURE")
        assert tree == (
            "# PROJECT STRUCTURE\n"
            "\n"
            "proj/\n"
            "└── src\n"
            "    ├── index.ts\n"
            "    └── utils.ts\n"
            "\n"
            "---\n"
            "\n"
        )

    def test_contents(self, ts_project: Path) -> None:
        report = build_report(ScanConfig(root=ts_project), tree_providers=BUILTIN)
        contents = _section(report, "FILE CONTENTS")
        assert re.findall(r"^## (.+)$", contents, re.MULTILINE) == [
            "src/index.ts",
            "src/utils.ts",
        ]
        assert contents.count("```typescript\n") == 2
        assert "package-lock.json" not in report
        assert "node_modules" not in report
        assert "left-pad" not in report

    def test_stats(self, ts_project: Path) -> None:
        cfg = ScanConfig(root=ts_project, show_stats=True)
        stats = _section(build_report(cfg, tree_providers=BUILTIN), "PROJECT STATISTICS")
        assert "| ts | 2 | 3 |" in stats
        assert "| **Total** | 2 | 3 |" in stats
        assert "**Total files:** 2" in stats
        assert "**Total lines:** 3" in stats


class TestComposition:
    """Mode flags only change which sections appear."""

    def test_header(self, ts_project: Path) -> None:
        report = build_report(
            ScanConfig(root=ts_project), tree_providers=BUILTIN, timestamp="T0"
        )
        assert report.startswith(
            "# PROJECT ANALYSIS\n"
            "\n"
            "**Project:** proj\n"
            "**Scan date:** T0\n"
            f"**Scanned directory:** {ts_project.resolve()}\n"
            "\n"
            "---\n"
        )

    def test_section_order(self, ts_project: Path) -> None:
        report = build_report(
            ScanConfig(root=ts_project, show_stats=True), tree_providers=BUILTIN
        )
        positions = [
            report.index("# PROJECT ANALYSIS"),
            report.index("# PROJECT STATISTICS"),
            report.index("# PROJECT STRUCTURE"),
            report.index("# FILE CONTENTS"),
        ]
        assert positions == sorted(positions)

    def test_stats_off_by_default(self, ts_project: Path) -> None:
        report = build_report(ScanConfig(root=ts_project), tree_providers=BUILTIN)
        assert "# PROJECT STATISTICS" not in report

    @pytest.mark.parametrize("flag", ["tree_only", "no_content"])
    def test_contents_suppressed_stats_kept(self, ts_project: Path, flag: str) -> None:
        cfg = ScanConfig(root=ts_project, show_stats=True, **{flag: True})
        report = build_report(cfg, tree_providers=BUILTIN)
        assert "# FILE CONTENTS" not in report
        assert "# PROJECT STRUCTURE" in report
        assert "# PROJECT STATISTICS" in report

    def test_no_matching_files(self, make_project) -> None:
        root = make_project({"LICENSE": "MIT\n"})
        report = build_report(ScanConfig(root=root), tree_providers=BUILTIN)
        assert "*No files matched the inclusion rules.*" in report

    def test_oversized_file_in_contents(self, make_project) -> None:
        root = make_project({"big.py": "".join(f"print({i})\n" for i in range(120))})
        cfg = ScanConfig(root=root, max_file_bytes=100)
        contents = _section(build_report(cfg, tree_providers=BUILTIN), "FILE CONTENTS")
        assert "*File too large (" in contents
        assert "print(49)" in contents
        assert "print(50)" not in contents

    def test_unreadable_file_does_not_abort(self, make_project) -> None:
        root = make_project({"a.py": "ok = True\n", "b.py": b"\xff\xfe\x81"})
        report = build_report(ScanConfig(root=root, show_stats=True), tree_providers=BUILTIN)
        assert "ok = True" in report
        assert "## b.py\n\n*File unavailable:" in report
        assert "| py | 2 | 1 |" in report

    def test_tree_truncation_noted(self, make_project) -> None:
        root = make_project({f"f{i:02d}.py": "" for i in range(10)})
        cfg = ScanConfig(root=root, max_tree_items=4)
        report = build_report(cfg, tree_providers=BUILTIN)
        assert "... (tree truncated: limit of 4 items reached)" in report
        # contents are not capped by the tree limit
        assert report.count("\n## f") == 10


class TestIdempotence:
    def test_identical_except_timestamp(self, ts_project: Path) -> None:
        cfg = ScanConfig(root=ts_project, show_stats=True)
        a = build_report(cfg, tree_providers=BUILTIN)
        b = build_report(cfg, tree_providers=BUILTIN)
        assert _SCAN_DATE.sub("", a) == _SCAN_DATE.sub("", b)

    def test_deterministic_mode_is_byte_identical(self, ts_project: Path) -> None:
        cfg = ScanConfig(root=ts_project, deterministic=True)
        a = build_report(cfg, tree_providers=BUILTIN)
        b = build_report(cfg, tree_providers=BUILTIN)
        assert a == b
        assert "**Scan date:** 2000-01-01 00:00:00" in a


class TestWriteReport:
    def test_writes_utf8_and_overwrites(self, make_project, tmp_path: Path) -> None:
        root = make_project({"greet.py": 'print("héllo ✓ 日本")\n'})
        out = tmp_path / "reports" / "digest.md"
        out.parent.mkdir()
        out.write_text("stale", encoding="utf-8")

        written = write_report(ScanConfig(root=root, output=out), tree_providers=BUILTIN)

        assert written == out
        text = out.read_text(encoding="utf-8")
        assert not text.startswith("stale")
        assert 'print("héllo ✓ 日本")' in text

    def test_output_inside_root_not_scanned(self, make_project) -> None:
        root = make_project({"a.py": "x = 1\n"})
        cfg = ScanConfig(root=root, output=root / "digest.md", deterministic=True)
        first = write_report(cfg, tree_providers=BUILTIN).read_text(encoding="utf-8")
        second = write_report(cfg, tree_providers=BUILTIN).read_text(encoding="utf-8")
        assert first == second
        assert "## digest.md" not in second

    def test_missing_root(self, tmp_path: Path) -> None:
        out = tmp_path / "out.md"
        cfg = ScanConfig(root=tmp_path / "missing", output=out)
        with pytest.raises(ProjectRootError, match="does not exist"):
            write_report(cfg)
        assert not out.exists()

    def test_root_is_a_file(self, tmp_path: Path) -> None:
        f = tmp_path / "file.py"
        f.write_text("", encoding="utf-8")
        with pytest.raises(ProjectRootError, match="not a directory"):
            build_report(ScanConfig(root=f))

    def test_project_root_error_is_file_not_found(self) -> None:
        assert issubclass(ProjectRootError, FileNotFoundError)
