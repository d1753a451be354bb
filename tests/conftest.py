"""Shared fixtures: small on-disk project trees."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest


def write_tree(root: Path, files: dict[str, str | bytes]) -> Path:
    """Create *files* (relative path → content) under *root*."""
    root.mkdir(parents=True, exist_ok=True)
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[[dict[str, str | bytes]], Path]:
    """Factory writing a project under ``tmp_path / "proj"``."""

    def _make(files: dict[str, str | bytes]) -> Path:
        return write_tree(tmp_path / "proj", files)

    return _make


@pytest.fixture
def ts_project(make_project) -> Path:
    """src/index.ts (3 lines), src/utils.ts (empty), plus default-excluded noise."""
    return make_project(
        {
            "src/index.ts": "import { a } from './utils';\nconst b = a;\nexport default b;\n",
            "src/utils.ts": "",
            "package-lock.json": '{"lockfileVersion": 3}\n',
            "node_modules/left-pad/index.js": "module.exports = 1;\n",
        }
    )
