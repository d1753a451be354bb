"""Tests for ScanConfig and the YAML config-file contract."""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from project_digest.contracts.load import (
    ConfigError,
    find_config_file,
    load_config_file,
    load_schema,
    validate_instance,
)
from project_digest.core.config import (
    DEFAULT_EXCLUDE_DIRS,
    DEFAULT_MAX_FILE_BYTES,
    DEFAULT_MAX_TREE_ITEMS,
    ScanConfig,
)
from project_digest.core.discover import iter_files
from project_digest.core.filters import PathFilter


class TestScanConfig:
    """Immutable configuration value."""

    def test_defaults(self) -> None:
        cfg = ScanConfig()
        assert cfg.max_file_bytes == DEFAULT_MAX_FILE_BYTES
        assert cfg.max_tree_items == DEFAULT_MAX_TREE_ITEMS == 2000
        assert "node_modules" in cfg.exclude_dirs
        assert "ts" in cfg.include_exts
        assert "package-lock.json" in cfg.exclude_files
        assert cfg.show_stats is False
        assert cfg.include_contents is True

    def test_frozen(self) -> None:
        cfg = ScanConfig()
        with pytest.raises(FrozenInstanceError):
            cfg.show_stats = True  # type: ignore[misc]

    def test_extensions_normalised(self) -> None:
        cfg = ScanConfig(include_exts=[".py", "ts ", "py"])
        assert cfg.include_exts == ("py", "ts")

    def test_dirs_stripped_and_ordered(self) -> None:
        cfg = ScanConfig(exclude_dirs=["b/", "a", "b"])
        assert cfg.exclude_dirs == ("b", "a")

    def test_dir_spellings_normalised(self) -> None:
        cfg = ScanConfig(exclude_dirs=["./build", "out\\", " docs//site/ ", ".", ""])
        assert cfg.exclude_dirs == ("build", "out", "docs/site")

    def test_dot_slash_dir_prunes(self, make_project) -> None:
        root = make_project({"build/gen.py": "", "out/x.py": "", "a.py": ""})
        cfg = ScanConfig(root=root, exclude_dirs=["./build", "out\\"])
        pf = PathFilter(cfg)
        assert pf.dir_excluded("build")
        assert pf.dir_excluded("out/x.py")
        assert [r.rel_path for r in iter_files(cfg)] == ["a.py"]

    def test_rejects_negative_size(self) -> None:
        with pytest.raises(ValueError, match="max_file_bytes"):
            ScanConfig(max_file_bytes=-1)

    def test_rejects_zero_tree_items(self) -> None:
        with pytest.raises(ValueError, match="max_tree_items"):
            ScanConfig(max_tree_items=0)

    @pytest.mark.parametrize(
        "flags, expected",
        [
            ({}, True),
            ({"tree_only": True}, False),
            ({"no_content": True}, False),
            ({"tree_only": True, "no_content": True}, False),
        ],
    )
    def test_include_contents(self, flags: dict, expected: bool) -> None:
        assert ScanConfig(**flags).include_contents is expected

    def test_with_additions_extends(self) -> None:
        cfg = ScanConfig().with_additions(exts=[".tf"], dirs=["fixtures"])
        assert cfg.include_exts[-1] == "tf"
        assert cfg.exclude_dirs[: len(DEFAULT_EXCLUDE_DIRS)] == DEFAULT_EXCLUDE_DIRS
        assert cfg.exclude_dirs[-1] == "fixtures"

    def test_merged_replaces_and_adds(self) -> None:
        cfg = ScanConfig().merged(
            {
                "include_exts": ["py"],
                "add_exts": ["txt"],
                "max_file_size": 10,
                "show_stats": True,
            }
        )
        assert cfg.include_exts == ("py", "txt")
        assert cfg.max_file_bytes == 10
        assert cfg.show_stats is True

    def test_project_name(self, tmp_path: Path) -> None:
        root = tmp_path / "my-app"
        root.mkdir()
        assert ScanConfig(root=root).project_name == "my-app"


class TestConfigFile:
    """YAML loading validated against digest_config.schema.json."""

    def test_schema_is_bundled(self) -> None:
        schema = load_schema("digest_config.schema.json")
        assert schema["additionalProperties"] is False

    def test_valid_file(self, tmp_path: Path) -> None:
        path = tmp_path / ".project-digest.yaml"
        path.write_text(
            "show_stats: true\nadd_exts: [txt]\nmax_file_size: 2048\n",
            encoding="utf-8",
        )
        data = load_config_file(path)
        assert data == {"show_stats": True, "add_exts": ["txt"], "max_file_size": 2048}

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config_file(path) == {}

    def test_unknown_key_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("colour: blue\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="colour"):
            load_config_file(path)

    def test_wrong_type_names_location(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("exclude_dirs: [1, 2]\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="exclude_dirs/0"):
            load_config_file(path)

    def test_negative_size_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("max_file_size: -5\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config_file(path)

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text("show_stats: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="invalid YAML"):
            load_config_file(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="cannot read"):
            load_config_file(tmp_path / "nope.yaml")

    def test_validate_instance_direct(self) -> None:
        validate_instance({"tree_only": False, "native_tree": True})

    def test_find_config_file(self, tmp_path: Path) -> None:
        assert find_config_file(tmp_path) is None
        (tmp_path / ".project-digest.yml").write_text("{}\n", encoding="utf-8")
        assert find_config_file(tmp_path) == tmp_path / ".project-digest.yml"
