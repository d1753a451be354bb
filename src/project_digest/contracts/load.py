"""Load and validate configuration files against the bundled schema.

Usage::

    from project_digest.contracts.load import load_config_file

    overrides = load_config_file(Path(".project-digest.yaml"))
    config = ScanConfig(root=root).merged(overrides)
"""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any

import jsonschema
import yaml

SCHEMA_DIR = "data/schemas"

CONFIG_SCHEMA = "digest_config.schema.json"

# Looked up in the scan root when no --config is given.
CONFIG_FILENAMES = (".project-digest.yaml", ".project-digest.yml")


class ConfigError(ValueError):
    """A configuration file could not be read, parsed or validated."""


def _schema_path(name: str) -> Path:
    """Resolve a bundled schema.

    Priority:
    1. ``src/project_digest/data/schemas/`` (relative to this file)
    2. package data via importlib.resources (wheel / zip installs)
    """
    canonical = Path(__file__).resolve().parents[1] / SCHEMA_DIR / name
    if canonical.exists():
        return canonical

    with resources.as_file(resources.files("project_digest") / SCHEMA_DIR / name) as p:
        return p


def load_schema(name: str) -> dict[str, Any]:
    """Load a bundled JSON schema by filename."""
    path = _schema_path(name)
    return json.loads(path.read_text(encoding="utf-8"))


def validate_instance(instance: Any, schema_name: str = CONFIG_SCHEMA) -> None:
    """Validate *instance* against the named schema.

    Raises ``jsonschema.ValidationError`` on failure.
    """
    schema = load_schema(schema_name)
    jsonschema.validate(instance=instance, schema=schema)


def load_config_file(path: Path) -> dict[str, Any]:
    """Read a YAML config file and return its validated mapping.

    An empty file yields ``{}``. Every failure surfaces as :class:`ConfigError`.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as exc:
        raise ConfigError(f"{path}: cannot read config file: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"{path}: invalid YAML: {exc}") from exc

    try:
        validate_instance(data)
    except jsonschema.ValidationError as exc:
        where = "/".join(str(p) for p in exc.absolute_path) or "<root>"
        raise ConfigError(f"{path}: {where}: {exc.message}") from exc
    return data


def find_config_file(root: Path) -> Path | None:
    """Return the first conventional config file present in *root*."""
    for name in CONFIG_FILENAMES:
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None
