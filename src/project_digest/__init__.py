"""project_digest — a single-file text digest of a project's tree and sources."""

__all__ = [
    "__version__",
    "ScanConfig",
    "ProjectRootError",
    "build_report",
    "write_report",
]
__version__ = "0.1.0"

# Programmatic entrypoints
from project_digest.core.config import ScanConfig  # noqa: E402
from project_digest.api import (  # noqa: E402
    ProjectRootError,
    build_report,
    write_report,
)
