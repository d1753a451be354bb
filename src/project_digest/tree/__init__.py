"""Tree rendering — pluggable providers selected by availability.

Providers:
    - NativeTreeProvider: wraps the external ``tree`` utility (optional)
    - BuiltinTreeProvider: pure-Python fallback, always available
"""

from __future__ import annotations

import logging
from typing import Sequence

from project_digest.core.config import ScanConfig
from project_digest.core.filters import PathFilter
from project_digest.tree.base import TreeProvider, TreeProviderError, TreeResult
from project_digest.tree.builtin import BuiltinTreeProvider
from project_digest.tree.native import NativeTreeProvider

_logger = logging.getLogger(__name__)

__all__ = [
    "BuiltinTreeProvider",
    "NativeTreeProvider",
    "TreeProvider",
    "TreeProviderError",
    "TreeResult",
    "default_providers",
    "render_tree",
]


def default_providers(config: ScanConfig) -> list[TreeProvider]:
    if config.native_tree:
        return [NativeTreeProvider(), BuiltinTreeProvider()]
    return [BuiltinTreeProvider()]


def render_tree(
    config: ScanConfig,
    path_filter: PathFilter | None = None,
    providers: Sequence[TreeProvider] | None = None,
) -> TreeResult:
    """Render with the first available provider that succeeds.

    The builtin provider is the last resort, so a tree is always produced.
    """
    pf = path_filter or PathFilter(config)
    for provider in providers if providers is not None else default_providers(config):
        if not provider.available():
            _logger.debug("tree provider '%s' unavailable", provider.name)
            continue
        try:
            return provider.render(config, pf)
        except TreeProviderError as exc:
            _logger.info("tree provider '%s' failed (%s) — falling back", provider.name, exc)
    return BuiltinTreeProvider().render(config, pf)
