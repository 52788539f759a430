"""File discovery — find templates, sources and routing files under the app root."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

_logger = logging.getLogger(__name__)

# Directory names never descended into (dependency and build-output trees).
DEFAULT_IGNORE_DIRS = frozenset(
    {
        ".git",
        ".angular",
        ".cache",
        "node_modules",
        "dist",
        "build",
        "coverage",
    }
)

_DEFAULT_IGNORE_FILES = frozenset({".DS_Store"})

ROUTING_FILE_SUFFIXES = ("-routing.module.ts", ".routing.module.ts")


@dataclass(frozen=True)
class DiscoverConfig:
    """Configuration for file discovery.

    ``include_suffixes`` and ``exclude_suffixes`` match the end of the file
    name, so compound suffixes such as ``.spec.ts`` work.
    """

    root: Path = field(default_factory=lambda: Path("."))
    include_suffixes: tuple[str, ...] = (".ts",)
    exclude_suffixes: tuple[str, ...] = ()
    ignore_dirs: frozenset[str] = DEFAULT_IGNORE_DIRS
    ignore_files: frozenset[str] = _DEFAULT_IGNORE_FILES
    follow_symlinks: bool = False


def iter_source_files(cfg: DiscoverConfig) -> Iterator[Path]:
    """Yield matching files under *cfg.root*, depth-first in sorted order."""
    root = cfg.root
    if not root.is_dir():
        _logger.debug("Discovery root %s does not exist", root)
        return
    yield from _walk(root, cfg)


def _walk(directory: Path, cfg: DiscoverConfig) -> Iterator[Path]:
    for p in sorted(directory.iterdir(), key=lambda e: e.name):
        if p.is_symlink() and not cfg.follow_symlinks:
            continue
        if p.is_dir():
            if p.name in cfg.ignore_dirs:
                continue
            yield from _walk(p, cfg)
            continue
        if not p.is_file() or p.name in cfg.ignore_files:
            continue
        if not p.name.endswith(cfg.include_suffixes):
            continue
        if cfg.exclude_suffixes and p.name.endswith(cfg.exclude_suffixes):
            continue
        yield p


def discover_routing_files(
    root: Path,
    *,
    ignore_dirs: frozenset[str] = DEFAULT_IGNORE_DIRS,
) -> list[Path]:
    """Every routing-configuration file under *root* (by naming convention)."""
    cfg = DiscoverConfig(
        root=root,
        include_suffixes=ROUTING_FILE_SUFFIXES,
        ignore_dirs=ignore_dirs,
    )
    return list(iter_source_files(cfg))
