"""
route_audit.api
===============

Programmatic entrypoints for route extraction.

Goals:
  - No argparse / console dependencies
  - All per-run state (parse cache, traversal stack) scoped to one call
  - Deterministic mode support (ci_mode=True fixes the timestamp)

Non-goals:
  - Writing artifacts — see ``route_audit.reports.emitter``
  - Presentation — see ``route_audit.reports.emitter.RouteReport``

Usage::

    from route_audit.api import extract_routes

    result = extract_routes("path/to/angular-app", ci_mode=True)
    print(result.routes, result.hash_prefix)
"""

from __future__ import annotations

import logging
import os
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from route_audit.analyzers import (
    NavigationCallScanner,
    RouteTreeBuilder,
    Scanner,
    TemplateScanner,
)
from route_audit.analyzers.module_parser import ModuleParseCache, uses_hash_routing
from route_audit.analyzers.module_resolver import ModuleResolver
from route_audit.contracts.load import ROUTES_COMPLETE_SCHEMA
from route_audit.contracts.load import validate_instance as _validate_instance
from route_audit.core.config import RouteAuditConfig
from route_audit.core.discover import discover_routing_files
from route_audit.model import RoutingMode
from route_audit.model.route import ExtractionResult, ExtractionStats
from route_audit.reconcile import reconcile

_logger = logging.getLogger(__name__)

# Fixed timestamp for deterministic mode (matches CLI contract).
_DETERMINISTIC_TIMESTAMP = "2000-01-01T00:00:00+00:00"


class RootRoutingFileMissingError(FileNotFoundError):
    """Raised when the root routing-configuration file does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"root routing module not found: {path.as_posix()}")


def _to_path(p: str | Path) -> Path:
    return p if isinstance(p, Path) else Path(p)


def _now_iso_utc() -> str:
    return datetime.now(timezone.utc).isoformat()


def _display(path: Path, base: Path) -> str:
    try:
        return Path(os.path.relpath(path, base)).as_posix()
    except ValueError:
        return path.as_posix()


def _resolve_config(
    root: str | Path,
    config: Optional[RouteAuditConfig],
    ci_mode: Optional[bool],
) -> RouteAuditConfig:
    cfg = config if config is not None else RouteAuditConfig.from_root(_to_path(root))
    if ci_mode is not None:
        cfg = replace(cfg, ci_mode=ci_mode)
    return cfg


# ── extract_routes ──────────────────────────────────────────────────


def extract_routes(
    root: str | Path = ".",
    *,
    config: Optional[RouteAuditConfig] = None,
    ci_mode: Optional[bool] = None,
) -> ExtractionResult:
    """Run one full extraction and return the reconciled result.

    Parameters
    ----------
    root:
        Project root.  Ignored when *config* is given.
    config:
        Explicit configuration.  Default: ``RouteAuditConfig.from_root(root)``.
    ci_mode:
        If True, ``generated_at`` is fixed so artifacts are byte-identical.

    Raises
    ------
    RootRoutingFileMissingError
        If the root routing file does not exist.
    RoutingCycleError
        If a routing module lazily loads one of its ancestors.
    RoutingModuleParseError
        If a routing file's brackets do not balance.
    """
    cfg = _resolve_config(root, config, ci_mode)
    root_file = cfg.root_routing_path
    if not root_file.is_file():
        raise RootRoutingFileMissingError(root_file)

    hash_prefix = RoutingMode.HASH.prefix if uses_hash_routing(
        root_file.read_text(encoding="utf-8")
    ) else RoutingMode.HTML5.prefix
    _logger.info("Routing mode: %s", RoutingMode.from_prefix(hash_prefix).value)

    # 1. Route hierarchy from routing modules
    builder = RouteTreeBuilder(
        ModuleResolver(cfg.project_root, cfg.app_dir),
        ModuleParseCache(),
        display_root=cfg.project_root,
    )
    tree = builder.build(root_file)
    _logger.info(
        "Routing modules: %d routes from %d modules",
        len(tree.routes),
        len(tree.modules),
    )

    # 2. Routing-module inventory
    routing_files = find_routing_files(cfg.project_root, config=cfg)

    # 3. + 4. Template links and navigation calls
    scanners: tuple[Scanner, ...] = (
        TemplateScanner(cfg.app_dir, ignore_dirs=cfg.ignore_dirs),
        NavigationCallScanner(cfg.app_dir, ignore_dirs=cfg.ignore_dirs),
    )
    html, ts = (scanner.scan() for scanner in scanners)

    # 5. Combine
    rec = reconcile(
        tree.routes,
        html.routes,
        ts.routes,
        excluded_routes=cfg.excluded_routes,
    )
    stats = ExtractionStats(
        routing_modules=rec.routing_modules,
        html_files=rec.html_files,
        ts_files=rec.ts_files,
        total=rec.total,
        unique=rec.unique,
        routing_files=len(routing_files),
    )
    _logger.info("Routes: %d unique, %d valid", rec.unique, rec.total)

    return ExtractionResult(
        routes=rec.routes,
        hash_prefix=hash_prefix,
        stats=stats,
        generated_at=_DETERMINISTIC_TIMESTAMP if cfg.ci_mode else _now_iso_utc(),
        trace=tree.trace,
        routing_files=routing_files,
    )


# ── find_routing_files ──────────────────────────────────────────────


def find_routing_files(
    root: str | Path = ".",
    *,
    config: Optional[RouteAuditConfig] = None,
) -> list[str]:
    """Every routing-configuration file under the app root, relative to the project."""
    cfg = _resolve_config(root, config, None)
    files = discover_routing_files(cfg.app_dir, ignore_dirs=cfg.ignore_dirs)
    return [_display(p, cfg.project_root) for p in files]


# ── validate_instance ───────────────────────────────────────────────


def validate_instance(
    instance: dict[str, Any],
    schema_name: str = ROUTES_COMPLETE_SCHEMA,
) -> None:
    """Validate a ``routes-complete.json`` dict against the bundled schema.

    Raises
    ------
    jsonschema.ValidationError
        If the instance does not conform.
    """
    _validate_instance(instance, schema_name)
