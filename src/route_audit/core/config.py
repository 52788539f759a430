"""Extraction configuration dataclass.

Can be loaded from ``.route-audit.yaml`` or constructed programmatically::

    # .route-audit.yaml
    app_root: projects/shop/src/app
    root_routing_file: projects/shop/src/app/app-routing.module.ts
    out_dir: artifacts/routes
    excluded_routes: [Login, Renewpassword, Forgotpassword]
    example_lookups: [Profile, Reports]
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import yaml

from route_audit.core.discover import DEFAULT_IGNORE_DIRS
from route_audit.reconcile import DEFAULT_EXCLUDED_ROUTES

CONFIG_FILENAMES = (".route-audit.yaml", ".route-audit.yml", "route-audit.yaml")

DEFAULT_EXAMPLE_LOOKUPS = ("AKIMaintenance", "Tests", "Analyser", "Profile")

_PATH_KEYS = ("app_root", "root_routing_file", "out_dir")
_LIST_KEYS = ("ignore_dirs", "excluded_routes", "example_lookups")


class ConfigError(ValueError):
    """Raised for unknown keys or wrongly-typed values in a config file."""


@dataclass(frozen=True)
class RouteAuditConfig:
    """Immutable extraction configuration.

    Relative paths are resolved against ``project_root``.
    """

    project_root: Path = field(default_factory=lambda: Path("."))
    app_root: Path = Path("src/app")
    root_routing_file: Path = Path("src/app/app-routing.module.ts")
    out_dir: Path = Path(".")
    ignore_dirs: frozenset[str] = DEFAULT_IGNORE_DIRS
    excluded_routes: frozenset[str] = DEFAULT_EXCLUDED_ROUTES
    example_lookups: tuple[str, ...] = DEFAULT_EXAMPLE_LOOKUPS
    sample_size: int = 20
    ci_mode: bool = False

    # ── resolved paths ─────────────────────────────────────────────

    def _under_root(self, p: Path) -> Path:
        return p if p.is_absolute() else self.project_root / p

    @property
    def app_dir(self) -> Path:
        return self._under_root(self.app_root)

    @property
    def root_routing_path(self) -> Path:
        return self._under_root(self.root_routing_file)

    @property
    def out_path(self) -> Path:
        return self._under_root(self.out_dir)

    # ── loading ────────────────────────────────────────────────────

    @classmethod
    def from_mapping(cls, data: dict[str, Any], *, project_root: Path) -> "RouteAuditConfig":
        """Build a config from parsed YAML, validating keys and types."""
        known = {f.name for f in fields(cls)} - {"project_root"}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"unknown config key(s): {', '.join(unknown)}")

        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            if key in _PATH_KEYS:
                if not isinstance(value, str):
                    raise ConfigError(f"{key} must be a string path, got {value!r}")
                kwargs[key] = Path(value)
            elif key in _LIST_KEYS:
                if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                    raise ConfigError(f"{key} must be a list of strings, got {value!r}")
                kwargs[key] = tuple(value) if key == "example_lookups" else frozenset(value)
            elif key == "sample_size":
                if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                    raise ConfigError(f"sample_size must be a non-negative integer, got {value!r}")
                kwargs[key] = value
            elif key == "ci_mode":
                if not isinstance(value, bool):
                    raise ConfigError(f"ci_mode must be a boolean, got {value!r}")
                kwargs[key] = value
        return cls(project_root=Path(project_root), **kwargs)

    @classmethod
    def from_yaml(cls, path: Path, *, project_root: Path | None = None) -> "RouteAuditConfig":
        """Load configuration from a YAML file."""
        path = Path(path)
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ConfigError(f"{path}: top level must be a mapping")
        return cls.from_mapping(data, project_root=project_root or path.parent)

    @classmethod
    def from_root(cls, root: Path) -> "RouteAuditConfig":
        """Use the first config file found at *root*, else defaults."""
        root = Path(root)
        for name in CONFIG_FILENAMES:
            candidate = root / name
            if candidate.is_file():
                return cls.from_yaml(candidate, project_root=root)
        return cls(project_root=root)

    def with_overrides(self, **overrides: Any) -> "RouteAuditConfig":
        """Copy with every non-``None`` override applied (CLI flags)."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})
