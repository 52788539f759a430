"""Module resolver — maps a ``loadChildren`` reference to a routing file on disk.

Resolution is heuristic: the reference is turned into a base path, then a
fixed, ordered list of naming conventions is probed.  The first existing
file wins.  ``None`` means "no child routing module" and is a normal leaf
outcome, not an error.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

_logger = logging.getLogger(__name__)

# Everything up to and including the application-source boundary, e.g.
# ``app/``, ``@app/``, ``projects/shop/src/app/``.
_APP_BOUNDARY_RE = re.compile(r"^(?:.*?/)?@?app/")

# Reference names that already denote a routes file rather than a module.
_ROUTES_FILE_RE = re.compile(r"(?:[.-]routing\.module|\.routes)$")

_PROJECT_PREFIX = "src/"


def _base_path(reference: str, from_file: Path, project_root: Path, app_root: Path) -> Path:
    if reference.startswith("."):
        base = from_file.parent / reference
    elif reference.startswith(_PROJECT_PREFIX):
        base = project_root / reference
    else:
        base = app_root / _APP_BOUNDARY_RE.sub("", reference)
    return Path(os.path.normpath(base))


def candidate_paths(base: Path) -> list[Path]:
    """Probe order for routing files derived from *base*."""
    raw = str(base)
    name = base.name
    candidates = [
        Path(raw + "-routing.module.ts"),
        Path(raw + ".routing.module.ts"),
        base / "routing.module.ts",
    ]
    if ".module" in name:
        candidates.append(base.with_name(name.replace(".module", "-routing.module", 1) + ".ts"))
    if name.endswith(".ts"):
        candidates.append(base.with_name(name[:-3] + "-routing.module.ts"))
    if _ROUTES_FILE_RE.search(name):
        candidates.append(Path(raw + ".ts"))
    return candidates


def find_routing_module(
    reference: str,
    from_file: Path,
    *,
    project_root: Path,
    app_root: Path,
) -> Path | None:
    """Resolve *reference* (declared in *from_file*) to a routing file, or ``None``."""
    reference = reference.split("#", 1)[0].strip()
    if not reference:
        return None

    base = _base_path(reference, Path(from_file), Path(project_root), Path(app_root))
    for candidate in candidate_paths(base):
        if candidate.is_file():
            _logger.debug("Resolved %r -> %s", reference, candidate)
            return candidate

    _logger.debug("No routing module for %r (from %s)", reference, from_file)
    return None


class ModuleResolver:
    """Binds the project layout so the tree builder can resolve references."""

    def __init__(self, project_root: Path, app_root: Path) -> None:
        self.project_root = Path(project_root)
        self.app_root = Path(app_root)

    def resolve(self, reference: str, from_file: Path) -> Path | None:
        return find_routing_module(
            reference,
            from_file,
            project_root=self.project_root,
            app_root=self.app_root,
        )
