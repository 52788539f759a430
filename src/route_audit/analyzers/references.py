"""Shared machinery for the template and navigation-call scanners."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from route_audit.core.discover import DEFAULT_IGNORE_DIRS, DiscoverConfig, iter_source_files
from route_audit.model import RouteSource
from route_audit.model.route import RouteReference

_logger = logging.getLogger(__name__)

_EDGE_JUNK = "'\"` \t\r\n"
_HASH_MARKER_RE = re.compile(r"^#/?")


def normalize_route_reference(raw: str) -> str:
    """Strip quotes/whitespace, leading slashes and the hash-route marker.

    ``"'/#/reports/daily'"`` → ``"reports/daily"``.  A trailing fragment
    (``reports#top``) is dropped.
    """
    route = raw.strip(_EDGE_JUNK)
    route = route.lstrip("/")
    route = _HASH_MARKER_RE.sub("", route)
    route = route.lstrip("/")
    if "#" in route:
        route = route.split("#", 1)[0]
    return route.strip()


@dataclass(slots=True)
class ScanResult:
    """Routes found by one scanner, deduplicated in first-seen order."""

    source: RouteSource
    references: list[RouteReference] = field(default_factory=list)
    files_scanned: int = 0

    @property
    def routes(self) -> list[str]:
        return list(dict.fromkeys(ref.route for ref in self.references))


class RouteReferenceScanner:
    """Regex scanner over files selected by suffix.

    Subclasses set ``source``, ``include_suffixes``, ``patterns`` (each with
    the route in its last group) and ``rejected_markers`` (substrings that make
    a reference non-literal).
    """

    source: RouteSource
    include_suffixes: tuple[str, ...] = ()
    exclude_suffixes: tuple[str, ...] = ()
    patterns: tuple[re.Pattern[str], ...] = ()
    rejected_markers: tuple[str, ...] = ()

    def __init__(
        self,
        root: Path,
        *,
        ignore_dirs: frozenset[str] = DEFAULT_IGNORE_DIRS,
    ) -> None:
        self.root = Path(root)
        self.ignore_dirs = ignore_dirs

    # ── public API ─────────────────────────────────────────────────

    def scan(self) -> ScanResult:
        result = ScanResult(source=self.source)
        cfg = DiscoverConfig(
            root=self.root,
            include_suffixes=self.include_suffixes,
            exclude_suffixes=self.exclude_suffixes,
            ignore_dirs=self.ignore_dirs,
        )
        for path in iter_source_files(cfg):
            content = path.read_text(encoding="utf-8", errors="replace")
            result.files_scanned += 1
            result.references.extend(self.scan_text(content, self._rel(path)))
        _logger.info(
            "%s: %d routes in %d files",
            self.source.value,
            len(result.routes),
            result.files_scanned,
        )
        return result

    def scan_text(self, content: str, rel_path: str = "<memory>") -> list[RouteReference]:
        """Every accepted reference in *content*, in pattern then source order."""
        refs: list[RouteReference] = []
        for pattern in self.patterns:
            for m in pattern.finditer(content):
                route = normalize_route_reference(m.group(m.lastindex or 0))
                if not self.accepts(route):
                    if route:
                        _logger.debug("Skipping non-literal route %r in %s", route, rel_path)
                    continue
                refs.append(
                    RouteReference(
                        route=route,
                        path=rel_path,
                        line=content.count("\n", 0, m.start()) + 1,
                        source=self.source,
                    )
                )
        return refs

    def accepts(self, route: str) -> bool:
        return bool(route) and not any(marker in route for marker in self.rejected_markers)

    # ── helpers ────────────────────────────────────────────────────

    def _rel(self, path: Path) -> str:
        try:
            return path.relative_to(self.root).as_posix()
        except ValueError:
            return path.as_posix()
