"""Route declarations, references and the extraction result."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from . import RouteSource, RoutingMode


@dataclass(frozen=True, slots=True)
class RouteDeclaration:
    """One ``{ path: ... }`` object literal in a routing-configuration file."""

    path: str
    source_file: Path
    load_children: str | None = None
    line: int = 1
    children: tuple["RouteDeclaration", ...] = ()

    @property
    def is_lazy(self) -> bool:
        return self.load_children is not None


@dataclass(frozen=True, slots=True)
class RouteReference:
    """A normalized route string found in a template or source file."""

    route: str
    path: str
    line: int
    source: RouteSource


@dataclass(slots=True)
class RouteTree:
    """Flat, ordered output of the route tree walk."""

    routes: list[str] = field(default_factory=list)
    trace: list[str] = field(default_factory=list)
    modules: list[Path] = field(default_factory=list)


def join_route_path(parent: str, segment: str) -> str:
    """Fully-qualified path of *segment* declared under *parent*."""
    return f"{parent}/{segment}" if parent else segment


@dataclass(frozen=True, slots=True)
class ExtractionStats:
    """Per-source route counts (pre-filter) and the final route count."""

    routing_modules: int = 0
    html_files: int = 0
    ts_files: int = 0
    total: int = 0
    unique: int = 0
    routing_files: int = 0

    def to_dict(self) -> dict:
        return {
            "routingModules": self.routing_modules,
            "htmlFiles": self.html_files,
            "tsFiles": self.ts_files,
            "total": self.total,
        }


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    """Final artifact of one extraction run.

    ``routes`` is sorted, deduplicated and filtered; ``hash_prefix`` applies
    uniformly to every entry of ``full_urls``.
    """

    routes: list[str]
    hash_prefix: str
    stats: ExtractionStats
    generated_at: str = ""
    trace: list[str] = field(default_factory=list)
    routing_files: list[str] = field(default_factory=list)

    @property
    def routing_mode(self) -> RoutingMode:
        return RoutingMode.from_prefix(self.hash_prefix)

    @property
    def full_urls(self) -> list[str]:
        return [f"{self.hash_prefix}{r}" for r in self.routes]

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict:
        """Shape of ``routes-complete.json``."""
        return {
            "metadata": {
                "totalRoutes": len(self.routes),
                "routingMode": self.routing_mode.value,
                "generatedAt": self.generated_at,
                "stats": self.stats.to_dict(),
            },
            "routes": list(self.routes),
            "fullUrls": self.full_urls,
        }
