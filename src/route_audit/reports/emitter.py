"""Artifact emitter and console report for an ``ExtractionResult``.

Artifacts (overwritten on every run):

*  ``routes.json`` — route paths without prefix.
*  ``routes-full-urls.json`` — routes with the routing-mode prefix.
*  ``routes-complete.json`` — metadata, stats, routes and full URLs;
   validated against ``routes_complete.schema.json`` before anything is written.

Nothing here mutates the result.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from route_audit.contracts.load import ROUTES_COMPLETE_SCHEMA, validate_instance
from route_audit.model import RoutingMode
from route_audit.model.route import ExtractionResult
from route_audit.utils.json_norm import stable_json_dumps

ROUTES_FILE = "routes.json"
FULL_URLS_FILE = "routes-full-urls.json"
COMPLETE_FILE = "routes-complete.json"

ARTIFACT_FILENAMES = (ROUTES_FILE, FULL_URLS_FILE, COMPLETE_FILE)

_ARTIFACT_DESCRIPTIONS = {
    ROUTES_FILE: "Clean route paths",
    FULL_URLS_FILE: "URLs with hash prefix",
    COMPLETE_FILE: "Complete metadata and stats",
}

_INVENTORY_PREVIEW = 10
_EXAMPLE_MATCHES = 3


# ════════════════════════════════════════════════════════════════════
# JSON artifacts
# ════════════════════════════════════════════════════════════════════


def render_artifacts(result: ExtractionResult) -> dict[str, str]:
    """Serialize the three artifacts; raises if the complete record is invalid."""
    complete = result.to_dict()
    validate_instance(complete, ROUTES_COMPLETE_SCHEMA)
    return {
        ROUTES_FILE: stable_json_dumps(list(result.routes)),
        FULL_URLS_FILE: stable_json_dumps(result.full_urls),
        COMPLETE_FILE: stable_json_dumps(complete),
    }


def write_artifacts(result: ExtractionResult, out_dir: Path) -> list[Path]:
    """Write every artifact under *out_dir*; return the written paths."""
    rendered = render_artifacts(result)
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for name, text in rendered.items():
        path = out_dir / name
        path.write_text(text, encoding="utf-8")
        written.append(path)
    return written


# ════════════════════════════════════════════════════════════════════
# Console report
# ════════════════════════════════════════════════════════════════════


class RouteReport:
    """Human-readable progress and summary output (via ``rich``)."""

    def __init__(
        self,
        console: Console | None = None,
        *,
        sample_size: int = 20,
        example_lookups: Sequence[str] = (),
    ) -> None:
        self.console = console or Console()
        self.sample_size = sample_size
        self.example_lookups = tuple(example_lookups)

    # ── sections ───────────────────────────────────────────────────

    def header(self, mode: RoutingMode) -> None:
        self.console.rule("🔍 COMPREHENSIVE ROUTE EXTRACTION")
        label = "Hash Routing (#/)" if mode is RoutingMode.HASH else "HTML5 Mode"
        self.console.print(f"📌 Routing Mode: {label}\n")

    def step(self, number: int, title: str) -> None:
        self.console.rule(f"STEP {number}: {escape(title)}", style="dim")

    def trace(self, lines: Sequence[str]) -> None:
        for line in lines:
            self.console.print(escape(line), highlight=False)

    def routing_files(self, files: Sequence[str]) -> None:
        self.console.print(f"   Found {len(files)} routing module files:")
        for name in files[:_INVENTORY_PREVIEW]:
            self.console.print(f"     - {escape(name)}", highlight=False)
        if len(files) > _INVENTORY_PREVIEW:
            self.console.print(f"     ... and {len(files) - _INVENTORY_PREVIEW} more")

    def scan_count(self, what: str, count: int) -> None:
        self.console.print(f"   Found {count} routes in {what}")

    def counts(self, result: ExtractionResult) -> None:
        stats = result.stats
        table = Table(title="Route sources")
        table.add_column("Source")
        table.add_column("Routes", justify="right")
        table.add_row("From routing modules", str(stats.routing_modules))
        table.add_row("From HTML files", str(stats.html_files))
        table.add_row("From TypeScript files", str(stats.ts_files))
        table.add_row("Total unique routes", str(stats.unique))
        table.add_row("Valid routes (filtered)", str(stats.total))
        self.console.print(table)

    def summary(self, result: ExtractionResult, written: Sequence[Path] = ()) -> None:
        prefix = result.hash_prefix
        self.console.rule("✓ EXTRACTION COMPLETE")
        self.console.print(f"📊 Total Routes Found: {len(result.routes)}\n")

        self.console.print(f"📄 Sample Routes (with {prefix} prefix):\n")
        for index, url in enumerate(result.full_urls[: self.sample_size], start=1):
            self.console.print(f"  {index:>2}. {escape(url)}", highlight=False)
        if len(result.routes) > self.sample_size:
            self.console.print(f"      ... and {len(result.routes) - self.sample_size} more routes")

        if written:
            self.console.print("\n📁 Output Files Created:")
            for path in written:
                desc = _ARTIFACT_DESCRIPTIONS.get(path.name, "")
                self.console.print(f"  ✓ {escape(path.name)} - {desc}", highlight=False)

        self.examples(result)

    def examples(self, result: ExtractionResult) -> None:
        """Routes containing each configured lookup substring."""
        if not self.example_lookups:
            return
        self.console.print("\n🔍 Example Routes Found:")
        for example in self.example_lookups:
            found = [r for r in result.routes if example in r]
            if not found:
                continue
            self.console.print(f"\n  {escape(example)}:")
            for route in found[:_EXAMPLE_MATCHES]:
                self.console.print(f"    → {escape(result.hash_prefix + route)}", highlight=False)
            if len(found) > _EXAMPLE_MATCHES:
                self.console.print(f"    ... and {len(found) - _EXAMPLE_MATCHES} more")

    # ── full run ───────────────────────────────────────────────────

    def render(self, result: ExtractionResult, written: Sequence[Path] = ()) -> None:
        """Print every section for a finished extraction."""
        self.header(result.routing_mode)
        self.step(1, "Extracting routes from routing modules (hierarchy)")
        self.trace(result.trace)
        self.step(2, "Finding all routing module files")
        self.routing_files(result.routing_files)
        self.step(3, "Scanning HTML templates")
        self.scan_count("HTML files", result.stats.html_files)
        self.step(4, "Scanning TypeScript files")
        self.scan_count("TypeScript files", result.stats.ts_files)
        self.step(5, "Combining and deduplicating routes")
        self.counts(result)
        self.summary(result, written)
