"""Analyzers turn source text into route evidence.

Three independent evidence sources feed the reconciler:

1. **Routing modules** — ``route_tree.RouteTreeBuilder`` walks the
   ``*-routing.module.ts`` hierarchy through ``module_parser`` and
   ``module_resolver``.
2. **Templates** — ``templates.TemplateScanner`` reads ``routerLink``
   directives from ``*.html`` files.
3. **Navigation calls** — ``navigation.NavigationCallScanner`` reads
   ``.navigate([...])`` / ``.navigateByUrl(...)`` calls from ``*.ts`` files.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from route_audit.analyzers.references import ScanResult


class Scanner(Protocol):
    """Every reference scanner exposes ``scan()`` over its root."""

    root: Path

    def scan(self) -> ScanResult:
        """Scan files under ``root`` and return the routes found."""
        ...


# Lazy imports keep ``import route_audit.analyzers`` cheap.
def __getattr__(name: str):
    if name == "TemplateScanner":
        from .templates import TemplateScanner
        return TemplateScanner
    if name == "NavigationCallScanner":
        from .navigation import NavigationCallScanner
        return NavigationCallScanner
    if name == "RouteTreeBuilder":
        from .route_tree import RouteTreeBuilder
        return RouteTreeBuilder
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
