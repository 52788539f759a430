"""Reconciler — merges the three route collections into the final list."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

# Authentication-flow screens that are reachable but never part of the
# navigable inventory.
DEFAULT_EXCLUDED_ROUTES: frozenset[str] = frozenset(
    {"Login", "Renewpassword", "Forgotpassword"}
)

_REJECTED_SUBSTRINGS = ("**", ":", "undefined", "null")


@dataclass(frozen=True, slots=True)
class Reconciliation:
    """Final routes plus pre-filter counts per source."""

    routes: list[str] = field(default_factory=list)
    routing_modules: int = 0
    html_files: int = 0
    ts_files: int = 0
    unique: int = 0

    @property
    def total(self) -> int:
        return len(self.routes)


def is_navigable(route: str, excluded_routes: Iterable[str] = DEFAULT_EXCLUDED_ROUTES) -> bool:
    """True when *route* survives every exclusion rule."""
    if not route or not route.strip():
        return False
    if any(marker in route for marker in _REJECTED_SUBSTRINGS):
        return False
    return route not in set(excluded_routes)


def reconcile(
    tree_routes: list[str],
    html_routes: list[str],
    ts_routes: list[str],
    *,
    excluded_routes: Iterable[str] = DEFAULT_EXCLUDED_ROUTES,
) -> Reconciliation:
    """Union, deduplicate, sort, then filter the three collections."""
    excluded = frozenset(excluded_routes)
    unique = sorted(set(tree_routes) | set(html_routes) | set(ts_routes))
    valid = [r for r in unique if is_navigable(r, excluded)]
    return Reconciliation(
        routes=valid,
        routing_modules=len(tree_routes),
        html_files=len(html_routes),
        ts_files=len(ts_routes),
        unique=len(unique),
    )
