"""Route tree builder — walks routing modules from the root, depth-first.

Produces the flat, ordered list of fully-qualified route paths reachable from
the root routing file, and a human-readable trace of the walk.  A lazy route
whose child module resolves is represented by that module's routes, or by
itself when the module declares none; a lazy route that does not resolve is a
leaf and is emitted itself.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from route_audit.analyzers.module_parser import ModuleParseCache
from route_audit.analyzers.module_resolver import ModuleResolver
from route_audit.model.route import RouteDeclaration, RouteTree, join_route_path

_logger = logging.getLogger(__name__)


class RoutingCycleError(RuntimeError):
    """Raised when a routing module lazily loads one of its own ancestors."""

    def __init__(self, cycle: list[Path]) -> None:
        self.cycle = cycle
        chain = " -> ".join(p.as_posix() for p in cycle)
        super().__init__(f"Routing module cycle detected: {chain}")


def _display(path: Path, base: Path) -> str:
    try:
        return Path(os.path.relpath(path, base)).as_posix()
    except ValueError:
        return path.as_posix()


class RouteTreeBuilder:
    """Builds the route list for one extraction run.

    Holds the per-run parse cache and the stack of routing files on the
    active traversal path.
    """

    def __init__(
        self,
        resolver: ModuleResolver,
        cache: ModuleParseCache | None = None,
        *,
        display_root: Path | None = None,
    ) -> None:
        self.resolver = resolver
        self.cache = cache if cache is not None else ModuleParseCache()
        self.display_root = display_root or resolver.project_root
        self._active: list[Path] = []

    def build(self, root_file: Path) -> RouteTree:
        tree = RouteTree()
        self._active = []
        self._walk(Path(root_file).resolve(), "", 0, tree)
        return tree

    # ── traversal ──────────────────────────────────────────────────

    def _trace(self, tree: RouteTree, line: str) -> None:
        tree.trace.append(line)
        _logger.debug(line)

    def _walk(self, routing_file: Path, parent: str, depth: int, tree: RouteTree) -> None:
        if routing_file in self._active:
            start = self._active.index(routing_file)
            raise RoutingCycleError(self._active[start:] + [routing_file])

        indent = "  " * depth
        self._trace(tree, f"{indent}📂 Scanning: {_display(routing_file, self.display_root)}")
        if routing_file not in tree.modules:
            tree.modules.append(routing_file)

        self._active.append(routing_file)
        try:
            self._visit(self.cache.get(routing_file), parent, depth, tree)
        finally:
            self._active.pop()

    def _visit(
        self,
        declarations: list[RouteDeclaration],
        parent: str,
        depth: int,
        tree: RouteTree,
    ) -> None:
        indent = "  " * depth
        for decl in declarations:
            # An empty segment adds nothing to its parent.
            full_path = join_route_path(parent, decl.path) if decl.path else parent
            self._trace(tree, f"{indent}  ├─ {decl.path} → {full_path}")

            child_file = None
            if decl.load_children:
                child_file = self.resolver.resolve(decl.load_children, decl.source_file)

            if child_file is not None:
                self._trace(tree, f"{indent}  │  └─ Loading children...")
                before = len(tree.routes)
                self._walk(child_file.resolve(), full_path, depth + 1, tree)
                # A child module with no declarations of its own (e.g. only
                # ``forChild(IMPORTED_ROUTES)``) still leaves its parent reachable.
                if len(tree.routes) == before and full_path:
                    tree.routes.append(full_path)
            elif full_path:
                tree.routes.append(full_path)

            if decl.children:
                self._visit(list(decl.children), full_path, depth + 1, tree)
