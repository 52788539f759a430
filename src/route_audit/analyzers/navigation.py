"""Navigation-call scanner — ``router.navigate`` / ``navigateByUrl`` targets.

Only the first element of a ``navigate([...])`` array is captured, so
``navigate(['settings', 'profile'])`` contributes ``settings``.  Template
literals with ``${...}`` placeholders are discarded.
"""

from __future__ import annotations

import re

from route_audit.analyzers.references import RouteReferenceScanner
from route_audit.model import RouteSource

_NAVIGATE_RE = re.compile(r"""\.navigate\(\s*\[\s*(["'`])(.*?)\1""")
_NAVIGATE_BY_URL_RE = re.compile(r"""\.navigateByUrl\(\s*(["'`])(.*?)\1""")


class NavigationCallScanner(RouteReferenceScanner):
    """Extracts navigation targets from ``*.ts`` files, skipping ``*.spec.ts``."""

    source = RouteSource.TYPESCRIPT
    include_suffixes = (".ts",)
    exclude_suffixes = (".spec.ts",)
    patterns = (_NAVIGATE_RE, _NAVIGATE_BY_URL_RE)
    rejected_markers = ("${", "`")
