"""Template scanner — ``routerLink`` references in HTML templates.

Recognised forms::

    routerLink="/reports"             plain attribute
    [routerLink]="'/reports'"         bound single string literal
    [routerLink]="['/reports', id]"   bound array literal (first element)

Values containing interpolation (``{{``) or call syntax (``(``) cannot be
resolved statically and are discarded.
"""

from __future__ import annotations

import re

from route_audit.analyzers.references import RouteReferenceScanner
from route_audit.model import RouteSource

_PLAIN_RE = re.compile(r"""(?<![\[\w.-])routerLink\s*=\s*(["'])(.*?)\1""")
_BOUND_LITERAL_RE = re.compile(
    r"""\[routerLink\]\s*=\s*(["'])\s*(?!\1)(["'`])([^"'`]*)\2\s*\1"""
)
_BOUND_ARRAY_RE = re.compile(
    r"""\[routerLink\]\s*=\s*(["'])\s*\[\s*(?!\1)(["'`])([^"'`]*)\2"""
)


class TemplateScanner(RouteReferenceScanner):
    """Extracts ``routerLink`` targets from ``*.html`` files under *root*."""

    source = RouteSource.HTML
    include_suffixes = (".html",)
    patterns = (_PLAIN_RE, _BOUND_LITERAL_RE, _BOUND_ARRAY_RE)
    rejected_markers = ("{{", "(")
