"""Shared utilities for route_audit."""

from route_audit.utils.exit_codes import ExitCode
from route_audit.utils.json_norm import stable_json_dump, stable_json_dumps

__all__ = [
    "ExitCode",
    "stable_json_dump",
    "stable_json_dumps",
]
