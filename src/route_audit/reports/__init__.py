"""Artifact writers and console reporting."""

from route_audit.reports.emitter import (
    ARTIFACT_FILENAMES,
    RouteReport,
    render_artifacts,
    write_artifacts,
)

__all__ = [
    "ARTIFACT_FILENAMES",
    "RouteReport",
    "render_artifacts",
    "write_artifacts",
]
