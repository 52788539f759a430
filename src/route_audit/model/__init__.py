"""Enums shared across the extraction pipeline and the reporter."""

from __future__ import annotations

from enum import Enum


class RouteSource(str, Enum):
    """Where a route string was found."""

    ROUTING_MODULE = "routing_module"
    HTML = "html"
    TYPESCRIPT = "typescript"


class RoutingMode(str, Enum):
    """Routing mode of the application, detected from the root routing file."""

    HASH = "Hash"
    HTML5 = "HTML5"

    @property
    def prefix(self) -> str:
        return "#/" if self is RoutingMode.HASH else "/"

    @classmethod
    def from_prefix(cls, prefix: str) -> "RoutingMode":
        return cls.HASH if prefix == "#/" else cls.HTML5
