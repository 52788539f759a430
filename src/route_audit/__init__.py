"""route_audit — static route inventory for single-page applications."""

__all__ = [
    "__version__",
    "extract_routes",
    "find_routing_files",
    "validate_instance",
]
__version__ = "0.1.0"

# Programmatic entrypoints, see route_audit.api.
from route_audit.api import (  # noqa: E402, F401
    extract_routes,
    find_routing_files,
    validate_instance,
)
