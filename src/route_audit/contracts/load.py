"""Load and validate JSON instances against the bundled schemas.

Usage::

    from route_audit.contracts.load import validate_instance, validate_file

    validate_instance(result.to_dict(), "routes_complete.schema.json")
    validate_file(Path("routes-complete.json"), "routes_complete.schema.json")
"""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any

import jsonschema

SCHEMA_DIR = "data/schemas"

ROUTES_COMPLETE_SCHEMA = "routes_complete.schema.json"


def _schema_path(name: str) -> Path:
    """Resolve a bundled schema.

    Priority:
    1. ``src/route_audit/data/schemas/`` relative to this file
    2. pip-installed package data via importlib.resources
    """
    canonical = Path(__file__).resolve().parents[1] / SCHEMA_DIR / name
    if canonical.exists():
        return canonical

    with resources.as_file(resources.files("route_audit") / SCHEMA_DIR / name) as p:
        if p.exists():
            return p
    raise FileNotFoundError(f"schema not found: {name}")


def load_schema(name: str) -> dict[str, Any]:
    """Load a bundled JSON schema by filename."""
    path = _schema_path(name)
    return json.loads(path.read_text(encoding="utf-8"))


def validate_instance(instance: Any, schema_name: str = ROUTES_COMPLETE_SCHEMA) -> None:
    """Validate *instance* against the named schema.

    Raises ``jsonschema.ValidationError`` on failure.
    """
    schema = load_schema(schema_name)
    jsonschema.validate(instance=instance, schema=schema)


def validate_file(instance_path: Path, schema_name: str = ROUTES_COMPLETE_SCHEMA) -> None:
    """Load a JSON file and validate it against the named schema."""
    instance = json.loads(Path(instance_path).read_text(encoding="utf-8"))
    validate_instance(instance, schema_name)
