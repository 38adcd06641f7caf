"""
Schema Validation Utilities

Validates persisted JSON documents against the bundled JSON Schemas.

Two documents cross the boundary of this library:
- the scoring configuration (scales, grade bands, pass/fail minimums)
- the question snapshot stored with each attempt

Both are checked with `jsonschema` before they are turned into models.
Required top-level fields are checked first so the common mistakes get a
short message; the full schema pass then reports every violation at once.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema


# Schema version constants
SCORING_CONFIG_SCHEMA_VERSION = 1  # v1: scales, grade bands, combined minimums, normalization parts


_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class SchemaValidationError(ValueError):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def _run_schema(data: Any, schema_name: str) -> None:
    """Validate against a bundled schema, collecting every violation."""
    schema = _load_schema(schema_name)
    validator = jsonschema.Draft202012Validator(schema)
    violations = sorted(validator.iter_errors(data), key=lambda e: list(e.absolute_path))
    if not violations:
        return

    first = violations[0]
    errors = [
        f"{'.'.join(str(p) for p in e.absolute_path) or '<root>'}: {e.message}"
        for e in violations
    ]
    raise SchemaValidationError(
        f"Schema validation failed: {first.message}",
        path=".".join(str(p) for p in first.absolute_path),
        errors=errors,
    )


def validate_scoring_config(data: dict[str, Any]) -> None:
    """
    Validate a scoring configuration document.

    Args:
        data: Parsed JSON document

    Raises:
        SchemaValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise SchemaValidationError("Scoring config must be a JSON object")

    required = ["schema_version", "grade_bands", "levels"]
    missing = [f for f in required if f not in data]
    if missing:
        raise SchemaValidationError(
            f"Missing required fields: {missing}",
            path="",
            errors=[f"Missing field: {f}" for f in missing],
        )

    version = data.get("schema_version")
    if version != SCORING_CONFIG_SCHEMA_VERSION:
        raise SchemaValidationError(
            f"Unsupported scoring config schema version: {version} "
            f"(expected {SCORING_CONFIG_SCHEMA_VERSION})",
            path="schema_version",
        )

    _run_schema(data, "scoring_config")


def validate_snapshot_data(data: dict[str, Any]) -> None:
    """
    Validate a persisted question snapshot.

    Only the shape is checked here; whether the groups match the
    Configuration Table is checked by scoring.validation.validate_snapshot.

    Args:
        data: Parsed JSON document

    Raises:
        SchemaValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise SchemaValidationError("Snapshot must be a JSON object")
    _run_schema(data, "snapshot")
