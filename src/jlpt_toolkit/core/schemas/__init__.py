"""
Schemas Package

JSON schema definitions and validation utilities.
"""

from .validator import (
    validate_scoring_config,
    validate_snapshot_data,
    SchemaValidationError,
    SCORING_CONFIG_SCHEMA_VERSION,
)

__all__ = [
    "validate_scoring_config",
    "validate_snapshot_data",
    "SchemaValidationError",
    "SCORING_CONFIG_SCHEMA_VERSION",
]
