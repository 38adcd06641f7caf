"""
Utils Package

Serialization helpers for persisted snapshots and scoring results.
"""

from .serialization import (
    serialize_snapshot,
    deserialize_snapshot,
    snapshot_to_json,
    snapshot_from_json,
    serialize_section_result,
    serialize_pass_fail,
)

__all__ = [
    "serialize_snapshot",
    "deserialize_snapshot",
    "snapshot_to_json",
    "snapshot_from_json",
    "serialize_section_result",
    "serialize_pass_fail",
]
