"""
Serialization Utilities

To/from JSON helpers for the models that leave the process: the question
snapshot persisted with each attempt and the scoring results shown to the
test-taker.

**DESIGN NOTES:**

- Clean separation: `serialize_*` and `deserialize_*` functions
- All persisted models have `to_dict()` (and `from_dict()` where they are
  read back)
- Snapshots are validated against the bundled schema before deserialization
- Calculated values (max scores, totals) are never read back; they are
  always recomputed from the Configuration Table
"""

from __future__ import annotations

import json
from typing import Any

from ..models.results import PassFailResult, SectionScoringResult
from ..models.snapshot import QuestionSnapshot
from ..schemas.validator import SchemaValidationError, validate_snapshot_data


# ─────────────────────────────────────────────────────────────────────────────
# Snapshot Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_snapshot(snapshot: QuestionSnapshot) -> dict[str, Any]:
    """
    Serialize a QuestionSnapshot to a dictionary.

    The output uses the persisted key names (mondaiNumber / questionIds)
    and passes schema validation.
    """
    return snapshot.to_dict()


def deserialize_snapshot(data: dict[str, Any], *, validate: bool = True) -> QuestionSnapshot:
    """
    Deserialize a QuestionSnapshot from a dictionary.

    Args:
        data: Dictionary from JSON
        validate: Whether to validate against the schema first

    Returns:
        QuestionSnapshot instance

    Raises:
        SchemaValidationError: If validate=True and data is invalid
    """
    if validate:
        validate_snapshot_data(data)
    return QuestionSnapshot.from_dict(data)


def snapshot_to_json(snapshot: QuestionSnapshot) -> str:
    """Encode a snapshot as a compact JSON string."""
    return json.dumps(serialize_snapshot(snapshot), ensure_ascii=False, separators=(",", ":"))


def snapshot_from_json(text: str, *, validate: bool = True) -> QuestionSnapshot:
    """
    Decode a snapshot from a JSON string.

    Raises:
        SchemaValidationError: If the text is not JSON or fails validation
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SchemaValidationError(f"Snapshot is not valid JSON: {e}", errors=[str(e)]) from e
    return deserialize_snapshot(data, validate=validate)


# ─────────────────────────────────────────────────────────────────────────────
# Result Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_section_result(result: SectionScoringResult) -> dict[str, Any]:
    """Serialize a section result, including its per-group breakdown."""
    return result.to_dict()


def serialize_pass_fail(result: PassFailResult) -> dict[str, Any]:
    """
    Serialize a verdict.

    Structured failure reasons are included next to the plain messages so
    a client can highlight the failing sections.
    """
    data = result.to_dict()
    data["failureDetails"] = [
        {
            "kind": reason.kind.value,
            "sections": [s.value for s in reason.sections],
            "score": reason.score,
            "required": reason.required,
            "scaleMax": reason.scale_max,
        }
        for reason in result.failure_reasons
    ]
    return data
