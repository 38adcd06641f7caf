"""
JLPT Toolkit Core Package

Shared data models, schema validation and serialization used by the
builder and scoring packages.

**DESIGN NOTES:**

1. **Immutable Data Models**
   - Frozen dataclasses; new instances are created for any change

2. **Calculated Scores (Never Stored)**
   - Max scores and totals are always derived from the Configuration Table

3. **Persisted Shapes Are Validated**
   - Snapshots and scoring configuration are checked against JSON schemas
     before they are turned into models
"""

from .models import (
    Level,
    SectionType,
    ReferenceGrade,
    QuestionGroupInfo,
    MondaiQuestions,
    QuestionSnapshot,
    SectionScoringResult,
    PassFailResult,
)

__all__ = [
    "Level",
    "SectionType",
    "ReferenceGrade",
    "QuestionGroupInfo",
    "MondaiQuestions",
    "QuestionSnapshot",
    "SectionScoringResult",
    "PassFailResult",
]
