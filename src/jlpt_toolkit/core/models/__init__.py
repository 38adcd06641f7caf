"""
Core Models Package

Immutable, validated data models shared by the builder and the scoring engine.

All models in this package are frozen dataclasses. This ensures:
1. Configuration rows cannot be mutated at runtime
2. Snapshots and results are safe to share between threads
3. Re-scoring always produces a new result

| Model | Role |
|-------|------|
| `QuestionGroupInfo` | One row of the Configuration Table |
| `QuestionSnapshot` | Persisted question layout of an attempt |
| `SectionScoringResult` | Score of one section |
| `PassFailResult` | Final verdict of an attempt |
"""

from .levels import Level, SectionType, ReferenceGrade, SECTION_ORDER
from .groups import QuestionGroupInfo
from .snapshot import MondaiQuestions, QuestionSnapshot, SectionSnapshot, ShuffledChoice
from .answers import UserAnswerInput, GroupTally
from .results import (
    MondaiScore,
    SectionScoringResult,
    FailureKind,
    FailureReason,
    PassFailResult,
)
from .attempt import AttemptStatus, AttemptProgress, InvalidTransitionError

__all__ = [
    "Level",
    "SectionType",
    "ReferenceGrade",
    "SECTION_ORDER",
    "QuestionGroupInfo",
    "MondaiQuestions",
    "QuestionSnapshot",
    "SectionSnapshot",
    "ShuffledChoice",
    "UserAnswerInput",
    "GroupTally",
    "MondaiScore",
    "SectionScoringResult",
    "FailureKind",
    "FailureReason",
    "PassFailResult",
    "AttemptStatus",
    "AttemptProgress",
    "InvalidTransitionError",
]
