"""
Module: results

Purpose:
    Immutable scoring results. A result is created once at scoring time;
    re-scoring produces a new result instead of patching an old one.

Key Classes:
    - MondaiScore: Per-group breakdown
    - SectionScoringResult: Weighted/normalized score of one section
    - FailureReason: One reason an attempt did not pass
    - PassFailResult: Final verdict for an attempt

Dependencies:
    - dataclasses (std)
    - .levels

Used By:
    - scoring.engine: Produces all result types
    - core.utils.serialization
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from .levels import Level, ReferenceGrade, SectionType


@dataclass(frozen=True, slots=True)
class MondaiScore:
    """
    Score breakdown for one question group.

    Attributes:
        group_number: Configured group number
        correct_count: Correct answers in the group
        total_count: Configured question count of the group
        weighted_score: correct_count * weight
        max_weighted_score: total_count * weight
    """

    group_number: int
    correct_count: int
    total_count: int
    weighted_score: float
    max_weighted_score: float

    @property
    def ratio(self) -> float:
        """Fraction of questions answered correctly (0.0 for empty groups)."""
        if self.total_count == 0:
            return 0.0
        return self.correct_count / self.total_count

    def to_dict(self) -> dict[str, Any]:
        return {
            "mondaiNumber": self.group_number,
            "correct": self.correct_count,
            "total": self.total_count,
            "weightedScore": self.weighted_score,
            "maxScore": self.max_weighted_score,
        }


@dataclass(frozen=True)
class SectionScoringResult:
    """
    Result of scoring one section of one attempt.

    Attributes:
        level: Level the section belongs to
        section: Section that was scored
        raw_score: Sum of weighted group scores
        max_raw_score: Sum of weight * question_count over all groups
        normalized_score: Score on the section's display scale (2 dp)
        scale_max: Maximum of the display scale (normally 60)
        reference_grade: Performance band from the unweighted correct ratio
        is_passed: normalized_score >= the section's configured minimum
        correct_count: Unweighted number of correct answers
        question_count: Number of questions in the section
        mondai_scores: Per-group breakdown in configured group order

    Invariants:
        - 0 <= raw_score <= max_raw_score
        - 0 <= normalized_score <= scale_max

    Example:
        >>> result.normalized_score
        48.0
        >>> result.reference_grade
        <ReferenceGrade.A: 'A'>
    """

    level: Level
    section: SectionType
    raw_score: float
    max_raw_score: float
    normalized_score: float
    scale_max: float
    reference_grade: ReferenceGrade
    is_passed: bool
    correct_count: int
    question_count: int
    mondai_scores: tuple[MondaiScore, ...] = ()

    def score_for_group(self, group_number: int) -> MondaiScore | None:
        """
        Find the breakdown row of a group.

        Args:
            group_number: Group number to look up

        Returns:
            Matching MondaiScore or None
        """
        for score in self.mondai_scores:
            if score.group_number == group_number:
                return score
        return None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-friendly dictionary."""
        return {
            "level": self.level.value,
            "sectionType": self.section.value,
            "rawScore": self.raw_score,
            "rawMaxScore": self.max_raw_score,
            "normalizedScore": self.normalized_score,
            "scaleMax": self.scale_max,
            "referenceGrade": self.reference_grade.value,
            "isPassed": self.is_passed,
            "correctCount": self.correct_count,
            "questionCount": self.question_count,
            "mondaiBreakdown": [s.to_dict() for s in self.mondai_scores],
        }

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return (
            f"SectionScoringResult({self.level.value} {self.section.value}, "
            f"raw={self.raw_score:g}/{self.max_raw_score:g}, "
            f"score={self.normalized_score:g}/{self.scale_max:g}, "
            f"grade={self.reference_grade.value}, passed={self.is_passed})"
        )


class FailureKind(str, Enum):
    """Which rule a failed attempt did not satisfy."""
    OVERALL = "overall"    # Total below the level's passing score
    SECTION = "section"    # One section below its own minimum
    COMBINED = "combined"  # Jointly evaluated sections below their minimum

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class FailureReason:
    """
    One reason for a failed verdict.

    Attributes:
        kind: Rule that failed
        sections: Sections the rule covers (empty for OVERALL)
        score: Score that was compared
        required: Minimum that was not met
        scale_max: Maximum of the compared scale
        message: Human-readable explanation
    """

    kind: FailureKind
    sections: tuple[SectionType, ...]
    score: float
    required: float
    scale_max: float
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class PassFailResult:
    """
    Final verdict for an attempt.

    The attempt passes only when the total clears the level threshold AND
    every sectional minimum holds. Both checks always run, so every failing
    rule is reported in failure_reasons.

    Attributes:
        level: Level of the attempt
        overall_passed: Compound verdict
        total_score: Sum of normalized section scores (2 dp)
        max_total_score: Sum of section scale maxima
        section_results: Scored sections in section order
        sections_passed: Per-section sectional verdict
        failure_reasons: Every failed rule, empty when passed
    """

    level: Level
    overall_passed: bool
    total_score: float
    max_total_score: float
    section_results: tuple[SectionScoringResult, ...]
    sections_passed: Mapping[SectionType, bool] = field(default_factory=dict)
    failure_reasons: tuple[FailureReason, ...] = ()

    @property
    def failure_messages(self) -> list[str]:
        """Failure reasons as plain strings."""
        return [reason.message for reason in self.failure_reasons]

    def section_result(self, section: SectionType | str) -> SectionScoringResult | None:
        """Find the result of one section."""
        section = SectionType(section)
        for result in self.section_results:
            if result.section == section:
                return result
        return None

    def failed_sections(self) -> set[SectionType]:
        """Sections named by any sectional or combined failure."""
        return {
            section
            for reason in self.failure_reasons
            for section in reason.sections
        }

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-friendly dictionary."""
        return {
            "level": self.level.value,
            "isPassed": self.overall_passed,
            "totalScore": self.total_score,
            "maxTotalScore": self.max_total_score,
            "sectionsPassed": {
                section.value: passed for section, passed in self.sections_passed.items()
            },
            "sectionResults": [r.to_dict() for r in self.section_results],
            "failureReasons": self.failure_messages,
        }

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return (
            f"PassFailResult({self.level.value}, passed={self.overall_passed}, "
            f"total={self.total_score:g}/{self.max_total_score:g}, "
            f"failures={len(self.failure_reasons)})"
        )
