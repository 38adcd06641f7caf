"""
Module: groups

Purpose:
    Provides QuestionGroupInfo - the validated description of one numbered
    question group ("mondai") inside a section. Rows of the Configuration
    Table are instances of this class.

Key Classes:
    - QuestionGroupInfo: {number, weight, question_count}

Dependencies:
    - dataclasses (std)

Used By:
    - common.mondai: Configuration Table rows
    - scoring.engine: Weighted scoring
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class QuestionGroupInfo:
    """
    One question group within a (level, section).

    Attributes:
        number: Group number as printed on the test paper (問題N)
        weight: Points awarded per correct answer in this group
        question_count: Fixed number of questions in the group

    Invariants:
        - number > 0
        - weight > 0
        - question_count > 0

    Example:
        >>> g = QuestionGroupInfo(number=2, weight=2.5, question_count=6)
        >>> g.max_score
        15.0
    """

    number: int
    weight: float
    question_count: int

    def __post_init__(self) -> None:
        """Validate group on construction."""
        if self.number <= 0:
            raise ValueError(f"Group number must be positive: {self.number}")
        if self.weight <= 0:
            raise ValueError(f"Group weight must be positive: {self.weight}")
        if self.question_count <= 0:
            raise ValueError(
                f"Group question_count must be positive: {self.question_count}"
            )

    @property
    def max_score(self) -> float:
        """Maximum weighted score for the group (weight * question_count)."""
        return self.weight * self.question_count

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return f"Mondai({self.number}, weight={self.weight:g}, questions={self.question_count})"
