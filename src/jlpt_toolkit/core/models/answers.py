"""
Module: answers

Purpose:
    Caller-supplied submission data: per-question answers from a live
    attempt and per-group tallies from an externally graded (offline) test.

Key Classes:
    - UserAnswerInput: Selected original choice for one question
    - GroupTally: Correct count for one group of an offline result

Dependencies:
    - dataclasses (std)
    - .levels.SectionType

Used By:
    - scoring.grading: Counting correct answers
    - scoring.engine: Offline scoring
    - scoring.validation
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .levels import SectionType


@dataclass(frozen=True, slots=True)
class UserAnswerInput:
    """
    Answer submitted for one question.

    selected_choice is the ORIGINAL choice number (1-4), already resolved
    from the display position the test-taker clicked. None means the
    question was left unanswered.
    """

    question_id: str
    selected_choice: Optional[int] = None

    def __post_init__(self) -> None:
        if self.selected_choice is not None and not 1 <= self.selected_choice <= 4:
            raise ValueError(
                f"selected_choice must be 1-4 or None: {self.selected_choice}"
            )

    @property
    def is_answered(self) -> bool:
        return self.selected_choice is not None


@dataclass(frozen=True, slots=True)
class GroupTally:
    """
    Externally graded result of one group (e.g. a transcribed paper test).

    Attributes:
        section: Section the group belongs to
        group_number: Group number
        correct: Number of correct answers
        total: Question count reported by the source; checked against the
            configuration when given
    """

    section: SectionType
    group_number: int
    correct: int
    total: Optional[int] = None

    def __post_init__(self) -> None:
        if not isinstance(self.section, SectionType):
            object.__setattr__(self, "section", SectionType(self.section))
