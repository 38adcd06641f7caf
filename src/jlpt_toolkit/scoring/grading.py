"""
Module: scoring.grading

Purpose:
    Turns per-question answers of a live attempt into the per-group
    correct counts the scoring engine consumes. Answers are compared by
    ORIGINAL choice number; display positions are resolved first with the
    attempt seed.

Key Functions:
    - answers_from_display(): Display positions -> UserAnswerInput
    - count_correct_answers(): Per-group correct counts of one section

Dependencies:
    - builder.snapshot: Choice un-shuffling

Used By:
    - Submission handling before score_section / score_attempt
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional, Sequence

from jlpt_toolkit.builder.snapshot import resolve_choice
from jlpt_toolkit.core.models import MondaiQuestions, UserAnswerInput

logger = logging.getLogger(__name__)


class GradingError(ValueError):
    """Raised when answers or the answer key do not fit the snapshot."""


def answers_from_display(
    seed: str,
    selections: Mapping[str, Optional[int]],
) -> list[UserAnswerInput]:
    """
    Resolve display positions picked by the test-taker.

    Args:
        seed: Attempt seed the choices were shuffled with
        selections: question_id -> 1-based display position, or None when
            the question was left unanswered

    Returns:
        One UserAnswerInput per question with the original choice number

    Raises:
        ValueError: If a display position is outside 1..4
    """
    return [
        UserAnswerInput(
            question_id=qid,
            selected_choice=None if position is None else resolve_choice(qid, seed, position),
        )
        for qid, position in selections.items()
    ]


def count_correct_answers(
    section_snapshot: Sequence[MondaiQuestions],
    answers: Iterable[UserAnswerInput],
    answer_key: Mapping[str, int],
) -> dict[int, int]:
    """
    Count correct answers per group of one section.

    Args:
        section_snapshot: Persisted layout of the section
        answers: Submitted answers (original choice numbers); questions
            without an answer count as wrong
        answer_key: question_id -> correct original choice number

    Returns:
        group_number -> correct answers, with every group of the layout
        present (0 when nothing was correct)

    Raises:
        GradingError: If an answer references a question outside the
            layout or repeats a question, or a question of the layout
            has no key
    """
    group_of: dict[str, int] = {}
    for mondai in section_snapshot:
        for qid in mondai.question_ids:
            group_of[qid] = mondai.group_number

    missing_keys = sorted(qid for qid in group_of if qid not in answer_key)
    if missing_keys:
        raise GradingError(f"No correct answer stored for questions: {missing_keys}")

    counts = {mondai.group_number: 0 for mondai in section_snapshot}
    answered: set[str] = set()
    for answer in answers:
        group = group_of.get(answer.question_id)
        if group is None:
            raise GradingError(f"Answer for unknown question {answer.question_id}")
        if answer.question_id in answered:
            raise GradingError(f"More than one answer for question {answer.question_id}")
        answered.add(answer.question_id)
        if answer.is_answered and answer.selected_choice == answer_key[answer.question_id]:
            counts[group] += 1

    logger.debug("Counted correct answers: %s", counts)
    return counts
