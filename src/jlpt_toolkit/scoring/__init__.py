"""
Module: scoring

Purpose:
    Scoring of live and offline attempts: validation of submitted counts,
    answer grading, weighted/normalized section scores and the compound
    pass/fail verdict.

Key Functions:
    - score_section() / score_attempt() / score_offline_result()
    - evaluate_pass_fail()
    - validate_group_scores() / validate_offline_tallies() / validate_snapshot()
    - count_correct_answers()

Dependencies:
    - jlpt_toolkit.common: Configuration Table and scoring configuration

Used By:
    - Submission handling and the offline score calculator
"""

from jlpt_toolkit.common.mondai import (
    MondaiConfigError,
    group_info,
    group_weight,
    group_question_count,
    group_max_score,
    group_numbers,
    is_valid_group,
    section_question_count,
    level_question_count,
    section_max_raw_score,
)

from .validation import (
    IssueCode,
    ValidationIssue,
    validate_group_scores,
    validate_offline_tallies,
    validate_snapshot,
)
from .engine import (
    ScoringInputError,
    weighted_group_score,
    reference_grade,
    score_section,
    score_total,
    evaluate_pass_fail,
    score_attempt,
    score_offline_result,
)
from .grading import GradingError, answers_from_display, count_correct_answers

__all__ = [
    # Configuration lookups
    "MondaiConfigError",
    "group_info",
    "group_weight",
    "group_question_count",
    "group_max_score",
    "group_numbers",
    "is_valid_group",
    "section_question_count",
    "level_question_count",
    "section_max_raw_score",
    # Validation
    "IssueCode",
    "ValidationIssue",
    "validate_group_scores",
    "validate_offline_tallies",
    "validate_snapshot",
    # Engine
    "ScoringInputError",
    "weighted_group_score",
    "reference_grade",
    "score_section",
    "score_total",
    "evaluate_pass_fail",
    "score_attempt",
    "score_offline_result",
    # Grading
    "GradingError",
    "answers_from_display",
    "count_correct_answers",
]
