"""
Module: scoring.validation

Purpose:
    Cross-checks caller-supplied data against the Configuration Table
    before anything is scored. Every function here returns the complete
    list of problems and never raises for bad input, so a reviewer can
    see all issues of a submission at once.

Key Functions:
    - validate_group_scores(): Per-group correct counts of one section
    - validate_offline_tallies(): Externally graded rows of a full test
    - validate_snapshot(): Persisted layout against the group structure

Key Classes:
    - ValidationIssue: One problem, tagged with an IssueCode
    - IssueCode: Machine-readable problem category

Dependencies:
    - jlpt_toolkit.common.mondai: Configured groups

Used By:
    - scoring.engine: Gatekeeper for score_section / score_offline_result
    - Administrative batch checks
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping, Optional

from jlpt_toolkit.common.mondai import section_groups
from jlpt_toolkit.core.models import (
    SECTION_ORDER,
    GroupTally,
    Level,
    QuestionSnapshot,
    SectionType,
)


class IssueCode(str, Enum):
    """Category of a validation problem."""
    UNKNOWN_GROUP = "unknown_group"
    MISSING_GROUP = "missing_group"
    COUNT_EXCEEDS_QUESTIONS = "count_exceeds_questions"
    NEGATIVE_COUNT = "negative_count"
    NON_INTEGER_COUNT = "non_integer_count"
    TOTAL_MISMATCH = "total_mismatch"
    DUPLICATE_GROUP = "duplicate_group"
    GROUP_ORDER = "group_order"
    QUESTION_COUNT_MISMATCH = "question_count_mismatch"
    DUPLICATE_QUESTION = "duplicate_question"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """
    One problem found in submitted data.

    Attributes:
        code: Problem category
        level: Level the data was checked against
        section: Section the problem belongs to
        group_number: Group the problem belongs to, if any
        message: Human-readable description
    """

    code: IssueCode
    level: Level
    section: SectionType
    group_number: Optional[int]
    message: str

    def __str__(self) -> str:
        return self.message


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


# ─────────────────────────────────────────────────────────────────────────────
# Group Scores
# ─────────────────────────────────────────────────────────────────────────────

def validate_group_scores(
    level: Level | str,
    section: SectionType | str,
    correct_counts: Mapping[int, Any],
    *,
    totals: Optional[Mapping[int, Any]] = None,
) -> list[ValidationIssue]:
    """
    Check per-group correct counts of one section.

    Args:
        level: Level of the attempt
        section: Section the counts belong to
        correct_counts: group_number -> number of correct answers
        totals: group_number -> question count reported by the source;
            compared with the configuration when given

    Returns:
        Every problem found, in configured group order followed by unknown
        groups. Empty when the submission is valid.

    Example:
        >>> validate_group_scores("N5", "vocabulary", {1: 12, 2: 8, 3: 10, 4: 5})
        []
        >>> [str(i) for i in validate_group_scores("N5", "vocabulary", {1: 13, 2: 8, 3: 10, 4: 5})]
        ['Mondai 1: 13 correct exceeds 12 questions']
    """
    level = Level(level)
    section = SectionType(section)
    issues: list[ValidationIssue] = []

    def issue(code: IssueCode, group_number: Optional[int], message: str) -> None:
        issues.append(ValidationIssue(code, level, section, group_number, message))

    groups = section_groups(level, section)
    for group in groups:
        n = group.number
        if totals is not None and n in totals and totals[n] != group.question_count:
            issue(
                IssueCode.TOTAL_MISMATCH, n,
                f"Mondai {n}: expected {group.question_count} questions, got {totals[n]}",
            )

        if n not in correct_counts:
            issue(IssueCode.MISSING_GROUP, n, f"Missing mondai {n} for {section.value}")
            continue

        correct = correct_counts[n]
        if not _is_count(correct):
            issue(
                IssueCode.NON_INTEGER_COUNT, n,
                f"Mondai {n}: correct count must be an integer, got {correct!r}",
            )
        elif correct < 0:
            issue(IssueCode.NEGATIVE_COUNT, n, f"Mondai {n}: correct count {correct} is negative")
        elif correct > group.question_count:
            issue(
                IssueCode.COUNT_EXCEEDS_QUESTIONS, n,
                f"Mondai {n}: {correct} correct exceeds {group.question_count} questions",
            )

    configured = {g.number for g in groups}
    for n in correct_counts:
        if n not in configured:
            issue(IssueCode.UNKNOWN_GROUP, n, f"Unexpected mondai {n} for {section.value}")

    return issues


# ─────────────────────────────────────────────────────────────────────────────
# Offline Results
# ─────────────────────────────────────────────────────────────────────────────

def validate_offline_tallies(level: Level | str, tallies: Iterable[GroupTally]) -> list[ValidationIssue]:
    """
    Check externally graded rows for a full test.

    Rows are grouped by section and each section is checked like a live
    submission. A group reported twice is flagged once per extra row; the
    first row is the one that is checked further.

    Args:
        level: Level of the test
        tallies: One row per (section, group)

    Returns:
        Every problem found, in section order
    """
    level = Level(level)
    by_section: dict[SectionType, list[GroupTally]] = {s: [] for s in SECTION_ORDER}
    for tally in tallies:
        by_section[tally.section].append(tally)

    issues: list[ValidationIssue] = []
    for section in SECTION_ORDER:
        counts: dict[int, Any] = {}
        totals: dict[int, Any] = {}
        for tally in by_section[section]:
            n = tally.group_number
            if n in counts:
                issues.append(ValidationIssue(
                    IssueCode.DUPLICATE_GROUP, level, section, n,
                    f"Duplicate mondai {n} for {section.value}",
                ))
                continue
            counts[n] = tally.correct
            if tally.total is not None:
                totals[n] = tally.total
        issues.extend(validate_group_scores(level, section, counts, totals=totals))
    return issues


# ─────────────────────────────────────────────────────────────────────────────
# Snapshots
# ─────────────────────────────────────────────────────────────────────────────

def validate_snapshot(level: Level | str, snapshot: QuestionSnapshot) -> list[ValidationIssue]:
    """
    Check that a persisted snapshot still matches the Configuration Table.

    Catches layouts built against an older or different configuration:
    groups out of order or missing, wrong question counts, and question
    ids that appear more than once in a section.

    Args:
        level: Level the snapshot was built for
        snapshot: Persisted layout

    Returns:
        Every problem found, in section order
    """
    level = Level(level)
    issues: list[ValidationIssue] = []

    for section, layout in snapshot.items():
        groups = section_groups(level, section)
        expected_numbers = [g.number for g in groups]
        actual_numbers = [m.group_number for m in layout]

        if actual_numbers != expected_numbers:
            issues.append(ValidationIssue(
                IssueCode.GROUP_ORDER, level, section, None,
                f"{section.value}: expected mondai {expected_numbers}, got {actual_numbers}",
            ))

        configured = {g.number: g for g in groups}
        for mondai in layout:
            group = configured.get(mondai.group_number)
            if group is None:
                issues.append(ValidationIssue(
                    IssueCode.UNKNOWN_GROUP, level, section, mondai.group_number,
                    f"Unexpected mondai {mondai.group_number} for {section.value}",
                ))
            elif len(mondai) != group.question_count:
                issues.append(ValidationIssue(
                    IssueCode.QUESTION_COUNT_MISMATCH, level, section, group.number,
                    f"Mondai {group.number}: expected {group.question_count} questions, "
                    f"got {len(mondai)}",
                ))

        seen = Counter(qid for mondai in layout for qid in mondai.question_ids)
        for qid, count in seen.items():
            if count > 1:
                issues.append(ValidationIssue(
                    IssueCode.DUPLICATE_QUESTION, level, section, None,
                    f"{section.value}: question {qid} appears {count} times",
                ))

    return issues
