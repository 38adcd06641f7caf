"""
Module: scoring.engine

Purpose:
    Weighted scoring, normalization, reference grades and the compound
    pass/fail verdict. Uses the same Configuration Table that built the
    attempt, plus the scoring configuration for scales and minimums.

Key Functions:
    - weighted_group_score(): correct * weight for one group
    - score_section(): Score one section from per-group correct counts
    - score_total(): Sum of normalized section scores
    - evaluate_pass_fail(): Overall threshold AND sectional minimums
    - score_attempt(): All three sections plus verdict
    - score_offline_result(): Same rules for externally graded tallies

Algorithm (per section):
    1. Validate counts against the Configuration Table
    2. raw = Σ correct * weight, max = Σ question_count * weight
    3. normalized = raw / max * scale_max (or the mean over configured
       normalization parts), rounded half-up to 2 decimals
    4. Reference grade from the unweighted correct ratio
    5. Section passes if normalized >= its minimum

Dependencies:
    - jlpt_toolkit.common.mondai: Group structure
    - jlpt_toolkit.common.scoring_config: Scales, bands, minimums
    - scoring.validation: Input checks

Used By:
    - Submission handling and the offline score calculator
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Mapping, Optional, Sequence

from jlpt_toolkit.common.mondai import group_info, section_groups, section_max_raw_score
from jlpt_toolkit.common.scoring_config import (
    GradeBand,
    LevelScoringConfig,
    ScoringConfig,
    default_scoring_config,
)
from jlpt_toolkit.core.models import (
    SECTION_ORDER,
    FailureKind,
    FailureReason,
    GroupTally,
    Level,
    MondaiScore,
    PassFailResult,
    ReferenceGrade,
    SectionScoringResult,
    SectionType,
)

from .validation import ValidationIssue, validate_group_scores, validate_offline_tallies

logger = logging.getLogger(__name__)


class ScoringInputError(ValueError):
    """
    Raised when submitted data cannot be scored.

    Attributes:
        issues: Every validation problem found (may be empty when the
            problem is structural, e.g. a missing section result)
    """

    def __init__(self, message: str, issues: Sequence[ValidationIssue] = ()):
        super().__init__(message)
        self.issues = tuple(issues)


def _round2(value: float) -> float:
    """Round half-up to 2 decimal places."""
    return math.floor(value * 100 + 0.5) / 100


def _level_config(level: Level, config: Optional[ScoringConfig]) -> LevelScoringConfig:
    return (config or default_scoring_config()).level(level)


def _reject(level: Level, what: str, issues: list[ValidationIssue]) -> ScoringInputError:
    logger.warning(
        "Rejected %s %s: %d issue(s), first: %s",
        level.value, what, len(issues), issues[0].message,
    )
    return ScoringInputError(
        f"Cannot score {level.value} {what}: {len(issues)} issue(s): {issues[0].message}",
        issues,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Building Blocks
# ─────────────────────────────────────────────────────────────────────────────

def weighted_group_score(
    level: Level | str,
    section: SectionType | str,
    group_number: int,
    correct: int,
) -> float:
    """
    Weighted score of one group.

    Args:
        level: Level of the attempt
        section: Section of the group
        group_number: Group number
        correct: Correct answers in the group

    Returns:
        correct * weight

    Raises:
        MondaiConfigError: If the group is not configured
        ValueError: If correct is outside [0, question_count]
    """
    group = group_info(level, section, group_number)
    if not 0 <= correct <= group.question_count:
        raise ValueError(
            f"Correct count {correct} out of range for {level} {section} "
            f"問題{group_number} (0-{group.question_count})"
        )
    return correct * group.weight


def reference_grade(correct: int, total: int, bands: Sequence[GradeBand]) -> ReferenceGrade:
    """
    Reference grade from the unweighted correct ratio.

    Args:
        correct: Correct answers
        total: Questions asked
        bands: Grade bands ordered by descending min_ratio

    Returns:
        Highest band whose min_ratio the ratio reaches; the lowest band
        when total is 0

    Example:
        >>> reference_grade(28, 35, bands)
        <ReferenceGrade.A: 'A'>
    """
    if total == 0:
        return bands[-1].grade
    ratio = correct / total
    for band in bands:
        if ratio >= band.min_ratio:
            return band.grade
    return bands[-1].grade


def _normalize(
    mondai_scores: Sequence[MondaiScore],
    raw_score: float,
    max_raw_score: float,
    scale_max: float,
    parts: Sequence[Sequence[int]],
) -> float:
    if not parts:
        return raw_score / max_raw_score * scale_max

    part_scores = []
    for part in parts:
        members = [s for s in mondai_scores if s.group_number in part]
        part_raw = sum(s.weighted_score for s in members)
        part_max = sum(s.max_weighted_score for s in members)
        part_scores.append(part_raw / part_max * scale_max)
    return sum(part_scores) / len(part_scores)


def _score_validated(
    level: Level,
    section: SectionType,
    correct_counts: Mapping[int, int],
    level_config: LevelScoringConfig,
) -> SectionScoringResult:
    """Score counts that already passed validate_group_scores."""
    section_config = level_config.section(section)

    mondai_scores = tuple(
        MondaiScore(
            group_number=group.number,
            correct_count=correct_counts[group.number],
            total_count=group.question_count,
            weighted_score=correct_counts[group.number] * group.weight,
            max_weighted_score=group.max_score,
        )
        for group in section_groups(level, section)
    )

    raw_score = sum(s.weighted_score for s in mondai_scores)
    max_raw_score = section_max_raw_score(level, section)
    normalized = _round2(_normalize(
        mondai_scores,
        raw_score,
        max_raw_score,
        section_config.scale_max,
        section_config.normalization_parts,
    ))

    correct = sum(s.correct_count for s in mondai_scores)
    questions = sum(s.total_count for s in mondai_scores)
    grade = reference_grade(correct, questions, level_config.bands_for(section))

    result = SectionScoringResult(
        level=level,
        section=section,
        raw_score=raw_score,
        max_raw_score=max_raw_score,
        normalized_score=normalized,
        scale_max=section_config.scale_max,
        reference_grade=grade,
        is_passed=normalized >= section_config.passing_minimum,
        correct_count=correct,
        question_count=questions,
        mondai_scores=mondai_scores,
    )
    logger.debug("Scored %r", result)
    return result


# ─────────────────────────────────────────────────────────────────────────────
# Sections
# ─────────────────────────────────────────────────────────────────────────────

def score_section(
    level: Level | str,
    section: SectionType | str,
    correct_counts: Mapping[int, int],
    *,
    config: Optional[ScoringConfig] = None,
) -> SectionScoringResult:
    """
    Score one section.

    Args:
        level: Level of the attempt
        section: Section to score
        correct_counts: group_number -> correct answers, one entry for
            every configured group
        config: Scoring configuration; None uses the bundled default

    Returns:
        SectionScoringResult with a per-group breakdown in configured order

    Raises:
        ScoringInputError: If the counts do not match the configuration;
            carries every problem found

    Example:
        >>> score_section("N5", "vocabulary", {1: 12, 2: 8, 3: 10, 4: 5}).normalized_score
        60.0
    """
    level = Level(level)
    section = SectionType(section)

    issues = validate_group_scores(level, section, correct_counts)
    if issues:
        raise _reject(level, f"{section.value} scores", issues)

    return _score_validated(level, section, correct_counts, _level_config(level, config))


def score_total(section_results: Iterable[SectionScoringResult]) -> float:
    """Sum of normalized section scores, rounded to 2 decimals."""
    return _round2(sum(r.normalized_score for r in section_results))


# ─────────────────────────────────────────────────────────────────────────────
# Pass / Fail
# ─────────────────────────────────────────────────────────────────────────────

def evaluate_pass_fail(
    level: Level | str,
    section_results: Iterable[SectionScoringResult],
    *,
    config: Optional[ScoringConfig] = None,
) -> PassFailResult:
    """
    Compound pass/fail verdict for an attempt.

    The attempt passes only when the total reaches the level's overall
    passing score AND every sectional minimum holds. Sections that belong
    to a combined minimum are judged together against that minimum instead
    of their own. Every failed rule is reported, whatever the total.

    Args:
        level: Level of the attempt
        section_results: Exactly one result per section, all for this level
        config: Scoring configuration; None uses the bundled default

    Returns:
        PassFailResult with results in section order

    Raises:
        ScoringInputError: If a section is missing, repeated, or belongs
            to another level
    """
    level = Level(level)
    level_config = _level_config(level, config)

    by_section: dict[SectionType, SectionScoringResult] = {}
    for result in section_results:
        if result.level != level:
            raise ScoringInputError(
                f"Section result for {result.level.value} cannot be evaluated as {level.value}"
            )
        if result.section in by_section:
            raise ScoringInputError(f"Duplicate result for section {result.section.value}")
        by_section[result.section] = result

    missing = [s.value for s in SECTION_ORDER if s not in by_section]
    if missing:
        raise ScoringInputError(f"Missing section results for {level.value}: {missing}")

    ordered = tuple(by_section[s] for s in SECTION_ORDER)
    total = score_total(ordered)
    max_total = level_config.max_total_score
    reasons: list[FailureReason] = []

    # Overall threshold
    required_total = level_config.overall_passing_score
    if total < required_total:
        reasons.append(FailureReason(
            kind=FailureKind.OVERALL,
            sections=(),
            score=total,
            required=required_total,
            scale_max=max_total,
            message=(
                f"Total score {total:g}/{max_total:g} is below passing threshold "
                f"{required_total:g}/{max_total:g}"
            ),
        ))

    sections_passed: dict[SectionType, bool] = {}

    # Jointly evaluated sections
    for combined in level_config.combined_minimums:
        score = _round2(sum(by_section[s].normalized_score for s in combined.sections))
        scale = level_config.combined_scale_max(combined)
        passed = score >= combined.minimum
        for section in combined.sections:
            sections_passed[section] = passed
        if not passed:
            reasons.append(FailureReason(
                kind=FailureKind.COMBINED,
                sections=combined.sections,
                score=score,
                required=combined.minimum,
                scale_max=scale,
                message=(
                    f"Combined {combined.label} score {score:g}/{scale:g} is below "
                    f"minimum {combined.minimum:g}/{scale:g}"
                ),
            ))

    # Individually evaluated sections
    for section in SECTION_ORDER:
        if level_config.combined_for(section) is not None:
            continue
        result = by_section[section]
        section_config = level_config.section(section)
        passed = result.normalized_score >= section_config.passing_minimum
        sections_passed[section] = passed
        if not passed:
            reasons.append(FailureReason(
                kind=FailureKind.SECTION,
                sections=(section,),
                score=result.normalized_score,
                required=section_config.passing_minimum,
                scale_max=section_config.scale_max,
                message=(
                    f"{section.display_name} score {result.normalized_score:g}/"
                    f"{section_config.scale_max:g} is below minimum "
                    f"{section_config.passing_minimum:g}/{section_config.scale_max:g}"
                ),
            ))

    verdict = PassFailResult(
        level=level,
        overall_passed=not reasons,
        total_score=total,
        max_total_score=max_total,
        section_results=ordered,
        sections_passed={s: sections_passed[s] for s in SECTION_ORDER},
        failure_reasons=tuple(reasons),
    )
    logger.debug("Evaluated %r", verdict)
    return verdict


# ─────────────────────────────────────────────────────────────────────────────
# Full Attempts
# ─────────────────────────────────────────────────────────────────────────────

def score_attempt(
    level: Level | str,
    counts_by_section: Mapping[SectionType | str, Mapping[int, int]],
    *,
    config: Optional[ScoringConfig] = None,
) -> PassFailResult:
    """
    Score all three sections of a live attempt and evaluate the verdict.

    Args:
        level: Level of the attempt
        counts_by_section: section -> (group_number -> correct answers)
        config: Scoring configuration; None uses the bundled default

    Returns:
        PassFailResult

    Raises:
        ScoringInputError: If a section is missing or its counts are invalid
    """
    level = Level(level)
    counts = {SectionType(section): value for section, value in counts_by_section.items()}
    missing = [s.value for s in SECTION_ORDER if s not in counts]
    if missing:
        raise ScoringInputError(f"Missing section counts for {level.value}: {missing}")

    results = [
        score_section(level, section, counts[section], config=config)
        for section in SECTION_ORDER
    ]
    return evaluate_pass_fail(level, results, config=config)


def score_offline_result(
    level: Level | str,
    tallies: Iterable[GroupTally],
    *,
    config: Optional[ScoringConfig] = None,
) -> PassFailResult:
    """
    Score an externally graded test (e.g. a transcribed paper test).

    The rows are validated together, so every problem of the whole test is
    reported at once. Scoring itself uses exactly the same path as live
    attempts; equivalent counts always give identical results.

    Args:
        level: Level of the test
        tallies: One GroupTally per configured group of every section
        config: Scoring configuration; None uses the bundled default

    Returns:
        PassFailResult

    Raises:
        ScoringInputError: If any row is invalid, duplicated or missing
    """
    level = Level(level)
    tallies = list(tallies)

    issues = validate_offline_tallies(level, tallies)
    if issues:
        raise _reject(level, "offline result", issues)

    counts: dict[SectionType, dict[int, int]] = {s: {} for s in SECTION_ORDER}
    for tally in tallies:
        counts[tally.section][tally.group_number] = tally.correct

    level_config = _level_config(level, config)
    results = [
        _score_validated(level, section, counts[section], level_config)
        for section in SECTION_ORDER
    ]
    return evaluate_pass_fail(level, results, config=config)
