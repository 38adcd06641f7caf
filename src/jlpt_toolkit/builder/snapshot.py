"""
Module: builder.snapshot

Purpose:
    Builds the persisted question layout of an attempt. Question ids are
    partitioned into groups exactly as the Configuration Table prescribes,
    then shuffled inside each group only. Answer-choice order is derived
    per question from the same attempt seed, so nothing but the seed needs
    to be stored to reproduce what the test-taker saw.

Key Functions:
    - generate_seed(): New attempt seed
    - build_section_snapshot() / build_test_snapshot(): Layout construction
    - shuffled_choice_order() / display_choices() / resolve_choice(): Choices
    - ids_from_snapshot() / group_for_question() / question_at_index()

Algorithm:
    1. Walk the section's groups in configured order
    2. Take the next question_count ids for each group
    3. Shuffle that run with a seed derived from (seed, section, group)
    4. Never move an id across a group boundary

Dependencies:
    - jlpt_toolkit.common.mondai: Group order and counts
    - builder.randomizer: Seeded shuffle

Used By:
    - Attempt creation in the request-handling layer
    - scoring.grading: Group lookups
"""

from __future__ import annotations

import logging
import random
import string
import time
from collections import Counter
from typing import Optional, Sequence

from jlpt_toolkit.common.mondai import section_groups, section_question_count
from jlpt_toolkit.core.models import (
    Level,
    MondaiQuestions,
    QuestionSnapshot,
    SectionSnapshot,
    SectionType,
    ShuffledChoice,
)

from .randomizer import shuffle

logger = logging.getLogger(__name__)

CHOICE_COUNT = 4
_SEED_ALPHABET = string.digits + string.ascii_lowercase
_SEED_SUFFIX_LENGTH = 11


class SnapshotError(ValueError):
    """Error while building a snapshot from caller-supplied ids."""


# ─────────────────────────────────────────────────────────────────────────────
# Seeds
# ─────────────────────────────────────────────────────────────────────────────

def generate_seed() -> str:
    """
    Generate a fresh attempt seed.

    Format: "<epoch milliseconds>-<11 base36 characters>". Effectively
    unique, not secret-grade; the caller persists it with the attempt.

    Example:
        >>> generate_seed()
        '1760860800000-k3j9x0a1bq2'
    """
    millis = int(time.time() * 1000)
    suffix = "".join(random.choices(_SEED_ALPHABET, k=_SEED_SUFFIX_LENGTH))
    return f"{millis}-{suffix}"


# ─────────────────────────────────────────────────────────────────────────────
# Shuffling
# ─────────────────────────────────────────────────────────────────────────────

def shuffle_within_group(question_ids: Sequence[str], seed: str) -> list[str]:
    """
    Shuffle the question ids of one group.

    Args:
        question_ids: Ids of a single group
        seed: Group seed (see build_section_snapshot for its derivation)

    Returns:
        Shuffled list; 0 or 1 ids are returned unchanged
    """
    if len(question_ids) <= 1:
        return list(question_ids)
    return shuffle(question_ids, f"{seed}-mondai")


def shuffled_choice_order(question_id: str, seed: str, choice_count: int = CHOICE_COUNT) -> list[int]:
    """
    Display order of a question's answer choices.

    The permutation depends on both the attempt seed and the question id,
    so every question gets its own reproducible order.

    Args:
        question_id: Question id
        seed: Attempt seed
        choice_count: Number of choices (4 on every JLPT question)

    Returns:
        Permutation of [1..choice_count]; element i is the original choice
        number shown at display position i + 1
    """
    return shuffle(list(range(1, choice_count + 1)), f"{seed}-{question_id}")


def display_choices(question_id: str, seed: str) -> tuple[ShuffledChoice, ...]:
    """Choice layout of a question as (original number, display position) pairs."""
    return tuple(
        ShuffledChoice(choice_number=choice, display_position=position)
        for position, choice in enumerate(shuffled_choice_order(question_id, seed), start=1)
    )


def resolve_choice(question_id: str, seed: str, display_position: int) -> int:
    """
    Map the display position a test-taker picked back to the original choice.

    Grading must always compare the original choice number with the stored
    correct answer, never the display position.

    Args:
        question_id: Question id
        seed: Attempt seed
        display_position: 1-based position on screen

    Returns:
        Original choice number (1-4)

    Raises:
        ValueError: If display_position is outside 1..4
    """
    if not 1 <= display_position <= CHOICE_COUNT:
        raise ValueError(
            f"display_position must be between 1 and {CHOICE_COUNT}: {display_position}"
        )
    return shuffled_choice_order(question_id, seed)[display_position - 1]


# ─────────────────────────────────────────────────────────────────────────────
# Snapshot Construction
# ─────────────────────────────────────────────────────────────────────────────

def build_section_snapshot(
    level: Level | str,
    section: SectionType | str,
    question_ids: Sequence[str],
    seed: str,
) -> SectionSnapshot:
    """
    Build the group layout of one section.

    Args:
        level: Level of the attempt
        section: Section to build
        question_ids: Exactly the section's question count, ordered by group
            (all of group 1 first, then group 2, ...)
        seed: Attempt seed

    Returns:
        Tuple of MondaiQuestions in configured group order

    Raises:
        SnapshotError: If the id count does not match the configuration or
            an id appears twice

    Invariants:
        - len(result[k]) == configured question_count of group k
        - set(result[k].question_ids) == set of the k-th input run
    """
    level = Level(level)
    section = SectionType(section)
    expected = section_question_count(level, section)

    if len(question_ids) != expected:
        raise SnapshotError(
            f"{level.value} {section.value} needs exactly {expected} question ids, "
            f"got {len(question_ids)}"
        )
    if len(set(question_ids)) != len(question_ids):
        duplicates = sorted(qid for qid, n in Counter(question_ids).items() if n > 1)
        raise SnapshotError(
            f"{level.value} {section.value} has duplicate question ids: {duplicates}"
        )

    layout: list[MondaiQuestions] = []
    start = 0
    for group in section_groups(level, section):
        run = question_ids[start:start + group.question_count]
        shuffled = shuffle_within_group(run, f"{seed}-{section.value}-{group.number}")
        layout.append(MondaiQuestions(group_number=group.number, question_ids=tuple(shuffled)))
        start += group.question_count

    logger.debug(
        "Built %s %s snapshot: %d groups, %d questions",
        level.value, section.value, len(layout), start,
    )
    return tuple(layout)


def build_test_snapshot(
    level: Level | str,
    vocabulary_ids: Sequence[str],
    grammar_reading_ids: Sequence[str],
    listening_ids: Sequence[str],
    seed: str,
) -> QuestionSnapshot:
    """
    Build the layout of a full attempt.

    Args:
        level: Level of the attempt
        vocabulary_ids: Vocabulary ids ordered by group
        grammar_reading_ids: Grammar/reading ids ordered by group
        listening_ids: Listening ids ordered by group
        seed: Attempt seed

    Returns:
        QuestionSnapshot for all three sections

    Raises:
        SnapshotError: If any section's ids do not fit the configuration
    """
    return QuestionSnapshot(
        vocabulary=build_section_snapshot(level, SectionType.VOCABULARY, vocabulary_ids, seed),
        grammar_reading=build_section_snapshot(
            level, SectionType.GRAMMAR_READING, grammar_reading_ids, seed
        ),
        listening=build_section_snapshot(level, SectionType.LISTENING, listening_ids, seed),
    )


# ─────────────────────────────────────────────────────────────────────────────
# Queries
# ─────────────────────────────────────────────────────────────────────────────

def ids_from_snapshot(section_snapshot: Sequence[MondaiQuestions]) -> list[str]:
    """All question ids of a section layout, in display order."""
    return [qid for mondai in section_snapshot for qid in mondai.question_ids]


def group_for_question(section_snapshot: Sequence[MondaiQuestions], question_id: str) -> Optional[int]:
    """
    Find the group a question was placed in.

    Returns:
        Group number, or None if the question is not in this section
    """
    for mondai in section_snapshot:
        if question_id in mondai.question_ids:
            return mondai.group_number
    return None


def question_at_index(
    section_snapshot: Sequence[MondaiQuestions],
    index: int,
) -> Optional[tuple[str, int]]:
    """
    Question at a 0-based position of the section.

    Returns:
        (question_id, group_number), or None when index is out of range
    """
    if index < 0:
        return None
    offset = 0
    for mondai in section_snapshot:
        if index < offset + len(mondai.question_ids):
            return mondai.question_ids[index - offset], mondai.group_number
        offset += len(mondai.question_ids)
    return None
