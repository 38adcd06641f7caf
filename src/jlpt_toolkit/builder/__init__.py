"""
Module: builder

Purpose:
    Builds the reproducible layout of a test attempt: questions shuffled
    within their groups and answer choices shuffled per question, all
    derived from one attempt seed.

Key Functions:
    - generate_seed(): New attempt seed
    - build_test_snapshot(): Layout for all three sections
    - resolve_choice(): Display position back to the original choice

Key Classes:
    - SeededRandom: Deterministic generator for one shuffle
    - SnapshotError: Ids do not fit the Configuration Table

Dependencies:
    - jlpt_toolkit.common.mondai: Group structure
    - jlpt_toolkit.core.models: Snapshot models

Used By:
    - Attempt creation and review in the request-handling layer
"""

from .randomizer import SeededRandom, hash_seed, shuffle
from .snapshot import (
    CHOICE_COUNT,
    SnapshotError,
    generate_seed,
    shuffle_within_group,
    shuffled_choice_order,
    display_choices,
    resolve_choice,
    build_section_snapshot,
    build_test_snapshot,
    ids_from_snapshot,
    group_for_question,
    question_at_index,
)

__all__ = [
    # Randomizer
    "SeededRandom",
    "hash_seed",
    "shuffle",
    # Snapshot
    "CHOICE_COUNT",
    "SnapshotError",
    "generate_seed",
    "shuffle_within_group",
    "shuffled_choice_order",
    "display_choices",
    "resolve_choice",
    "build_section_snapshot",
    "build_test_snapshot",
    "ids_from_snapshot",
    "group_for_question",
    "question_at_index",
]
