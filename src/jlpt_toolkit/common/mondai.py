"""
Module: common.mondai

Purpose:
    The Configuration Table: for every level and section, the ordered
    question groups ("mondai") with their point weight and fixed question
    count. These values encode the official test structure and are the
    single source of truth for snapshot building and scoring.

Key Functions:
    - group_info(): Look up one group (raises MondaiConfigError)
    - group_weight() / group_question_count() / group_max_score()
    - section_groups(): Ordered groups of a section
    - section_max_raw_score(): Σ weight * question_count
    - section_question_count() / level_question_count()

Dependencies:
    - types.MappingProxyType (std)
    - jlpt_toolkit.core.models

Used By:
    - builder.snapshot: Partitioning question ids into groups
    - scoring.engine: Weighted scoring
    - scoring.validation: Cross-checking submissions

The table is built once at import and exposed through read-only mappings
over tuples.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from jlpt_toolkit.core.models import Level, QuestionGroupInfo, SectionType

__all__ = [
    "MONDAI_CONFIG",
    "MondaiConfigError",
    "LevelConfig",
    "group_info",
    "group_weight",
    "group_question_count",
    "group_max_score",
    "group_numbers",
    "is_valid_group",
    "section_groups",
    "section_max_raw_score",
    "section_question_count",
    "level_question_count",
]


class MondaiConfigError(LookupError):
    """Raised when a level/section/group is absent from the Configuration Table."""

    def __init__(self, level: Level | str, section: SectionType | str, group_number: int):
        self.level = str(level)
        self.section = str(section)
        self.group_number = group_number
        super().__init__(
            f"Invalid mondai configuration: {self.level} {self.section} 問題{group_number}"
        )


LevelConfig = Mapping[SectionType, tuple[QuestionGroupInfo, ...]]

G = QuestionGroupInfo


def _level(
    vocabulary: list[QuestionGroupInfo],
    grammar_reading: list[QuestionGroupInfo],
    listening: list[QuestionGroupInfo],
) -> LevelConfig:
    return MappingProxyType({
        SectionType.VOCABULARY: tuple(vocabulary),
        SectionType.GRAMMAR_READING: tuple(grammar_reading),
        SectionType.LISTENING: tuple(listening),
    })


# ─────────────────────────────────────────────────────────────────────────────
# Configuration Table
# ─────────────────────────────────────────────────────────────────────────────

MONDAI_CONFIG: Mapping[Level, LevelConfig] = MappingProxyType({
    Level.N5: _level(
        vocabulary=[
            G(1, 1, 12),    # Kanji reading
            G(2, 1, 8),     # Kanji writing
            G(3, 1, 10),    # Context usage
            G(4, 1, 5),     # Paraphrase
        ],
        grammar_reading=[
            G(1, 1, 16),    # Grammar form
            G(2, 1, 5),     # Sentence composition
            G(3, 1, 5),     # Text grammar
            G(4, 4, 3),     # Short reading
            G(5, 4, 2),     # Mid reading
            G(6, 4, 1),     # Information retrieval
        ],
        listening=[
            G(1, 2, 7),     # Task-based
            G(2, 2.5, 6),   # Point comprehension
            G(3, 3, 5),     # Utterance expressions
            G(4, 2.5, 6),   # Quick response
        ],
    ),
    Level.N4: _level(
        vocabulary=[
            G(1, 1, 9),     # Kanji reading
            G(2, 1, 6),     # Kanji writing
            G(3, 1, 10),    # Context usage
            G(4, 2, 5),     # Paraphrase
            G(5, 2, 5),     # Word usage
        ],
        grammar_reading=[
            G(1, 1, 15),    # Grammar form
            G(2, 1, 5),     # Sentence composition
            G(3, 1, 5),     # Text grammar
            G(4, 7, 4),     # Short reading
            G(5, 7, 4),     # Mid reading
            G(6, 9, 2),     # Information retrieval
        ],
        listening=[
            G(1, 2, 8),     # Task-based
            G(2, 2, 7),     # Point comprehension
            G(3, 4, 5),     # Utterance expressions
            G(4, 1.5, 8),   # Quick response
        ],
    ),
    Level.N3: _level(
        vocabulary=[
            G(1, 1, 8),     # Kanji reading
            G(2, 1, 6),     # Kanji writing
            G(3, 1, 11),    # Context usage
            G(4, 1, 5),     # Paraphrase
            G(5, 1, 5),     # Word usage
        ],
        grammar_reading=[
            G(1, 1, 13),    # Grammar form
            G(2, 1, 5),     # Sentence composition
            G(3, 1, 5),     # Text grammar
            G(4, 3, 4),     # Short reading
            G(5, 4, 6),     # Mid reading
            G(6, 4, 4),     # Long reading
            G(7, 4, 2),     # Information retrieval
        ],
        listening=[
            G(1, 2, 6),     # Task-based
            G(2, 2, 6),     # Point comprehension
            G(3, 2, 4),     # Utterance expressions
            G(4, 2, 9),     # Quick response
        ],
    ),
    Level.N2: _level(
        vocabulary=[
            G(1, 1, 5),     # Kanji reading
            G(2, 1, 5),     # Kanji writing
            G(3, 1, 5),     # Word formation
            G(4, 1, 7),     # Context usage
            G(5, 1, 5),     # Paraphrase
            G(6, 2, 5),     # Word usage
            G(7, 1, 12),    # Grammar form
            G(8, 1, 5),     # Sentence composition
            G(9, 1, 5),     # Text grammar
        ],
        grammar_reading=[
            G(10, 2, 5),    # Short reading
            G(11, 2, 9),    # Mid reading
            G(12, 3, 2),    # Integrated comprehension
            G(13, 4, 3),    # Thematic comprehension
            G(14, 4, 2),    # Information retrieval
        ],
        listening=[
            G(1, 2, 5),     # Task-based
            G(2, 2, 6),     # Point comprehension
            G(3, 2, 5),     # Utterance expressions
            G(4, 1, 12),    # Quick response
            G(5, 3, 4),     # Integrated comprehension
        ],
    ),
    Level.N1: _level(
        vocabulary=[
            G(1, 1, 6),     # Kanji reading
            G(2, 1, 7),     # Context usage
            G(3, 1, 6),     # Paraphrase
            G(4, 1, 6),     # Word usage
            G(5, 1, 10),    # Grammar form
            G(6, 2, 5),     # Sentence composition
            G(7, 1, 5),     # Text grammar
        ],
        grammar_reading=[
            G(8, 1, 4),     # Short reading
            G(9, 1, 9),     # Mid reading
            G(10, 2, 4),    # Long reading
            G(11, 2, 2),    # Comparison
            G(12, 3, 4),    # Integrated comprehension
            G(13, 4, 2),    # Information retrieval
        ],
        listening=[
            G(1, 2, 6),     # Task-based
            G(2, 2, 7),     # Point comprehension
            G(3, 2, 6),     # Utterance expressions
            G(4, 1, 14),    # Quick response
            G(5, 3, 4),     # Integrated comprehension
        ],
    ),
})

del G


# ─────────────────────────────────────────────────────────────────────────────
# Lookups
# ─────────────────────────────────────────────────────────────────────────────

def section_groups(level: Level | str, section: SectionType | str) -> tuple[QuestionGroupInfo, ...]:
    """
    Get the ordered groups of a section.

    Args:
        level: Level (enum or "N1".."N5")
        section: Section (enum or string value)

    Returns:
        Tuple of QuestionGroupInfo in configured order

    Raises:
        ValueError: If level or section is not a known value
    """
    return MONDAI_CONFIG[Level(level)][SectionType(section)]


def group_info(level: Level | str, section: SectionType | str, group_number: int) -> QuestionGroupInfo:
    """
    Look up one group.

    Raises:
        MondaiConfigError: If the group is not configured for this section.
            An unknown group means content was authored against the wrong
            configuration; it must never be scored as zero.

    Example:
        >>> group_info("N5", "listening", 2).weight
        2.5
    """
    for group in section_groups(level, section):
        if group.number == group_number:
            return group
    raise MondaiConfigError(level, section, group_number)


def group_weight(level: Level | str, section: SectionType | str, group_number: int) -> float:
    """Weight of a group. Raises MondaiConfigError if unknown."""
    return group_info(level, section, group_number).weight


def group_question_count(level: Level | str, section: SectionType | str, group_number: int) -> int:
    """Question count of a group. Raises MondaiConfigError if unknown."""
    return group_info(level, section, group_number).question_count


def group_max_score(level: Level | str, section: SectionType | str, group_number: int) -> float:
    """weight * question_count of a group. Raises MondaiConfigError if unknown."""
    return group_info(level, section, group_number).max_score


def group_numbers(level: Level | str, section: SectionType | str) -> list[int]:
    """Configured group numbers of a section, in order."""
    return [g.number for g in section_groups(level, section)]


def is_valid_group(level: Level | str, section: SectionType | str, group_number: int) -> bool:
    """Check whether a group exists in a section."""
    return any(g.number == group_number for g in section_groups(level, section))


def section_question_count(level: Level | str, section: SectionType | str) -> int:
    """Total number of questions in a section."""
    return sum(g.question_count for g in section_groups(level, section))


def level_question_count(level: Level | str) -> int:
    """Total number of questions across all sections of a level."""
    return sum(section_question_count(level, section) for section in SectionType)


def section_max_raw_score(level: Level | str, section: SectionType | str) -> float:
    """Maximum raw score of a section: Σ weight * question_count."""
    return sum(g.max_score for g in section_groups(level, section))
