"""
Module: levels

Purpose:
    Enumerations for the fixed axes of the exam: proficiency level,
    section type and reference grade. These are the keys of every
    configuration table in the toolkit.

Key Classes:
    - Level: N1 (most advanced) to N5 (least advanced)
    - SectionType: vocabulary, grammar_reading, listening
    - ReferenceGrade: A/B/C performance bands

Dependencies:
    - enum (std)

Used By:
    - common.mondai: Configuration Table keys
    - common.scoring_config: Scoring configuration keys
    - builder.snapshot, scoring.engine
"""

from __future__ import annotations

from enum import Enum


class Level(str, Enum):
    """Proficiency level, declared from most advanced to least advanced."""
    N1 = "N1"
    N2 = "N2"
    N3 = "N3"
    N4 = "N4"
    N5 = "N5"

    def __str__(self) -> str:
        return self.value


class SectionType(str, Enum):
    """One of the three test sections present at every level."""
    VOCABULARY = "vocabulary"            # 文字・語彙
    GRAMMAR_READING = "grammar_reading"  # 文法・読解
    LISTENING = "listening"              # 聴解

    def __str__(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        """Human-readable name used in failure messages."""
        return _SECTION_DISPLAY_NAMES[self]


_SECTION_DISPLAY_NAMES = {
    SectionType.VOCABULARY: "Vocabulary",
    SectionType.GRAMMAR_READING: "Grammar/Reading",
    SectionType.LISTENING: "Listening",
}


class ReferenceGrade(str, Enum):
    """Coarse performance band within a section (distinct from pass/fail)."""
    A = "A"
    B = "B"
    C = "C"

    def __str__(self) -> str:
        return self.value


# Section order used for snapshots and full-attempt scoring
SECTION_ORDER: tuple[SectionType, ...] = (
    SectionType.VOCABULARY,
    SectionType.GRAMMAR_READING,
    SectionType.LISTENING,
)
