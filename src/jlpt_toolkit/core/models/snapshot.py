"""
Module: snapshot

Purpose:
    Provides the persisted layout of a test attempt: which questions appear
    in which group, in which order. A snapshot is built once when the
    attempt starts and never mutated afterwards.

Key Classes:
    - MondaiQuestions: Ordered question ids for one group
    - QuestionSnapshot: Group layouts for all three sections
    - ShuffledChoice: Mapping of an original choice to its display slot

Dependencies:
    - dataclasses (std)
    - .levels.SectionType

Used By:
    - builder.snapshot: Snapshot construction
    - scoring.grading: Per-group answer counting
    - core.utils.serialization
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

from .levels import SECTION_ORDER, SectionType


@dataclass(frozen=True, slots=True)
class MondaiQuestions:
    """
    Shuffled question ids belonging to one group of one section.

    Attributes:
        group_number: Configured group number
        question_ids: Question ids in display order

    Example:
        >>> m = MondaiQuestions(1, ("q3", "q1", "q2"))
        >>> len(m)
        3
    """

    group_number: int
    question_ids: tuple[str, ...]

    def __post_init__(self) -> None:
        """Normalise question_ids to a tuple."""
        if not isinstance(self.question_ids, tuple):
            object.__setattr__(self, "question_ids", tuple(self.question_ids))

    def __len__(self) -> int:
        return len(self.question_ids)

    def __contains__(self, question_id: object) -> bool:
        return question_id in self.question_ids

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the persisted key names."""
        return {
            "mondaiNumber": self.group_number,
            "questionIds": list(self.question_ids),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MondaiQuestions:
        """Deserialize from the persisted key names."""
        return cls(
            group_number=int(data["mondaiNumber"]),
            question_ids=tuple(data["questionIds"]),
        )


# A section layout is the ordered groups of one section
SectionSnapshot = tuple[MondaiQuestions, ...]


@dataclass(frozen=True)
class QuestionSnapshot:
    """
    Complete question layout for one attempt.

    Attributes:
        vocabulary: Group layouts for the vocabulary section
        grammar_reading: Group layouts for the grammar/reading section
        listening: Group layouts for the listening section

    Invariants:
        - Never mutated after construction; a new attempt gets a new snapshot
    """

    vocabulary: SectionSnapshot
    grammar_reading: SectionSnapshot
    listening: SectionSnapshot

    def __post_init__(self) -> None:
        """Normalise section layouts to tuples."""
        for section in SECTION_ORDER:
            value = getattr(self, section.value)
            if not isinstance(value, tuple):
                object.__setattr__(self, section.value, tuple(value))

    def section(self, section: SectionType | str) -> SectionSnapshot:
        """
        Get the layout of one section.

        Args:
            section: Section type or its string value

        Returns:
            Tuple of MondaiQuestions in group order
        """
        return getattr(self, SectionType(section).value)

    def items(self) -> Iterator[tuple[SectionType, SectionSnapshot]]:
        """Iterate (section, layout) pairs in section order."""
        for section in SECTION_ORDER:
            yield section, self.section(section)

    @property
    def question_count(self) -> int:
        """Total number of questions across all sections."""
        return sum(len(m) for _, layout in self.items() for m in layout)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted JSON shape."""
        return {
            section.value: [m.to_dict() for m in layout]
            for section, layout in self.items()
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> QuestionSnapshot:
        """Deserialize from the persisted JSON shape."""
        return cls(**{
            section.value: tuple(
                MondaiQuestions.from_dict(m) for m in data.get(section.value, [])
            )
            for section in SECTION_ORDER
        })

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        counts = ", ".join(
            f"{section.value}={sum(len(m) for m in layout)}"
            for section, layout in self.items()
        )
        return f"QuestionSnapshot({counts})"


@dataclass(frozen=True, slots=True)
class ShuffledChoice:
    """
    Display slot of one answer choice.

    Attributes:
        choice_number: Original choice number (1-4), compared against the key
        display_position: 1-based position shown to the test-taker
    """

    choice_number: int
    display_position: int
