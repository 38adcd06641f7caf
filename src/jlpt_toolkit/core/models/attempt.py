"""
Module: attempt

Purpose:
    Lifecycle of one test attempt as seen by the caller that owns it.
    The engine never changes this state on its own and has no notion of
    time; timeouts that abandon an attempt are enforced by the caller.

Key Classes:
    - AttemptStatus: created → section_submitted → fully_submitted →
      scored → finalized, plus abandoned
    - AttemptProgress: Immutable progress record; each transition returns
      a new instance

Dependencies:
    - dataclasses (std)
    - .levels.SectionType

Used By:
    - Request-handling layers that drive an attempt through scoring
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import FrozenSet

from .levels import SECTION_ORDER, SectionType


class AttemptStatus(str, Enum):
    CREATED = "created"
    SECTION_SUBMITTED = "section_submitted"
    FULLY_SUBMITTED = "fully_submitted"
    SCORED = "scored"
    FINALIZED = "finalized"
    ABANDONED = "abandoned"

    def __str__(self) -> str:
        return self.value


class InvalidTransitionError(RuntimeError):
    """Raised when an attempt is moved to a state it cannot reach."""


_ABANDONABLE = frozenset({
    AttemptStatus.CREATED,
    AttemptStatus.SECTION_SUBMITTED,
    AttemptStatus.FULLY_SUBMITTED,
})


@dataclass(frozen=True)
class AttemptProgress:
    """
    Progress of one attempt (immutable).

    Attributes:
        status: Current lifecycle state
        submitted_sections: Sections with a terminal submission

    Example:
        >>> p = AttemptProgress().submit_section(SectionType.VOCABULARY)
        >>> p.status
        <AttemptStatus.SECTION_SUBMITTED: 'section_submitted'>
    """

    status: AttemptStatus = AttemptStatus.CREATED
    submitted_sections: FrozenSet[SectionType] = frozenset()

    @property
    def pending_sections(self) -> tuple[SectionType, ...]:
        """Sections still waiting for their submission, in section order."""
        return tuple(s for s in SECTION_ORDER if s not in self.submitted_sections)

    @property
    def is_terminal(self) -> bool:
        return self.status in (AttemptStatus.FINALIZED, AttemptStatus.ABANDONED)

    def submit_section(self, section: SectionType | str) -> AttemptProgress:
        """
        Record the terminal submission of one section.

        Args:
            section: Section being submitted

        Returns:
            New progress; FULLY_SUBMITTED once every section is in

        Raises:
            InvalidTransitionError: If the attempt no longer accepts
                submissions or the section was already submitted
        """
        section = SectionType(section)
        if self.status not in (AttemptStatus.CREATED, AttemptStatus.SECTION_SUBMITTED):
            raise InvalidTransitionError(
                f"Cannot submit {section.value} while attempt is {self.status.value}"
            )
        if section in self.submitted_sections:
            raise InvalidTransitionError(f"Section {section.value} was already submitted")

        submitted = self.submitted_sections | {section}
        status = (
            AttemptStatus.FULLY_SUBMITTED
            if len(submitted) == len(SECTION_ORDER)
            else AttemptStatus.SECTION_SUBMITTED
        )
        return replace(self, status=status, submitted_sections=frozenset(submitted))

    def mark_scored(self) -> AttemptProgress:
        """Move a fully submitted attempt to SCORED."""
        return self._advance(AttemptStatus.FULLY_SUBMITTED, AttemptStatus.SCORED)

    def finalize(self) -> AttemptProgress:
        """Move a scored attempt to FINALIZED."""
        return self._advance(AttemptStatus.SCORED, AttemptStatus.FINALIZED)

    def abandon(self) -> AttemptProgress:
        """
        Abandon an attempt that has not been scored yet.

        Raises:
            InvalidTransitionError: If the attempt is scored or terminal
        """
        if self.status not in _ABANDONABLE:
            raise InvalidTransitionError(
                f"Cannot abandon attempt while it is {self.status.value}"
            )
        return replace(self, status=AttemptStatus.ABANDONED)

    def _advance(self, expected: AttemptStatus, target: AttemptStatus) -> AttemptProgress:
        if self.status != expected:
            raise InvalidTransitionError(
                f"Cannot move attempt from {self.status.value} to {target.value}"
            )
        return replace(self, status=target)
