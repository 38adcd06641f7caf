import copy
import json
import sys
from pathlib import Path

import pytest

# Add src to sys.path so we can import jlpt_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from jlpt_toolkit.common.mondai import section_groups  # noqa: E402
from jlpt_toolkit.common.scoring_config import DEFAULT_SCORING_CONFIG_PATH  # noqa: E402
from jlpt_toolkit.core.models import (  # noqa: E402
    Level,
    ReferenceGrade,
    SectionScoringResult,
    SectionType,
)


# Common test fixtures
@pytest.fixture
def default_config_data() -> dict:
    """A fresh, mutable copy of the bundled scoring configuration document."""
    data = json.loads(DEFAULT_SCORING_CONFIG_PATH.read_text(encoding="utf-8"))
    return copy.deepcopy(data)


@pytest.fixture
def perfect_counts():
    """Factory: every group of a section answered fully correctly."""
    def _make(level, section) -> dict[int, int]:
        return {g.number: g.question_count for g in section_groups(level, section)}
    return _make


@pytest.fixture
def zero_counts():
    """Factory: no correct answers in any group of a section."""
    def _make(level, section) -> dict[int, int]:
        return {g.number: 0 for g in section_groups(level, section)}
    return _make


@pytest.fixture
def section_ids():
    """Factory: unique question ids for a whole section, ordered by group."""
    def _make(level, section, prefix: str = "q") -> list[str]:
        ids = []
        for group in section_groups(level, section):
            ids.extend(f"{prefix}-{group.number}-{i}" for i in range(group.question_count))
        return ids
    return _make


@pytest.fixture
def section_result():
    """Factory: a section result with a chosen normalized score."""
    def _make(level, section, normalized: float, scale_max: float = 60.0) -> SectionScoringResult:
        return SectionScoringResult(
            level=Level(level),
            section=SectionType(section),
            raw_score=normalized,
            max_raw_score=scale_max,
            normalized_score=normalized,
            scale_max=scale_max,
            reference_grade=ReferenceGrade.B,
            is_passed=normalized >= 19,
            correct_count=0,
            question_count=0,
        )
    return _make
