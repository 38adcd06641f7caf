"""Configuration shared by the builder and the scoring engine."""

from __future__ import annotations

from .mondai import (
    MONDAI_CONFIG,
    MondaiConfigError,
    group_info,
    group_weight,
    group_question_count,
    group_max_score,
    group_numbers,
    is_valid_group,
    section_groups,
    section_max_raw_score,
    section_question_count,
    level_question_count,
)
from .scoring_config import (
    ScoringConfig,
    LevelScoringConfig,
    SectionScoringConfig,
    GradeBand,
    CombinedMinimum,
    ScoringConfigError,
    load_scoring_config,
    parse_scoring_config,
    default_scoring_config,
)

__all__ = [
    # mondai
    "MONDAI_CONFIG",
    "MondaiConfigError",
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
    # scoring config
    "ScoringConfig",
    "LevelScoringConfig",
    "SectionScoringConfig",
    "GradeBand",
    "CombinedMinimum",
    "ScoringConfigError",
    "load_scoring_config",
    "parse_scoring_config",
    "default_scoring_config",
]
