"""
Module: common.scoring_config

Purpose:
    Read-only scoring configuration that sits beside the Configuration
    Table: the display scale of every section, reference-grade bands,
    sectional minimums, combined (jointly evaluated) minimums and the
    overall passing score of each level.

    The values are data, not code. A default document ships with the
    package (data/scoring_config.json); deployments that hold the
    authoritative rules load their own file with load_scoring_config(path).

Key Functions:
    - load_scoring_config(): Load, validate and cache a configuration
    - parse_scoring_config(): Build a ScoringConfig from parsed JSON

Key Classes:
    - ScoringConfig / LevelScoringConfig / SectionScoringConfig
    - GradeBand, CombinedMinimum
    - ScoringConfigError

Dependencies:
    - jsonschema (via core.schemas.validator)
    - common.mondai: Group numbers for normalization-part checks

Used By:
    - scoring.engine: Normalization, grading and pass/fail evaluation
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

from jlpt_toolkit.common.mondai import group_numbers
from jlpt_toolkit.core.models import Level, ReferenceGrade, SectionType
from jlpt_toolkit.core.schemas.validator import SchemaValidationError, validate_scoring_config

logger = logging.getLogger(__name__)

DEFAULT_SCORING_CONFIG_PATH = Path(__file__).resolve().parent / "data" / "scoring_config.json"


class ScoringConfigError(ValueError):
    """Raised when a scoring configuration cannot be read or is inconsistent."""

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = errors or []


# ─────────────────────────────────────────────────────────────────────────────
# Typed Configuration
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class GradeBand:
    """Lowest correct-answer ratio that earns a reference grade."""

    grade: ReferenceGrade
    min_ratio: float


@dataclass(frozen=True)
class SectionScoringConfig:
    """
    Scoring rules of one section.

    Attributes:
        scale_max: Top of the display scale the raw score is mapped onto
        passing_minimum: Sectional minimum on that scale
        grade_bands: Section-specific bands, or None to use the level's
        normalization_parts: Group-number subsets normalized separately and
            averaged; empty means the whole section is normalized at once
    """

    scale_max: float
    passing_minimum: float
    grade_bands: Optional[tuple[GradeBand, ...]] = None
    normalization_parts: tuple[tuple[int, ...], ...] = ()


@dataclass(frozen=True, slots=True)
class CombinedMinimum:
    """
    Sections evaluated together against one minimum.

    Members of a combined minimum are not checked against their individual
    passing_minimum when the verdict is evaluated.
    """

    sections: tuple[SectionType, ...]
    minimum: float
    label: str

    def __contains__(self, section: object) -> bool:
        return section in self.sections


@dataclass(frozen=True)
class LevelScoringConfig:
    """
    Scoring rules of one level.

    Attributes:
        level: Level these rules apply to
        overall_passing_score: Minimum total of normalized section scores
        sections: Per-section rules
        grade_bands: Default reference-grade bands, highest first
        combined_minimums: Jointly evaluated section groups
    """

    level: Level
    overall_passing_score: float
    sections: Mapping[SectionType, SectionScoringConfig]
    grade_bands: tuple[GradeBand, ...]
    combined_minimums: tuple[CombinedMinimum, ...] = ()

    def section(self, section: SectionType | str) -> SectionScoringConfig:
        return self.sections[SectionType(section)]

    def bands_for(self, section: SectionType | str) -> tuple[GradeBand, ...]:
        """Grade bands of a section, falling back to the level default."""
        return self.section(section).grade_bands or self.grade_bands

    def combined_for(self, section: SectionType | str) -> Optional[CombinedMinimum]:
        """The combined minimum a section belongs to, if any."""
        section = SectionType(section)
        for combined in self.combined_minimums:
            if section in combined:
                return combined
        return None

    def combined_scale_max(self, combined: CombinedMinimum) -> float:
        return sum(self.section(s).scale_max for s in combined.sections)

    @property
    def max_total_score(self) -> float:
        """Sum of every section's scale maximum (180 for the default rules)."""
        return sum(cfg.scale_max for cfg in self.sections.values())


@dataclass(frozen=True)
class ScoringConfig:
    """Scoring rules for all levels."""

    schema_version: int
    levels: Mapping[Level, LevelScoringConfig]
    source: Optional[Path] = field(default=None, compare=False)

    def level(self, level: Level | str) -> LevelScoringConfig:
        return self.levels[Level(level)]


# ─────────────────────────────────────────────────────────────────────────────
# Parsing
# ─────────────────────────────────────────────────────────────────────────────

def _parse_bands(raw: list[dict[str, Any]], where: str, problems: list[str]) -> tuple[GradeBand, ...]:
    bands = tuple(
        GradeBand(grade=ReferenceGrade(b["grade"]), min_ratio=float(b["min_ratio"]))
        for b in raw
    )
    grades = [b.grade for b in bands]
    if len(set(grades)) != len(grades):
        problems.append(f"{where}: grade bands repeat a grade")
    ratios = [b.min_ratio for b in bands]
    if any(a <= b for a, b in zip(ratios, ratios[1:])):
        problems.append(f"{where}: grade bands must be ordered by descending min_ratio")
    if ratios and ratios[-1] != 0.0:
        problems.append(f"{where}: lowest grade band must start at 0.0")
    return bands


def _parse_section(
    level: Level,
    section: SectionType,
    raw: dict[str, Any],
    problems: list[str],
) -> SectionScoringConfig:
    where = f"{level.value}.{section.value}"
    scale_max = float(raw["scale_max"])
    passing_minimum = float(raw["passing_minimum"])
    if passing_minimum > scale_max:
        problems.append(
            f"{where}: passing_minimum {passing_minimum:g} exceeds scale_max {scale_max:g}"
        )

    bands = None
    if "grade_bands" in raw:
        bands = _parse_bands(raw["grade_bands"], where, problems)

    parts = tuple(tuple(int(n) for n in part) for part in raw.get("normalization_parts", []))
    if parts:
        flat = [n for part in parts for n in part]
        if sorted(flat) != sorted(group_numbers(level, section)) or len(set(flat)) != len(flat):
            problems.append(
                f"{where}: normalization_parts {[list(p) for p in parts]} must cover "
                f"groups {group_numbers(level, section)} exactly once"
            )

    return SectionScoringConfig(
        scale_max=scale_max,
        passing_minimum=passing_minimum,
        grade_bands=bands,
        normalization_parts=parts,
    )


def _parse_level(
    level: Level,
    raw: dict[str, Any],
    default_bands: tuple[GradeBand, ...],
    problems: list[str],
) -> LevelScoringConfig:
    sections = {
        section: _parse_section(level, section, raw["sections"][section.value], problems)
        for section in SectionType
    }

    bands = default_bands
    if "grade_bands" in raw:
        bands = _parse_bands(raw["grade_bands"], level.value, problems)

    combined: list[CombinedMinimum] = []
    seen: set[SectionType] = set()
    for entry in raw.get("combined_minimums", []):
        members = tuple(SectionType(s) for s in entry["sections"])
        overlap = seen.intersection(members)
        if overlap:
            problems.append(
                f"{level.value}: section(s) {sorted(s.value for s in overlap)} "
                "appear in more than one combined minimum"
            )
        seen.update(members)
        label = entry.get("label") or " + ".join(s.display_name for s in members)
        combined.append(CombinedMinimum(sections=members, minimum=float(entry["minimum"]), label=label))

    config = LevelScoringConfig(
        level=level,
        overall_passing_score=float(raw["overall_passing_score"]),
        sections=MappingProxyType(sections),
        grade_bands=bands,
        combined_minimums=tuple(combined),
    )
    if config.overall_passing_score > config.max_total_score:
        problems.append(
            f"{level.value}: overall_passing_score {config.overall_passing_score:g} "
            f"exceeds maximum total {config.max_total_score:g}"
        )
    for entry in config.combined_minimums:
        if entry.minimum > config.combined_scale_max(entry):
            problems.append(
                f"{level.value}: combined minimum {entry.minimum:g} for {entry.label} "
                f"exceeds its scale {config.combined_scale_max(entry):g}"
            )
    return config


def parse_scoring_config(data: dict[str, Any], *, source: Optional[Path] = None) -> ScoringConfig:
    """
    Build a ScoringConfig from a parsed JSON document.

    The document is schema-validated first; semantic problems (band order,
    normalization parts that do not match the Configuration Table, minimums
    above their scale) are then collected and reported together.

    Args:
        data: Parsed JSON document
        source: Where the document came from (for messages only)

    Returns:
        Immutable ScoringConfig

    Raises:
        ScoringConfigError: If the document is invalid
    """
    try:
        validate_scoring_config(data)
    except SchemaValidationError as e:
        where = f" {source}" if source else ""
        raise ScoringConfigError(f"Invalid scoring config{where}: {e}", e.errors) from e

    problems: list[str] = []
    missing_levels = [lvl.value for lvl in Level if lvl.value not in data["levels"]]
    if missing_levels:
        raise ScoringConfigError(
            f"Scoring config is missing levels: {missing_levels}",
            [f"Missing level: {lvl}" for lvl in missing_levels],
        )

    default_bands = _parse_bands(data["grade_bands"], "grade_bands", problems)
    levels = {
        level: _parse_level(level, data["levels"][level.value], default_bands, problems)
        for level in Level
    }

    if problems:
        raise ScoringConfigError(
            f"Scoring config has {len(problems)} problem(s): {problems[0]}",
            problems,
        )

    return ScoringConfig(
        schema_version=int(data["schema_version"]),
        levels=MappingProxyType(levels),
        source=source,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Loading
# ─────────────────────────────────────────────────────────────────────────────

@lru_cache(maxsize=None)
def _load_cached(path: Path) -> ScoringConfig:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ScoringConfigError(f"Cannot read scoring config {path}: {e}") from e

    config = parse_scoring_config(data, source=path)
    logger.info("Loaded scoring config from %s (schema v%d)", path, config.schema_version)
    return config


def load_scoring_config(path: Optional[Path | str] = None) -> ScoringConfig:
    """
    Load a scoring configuration file.

    Each file is read and validated once per process; later calls return
    the same immutable object.

    Args:
        path: JSON file to load; None loads the bundled default

    Returns:
        ScoringConfig

    Raises:
        ScoringConfigError: If the file cannot be read or is invalid

    Example:
        >>> cfg = load_scoring_config()
        >>> cfg.level("N5").overall_passing_score
        80.0
    """
    resolved = Path(path).resolve() if path is not None else DEFAULT_SCORING_CONFIG_PATH
    return _load_cached(resolved)


def default_scoring_config() -> ScoringConfig:
    """The bundled default scoring configuration."""
    return load_scoring_config()
