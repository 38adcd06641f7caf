"""
Unit Tests for the Snapshot Builder

Tests for seeds, group shuffling, choice order and snapshot queries.
"""

import re

import pytest

from jlpt_toolkit.builder import (
    SnapshotError,
    build_section_snapshot,
    build_test_snapshot,
    display_choices,
    generate_seed,
    group_for_question,
    ids_from_snapshot,
    question_at_index,
    resolve_choice,
    shuffle,
    shuffle_within_group,
    shuffled_choice_order,
)
from jlpt_toolkit.common.mondai import level_question_count, section_groups
from jlpt_toolkit.core.models import Level, SectionType


ALL_SECTIONS = [(level, section) for level in Level for section in SectionType]


class TestGenerateSeed:
    """Tests for generate_seed()."""

    def test_seed_when_generated_then_millis_dash_base36(self):
        assert re.fullmatch(r"\d{13}-[0-9a-z]{11}", generate_seed())

    def test_seed_when_generated_twice_then_differs(self):
        assert generate_seed() != generate_seed()


class TestShuffleWithinGroup:
    """Tests for shuffle_within_group()."""

    def test_group_when_single_id_then_unchanged(self):
        assert shuffle_within_group(["q1"], "s") == ["q1"]
        assert shuffle_within_group([], "s") == []

    def test_group_when_several_ids_then_uses_mondai_seed(self):
        ids = [f"q{i}" for i in range(8)]
        assert shuffle_within_group(ids, "s") == shuffle(ids, "s-mondai")


class TestChoiceOrder:
    """Tests for choice shuffling and resolution."""

    @pytest.mark.parametrize("qid", ["q1", "q2", "abc-123", "問題1"])
    def test_order_when_any_question_then_permutation_of_four(self, qid):
        assert sorted(shuffled_choice_order(qid, "seed")) == [1, 2, 3, 4]

    def test_order_when_same_inputs_then_deterministic(self):
        assert shuffled_choice_order("q1", "seed") == shuffled_choice_order("q1", "seed")

    def test_order_when_derived_seed_then_seed_dash_question(self):
        assert shuffled_choice_order("q9", "s") == shuffle([1, 2, 3, 4], "s-q9")

    def test_display_when_built_then_positions_one_to_four(self):
        choices = display_choices("q1", "seed")
        assert [c.display_position for c in choices] == [1, 2, 3, 4]
        assert sorted(c.choice_number for c in choices) == [1, 2, 3, 4]

    def test_resolve_when_position_then_maps_back_to_original(self):
        for choice in display_choices("q7", "attempt"):
            assert resolve_choice("q7", "attempt", choice.display_position) == choice.choice_number

    @pytest.mark.parametrize("position", [0, 5, -1])
    def test_resolve_when_position_out_of_range_then_raises_error(self, position):
        with pytest.raises(ValueError, match="display_position"):
            resolve_choice("q1", "seed", position)


class TestBuildSectionSnapshot:
    """Tests for build_section_snapshot()."""

    @pytest.mark.parametrize("level,section", ALL_SECTIONS)
    def test_build_when_valid_ids_then_runs_match_configured_counts(self, level, section, section_ids):
        # Arrange
        ids = section_ids(level, section)
        groups = section_groups(level, section)

        # Act
        layout = build_section_snapshot(level, section, ids, "seed-42")

        # Assert
        assert [m.group_number for m in layout] == [g.number for g in groups]
        start = 0
        for mondai, group in zip(layout, groups):
            run = ids[start:start + group.question_count]
            assert len(mondai) == group.question_count
            assert sorted(mondai.question_ids) == sorted(run)
            start += group.question_count

    @pytest.mark.parametrize("level,section", ALL_SECTIONS)
    def test_build_when_flattened_then_set_equal_to_input(self, level, section, section_ids):
        ids = section_ids(level, section)
        layout = build_section_snapshot(level, section, ids, "roundtrip")
        assert set(ids_from_snapshot(layout)) == set(ids)
        assert len(ids_from_snapshot(layout)) == len(ids)

    def test_build_when_same_seed_then_identical_layout(self, section_ids):
        ids = section_ids("N3", "grammar_reading")
        assert build_section_snapshot("N3", "grammar_reading", ids, "x") == \
            build_section_snapshot("N3", "grammar_reading", ids, "x")

    def test_build_when_group_seed_then_section_and_group_in_derivation(self, section_ids):
        ids = section_ids("N5", "vocabulary")
        layout = build_section_snapshot("N5", "vocabulary", ids, "abc")
        assert list(layout[0].question_ids) == shuffle(ids[:12], "abc-vocabulary-1-mondai")

    def test_build_when_too_few_ids_then_raises_snapshot_error(self, section_ids):
        ids = section_ids("N5", "listening")[:-1]
        with pytest.raises(SnapshotError, match="exactly 24"):
            build_section_snapshot("N5", "listening", ids, "s")

    def test_build_when_duplicate_ids_then_raises_snapshot_error(self, section_ids):
        ids = section_ids("N5", "listening")
        ids[-1] = ids[0]
        with pytest.raises(SnapshotError, match="duplicate"):
            build_section_snapshot("N5", "listening", ids, "s")

    def test_build_when_snapshot_error_then_is_value_error(self):
        with pytest.raises(ValueError):
            build_section_snapshot("N5", "vocabulary", [], "s")


class TestBuildTestSnapshot:
    """Tests for build_test_snapshot()."""

    def test_build_when_all_sections_then_question_count_matches_level(self, section_ids):
        snap = build_test_snapshot(
            "N4",
            section_ids("N4", "vocabulary", "v"),
            section_ids("N4", "grammar_reading", "g"),
            section_ids("N4", "listening", "l"),
            "full",
        )
        assert snap.question_count == level_question_count("N4") == 98
        assert all(qid.startswith("l-") for qid in ids_from_snapshot(snap.listening))


class TestSnapshotQueries:
    """Tests for group_for_question() and question_at_index()."""

    @pytest.fixture
    def layout(self, section_ids):
        return build_section_snapshot("N5", "vocabulary", section_ids("N5", "vocabulary"), "q")

    def test_group_when_present_then_returns_group_number(self, layout):
        for mondai in layout:
            for qid in mondai.question_ids:
                assert group_for_question(layout, qid) == mondai.group_number

    def test_group_when_absent_then_none(self, layout):
        assert group_for_question(layout, "nope") is None

    def test_index_when_in_range_then_matches_flattened_order(self, layout):
        flat = ids_from_snapshot(layout)
        assert question_at_index(layout, 0) == (flat[0], 1)
        assert question_at_index(layout, 12) == (flat[12], 2)
        assert question_at_index(layout, 34) == (flat[34], 4)

    @pytest.mark.parametrize("index", [-1, 35, 100])
    def test_index_when_out_of_range_then_none(self, layout, index):
        assert question_at_index(layout, index) is None
