"""
Tests for seed-based variability in snapshot building.

Verifies:
1. Same seed produces identical snapshots (determinism)
2. Different seeds produce variety
3. Every position of a group is reached across many seeds (distribution)
"""

from collections import Counter

import pytest

from jlpt_toolkit.builder import build_test_snapshot, generate_seed, shuffled_choice_order
from jlpt_toolkit.builder.snapshot import build_section_snapshot
from jlpt_toolkit.core.utils import snapshot_from_json, snapshot_to_json


@pytest.fixture
def n3_ids(section_ids):
    return {
        "vocabulary_ids": section_ids("N3", "vocabulary", "v"),
        "grammar_reading_ids": section_ids("N3", "grammar_reading", "g"),
        "listening_ids": section_ids("N3", "listening", "l"),
    }


class TestSeedDeterminism:
    """Tests for deterministic snapshots with the same seed."""

    def test_snapshot_when_same_seed_then_identical(self, n3_ids):
        seed = generate_seed()
        assert build_test_snapshot("N3", seed=seed, **n3_ids) == build_test_snapshot("N3", seed=seed, **n3_ids)

    def test_snapshot_when_persisted_and_rebuilt_then_matches(self, n3_ids):
        # Arrange: an attempt is created and its snapshot persisted as JSON
        seed = "1760860800000-k3j9x0a1bq2"
        stored = snapshot_to_json(build_test_snapshot("N3", seed=seed, **n3_ids))

        # Act: later the attempt is rebuilt for review from the same seed
        rebuilt = build_test_snapshot("N3", seed=seed, **n3_ids)

        # Assert
        assert snapshot_from_json(stored) == rebuilt


class TestSeedVariety:
    """Tests for variety across different seeds."""

    def test_snapshot_when_different_seeds_then_layouts_vary(self, section_ids):
        ids = section_ids("N5", "vocabulary")
        layouts = {
            build_section_snapshot("N5", "vocabulary", ids, f"seed-{i}")
            for i in range(10)
        }
        assert len(layouts) > 1

    def test_choices_when_many_questions_then_several_orders_seen(self):
        orders = {tuple(shuffled_choice_order(f"q{i}", "one-seed")) for i in range(40)}
        assert len(orders) > 3


class TestSeedDistribution:
    """Tests that shuffling reaches every position."""

    def test_distribution_when_many_seeds_then_every_id_leads_group(self, section_ids):
        ids = section_ids("N5", "listening")
        first_of_group1 = Counter(
            build_section_snapshot("N5", "listening", ids, f"dist-{i}")[0].question_ids[0]
            for i in range(400)
        )
        assert set(first_of_group1) == set(ids[:7])
