"""
Unit Tests for the Seeded Randomizer

Tests for hash_seed, SeededRandom and shuffle.
"""

from collections import Counter

import pytest

from jlpt_toolkit.builder.randomizer import SeededRandom, _to_int32, hash_seed, shuffle


class TestHashSeed:
    """Tests for the 32-bit rolling hash."""

    def test_hash_when_empty_then_zero(self):
        assert hash_seed("") == 0

    def test_hash_when_short_string_then_rolling_value(self):
        assert hash_seed("a") == 97
        assert hash_seed("ab") == 97 * 31 + 98

    def test_hash_when_long_string_then_fits_32_bits(self):
        h = hash_seed("1760860800000-k3j9x0a1bq2-vocabulary-1-mondai" * 10)
        assert 0 <= h <= 2**31

    def test_hash_when_non_ascii_then_uses_utf16_code_units(self):
        # U+1F600 is a surrogate pair: two code units
        assert hash_seed("😀") == 0xD83D * 31 + 0xDE00
        assert hash_seed("問") == ord("問")

    def test_to_int32_when_overflowing_then_wraps_signed(self):
        assert _to_int32(2**31) == -(2**31)
        assert _to_int32(2**32 - 1) == -1
        assert _to_int32(2**32 + 5) == 5


class TestSeededRandom:
    """Tests for SeededRandom."""

    def test_next_when_first_call_then_lcg_step_from_hash(self):
        rng = SeededRandom("")
        assert rng.next() == 49297 / 233280

    def test_next_when_called_repeatedly_then_values_in_unit_interval(self):
        rng = SeededRandom("range-check")
        for _ in range(1000):
            assert 0.0 <= rng.next() < 1.0

    def test_next_when_same_seed_then_same_sequence(self):
        a, b = SeededRandom("same"), SeededRandom("same")
        assert [a.next() for _ in range(20)] == [b.next() for _ in range(20)]


class TestShuffle:
    """Tests for shuffle()."""

    def test_shuffle_when_known_seed_then_known_permutation(self):
        assert shuffle([1, 2], "") == [2, 1]
        assert shuffle([1, 2, 3], "") == [3, 2, 1]

    @pytest.mark.parametrize("seed", ["a", "seed-1", "1760860800000-abc", "問題"])
    def test_shuffle_when_any_seed_then_permutation(self, seed):
        items = list(range(25))
        result = shuffle(items, seed)
        assert sorted(result) == items
        assert len(result) == len(items)

    def test_shuffle_when_duplicates_then_multiset_preserved(self):
        items = ["x", "x", "y", "z", "z", "z"]
        assert Counter(shuffle(items, "dup")) == Counter(items)

    def test_shuffle_when_called_twice_then_identical(self):
        items = [f"q{i}" for i in range(16)]
        assert shuffle(items, "repeat") == shuffle(items, "repeat")

    def test_shuffle_when_input_given_then_not_modified(self):
        items = [1, 2, 3, 4]
        shuffle(items, "x")
        assert items == [1, 2, 3, 4]

    def test_shuffle_when_empty_or_single_then_unchanged(self):
        assert shuffle([], "x") == []
        assert shuffle(["only"], "x") == ["only"]

    def test_shuffle_when_different_seeds_then_orders_vary(self):
        items = list(range(10))
        orders = {tuple(shuffle(items, f"seed-{i}")) for i in range(20)}
        assert len(orders) > 1
