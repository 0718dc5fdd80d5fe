"""
Tests for the seeded RandomSource.

Tests the pinned mulberry32 stream, range helpers, shuffle semantics,
large-sample convergence and seed validation.
"""

import numpy as np
import pytest

from carrierops.errors import InvalidConfiguration
from carrierops.random_source import RandomSource, coerce_seed


class TestStream:
    """Tests for the raw draw stream."""

    def test_seed_42_prefix(self):
        """The first draws for seed 42 are fixed 32-bit fractions."""
        rng = RandomSource(42)
        assert [rng.random() * 2**32 for _ in range(10)] == [
            2581720956,
            1925393290,
            3661312704,
            2876485805,
            750819978,
            2261697747,
            1173505300,
            2683257857,
            3717185310,
            2028586305,
        ]

    def test_seed_0_prefix(self):
        rng = RandomSource(0)
        assert rng.random() * 2**32 == 1144304738
        assert rng.random() * 2**32 == 1416247

    def test_helpers_share_the_stream(self):
        """Helpers map the same draws the raw stream yields."""
        rng = RandomSource(42)
        # 0.601, 0.448, 0.852, 0.669, 0.174
        assert rng.choice(["TX-NORTH", "TX-SOUTH"]) == "TX-SOUTH"
        assert rng.int_between(1, 10) == 5
        assert rng.chance(0.85) is False
        assert rng.shuffle(["a", "b", "c"]) == ["b", "a", "c"]

    def test_same_seed_same_stream(self):
        """Two sources with one seed produce identical draws."""
        a = RandomSource(42)
        b = RandomSource(42)
        assert [a.random() for _ in range(500)] == [b.random() for _ in range(500)]

    def test_different_seed_different_stream(self):
        """Different seeds diverge immediately."""
        a = RandomSource(42)
        b = RandomSource(43)
        assert [a.random() for _ in range(10)] != [b.random() for _ in range(10)]

    def test_draws_in_unit_interval(self):
        """Every draw lies in [0, 1)."""
        rng = RandomSource(7)
        for _ in range(10_000):
            value = rng.random()
            assert 0.0 <= value < 1.0

    def test_draw_counter(self):
        """draws counts every consumed value."""
        rng = RandomSource(1)
        rng.random()
        rng.chance(0.5)
        rng.int_between(1, 6)
        rng.choice("abc")
        assert rng.draws == 4

    def test_seed_reduced_to_32_bits(self):
        """Seeds beyond 32 bits wrap onto the same stream."""
        a = RandomSource(5)
        b = RandomSource(2**32 + 5)
        assert a.seed == b.seed == 5
        assert [a.random() for _ in range(20)] == [b.random() for _ in range(20)]

    def test_zero_seed_is_valid(self):
        """Seed 0 yields a usable stream."""
        rng = RandomSource(0)
        values = {rng.random() for _ in range(100)}
        assert len(values) > 90


class TestHelpers:
    """Tests for chance, int_between, choice and shuffle."""

    def test_int_between_closed_range(self):
        """int_between covers both endpoints and nothing outside."""
        rng = RandomSource(3)
        seen = {rng.int_between(1, 4) for _ in range(2_000)}
        assert seen == {1, 2, 3, 4}

    def test_int_between_single_value(self):
        """A one-value range always returns that value but still draws."""
        rng = RandomSource(3)
        assert rng.int_between(9, 9) == 9
        assert rng.draws == 1

    def test_int_between_empty_range(self):
        """high < low is rejected."""
        with pytest.raises(ValueError):
            RandomSource(3).int_between(5, 4)

    def test_chance_extremes(self):
        """chance(0) is never true and chance(1) always is."""
        rng = RandomSource(11)
        assert not any(rng.chance(0.0) for _ in range(500))
        assert all(rng.chance(1.0) for _ in range(500))

    def test_choice_uniform_support(self):
        """choice reaches every element."""
        rng = RandomSource(5)
        items = ["voice", "sms", "data"]
        assert {rng.choice(items) for _ in range(500)} == set(items)

    def test_choice_empty(self):
        """Choosing from an empty sequence fails."""
        with pytest.raises(IndexError):
            RandomSource(5).choice([])

    def test_shuffle_is_permutation_copy(self):
        """shuffle returns a permutation and leaves the input untouched."""
        rng = RandomSource(8)
        items = list(range(20))
        shuffled = rng.shuffle(items)
        assert items == list(range(20))
        assert sorted(shuffled) == items
        assert shuffled is not items

    def test_shuffle_draw_count(self):
        """Fisher-Yates consumes len - 1 draws."""
        rng = RandomSource(8)
        rng.shuffle(list(range(10)))
        assert rng.draws == 9
        rng.shuffle(["only"])
        rng.shuffle([])
        assert rng.draws == 9

    def test_shuffle_reaches_every_permutation(self):
        """All 6 orderings of a 3-element list appear."""
        rng = RandomSource(21)
        seen = {tuple(rng.shuffle("abc")) for _ in range(600)}
        assert len(seen) == 6


class TestSeedValidation:
    """Tests for coerce_seed."""

    @pytest.mark.parametrize("raw,expected", [(42, 42), ("42", 42), (" 7 ", 7), (0, 0)])
    def test_accepted(self, raw, expected):
        """Non-negative integers and digit strings are accepted."""
        assert coerce_seed(raw) == expected

    @pytest.mark.parametrize("raw", [-1, "-1", "abc", "", 1.5, None, True])
    def test_rejected(self, raw):
        """Anything else is an invalid configuration."""
        with pytest.raises(InvalidConfiguration):
            coerce_seed(raw)


class TestConvergence:
    """Helper frequencies over a large sample (4 standard errors)."""

    SAMPLES = 200_000

    def test_chance_rate(self):
        """chance(0.10) converges on 10%."""
        rng = RandomSource(42)
        hits = np.fromiter((rng.chance(0.10) for _ in range(self.SAMPLES)), dtype=bool)
        assert abs(hits.mean() - 0.10) < 4 * np.sqrt(0.10 * 0.90 / self.SAMPLES)

    def test_choice_is_uniform(self):
        """Each of three usage types is picked about a third of the time."""
        rng = RandomSource(7)
        items = ["voice", "sms", "data"]
        picks = np.fromiter(
            (items.index(rng.choice(items)) for _ in range(self.SAMPLES)), dtype=np.int64
        )
        shares = np.bincount(picks, minlength=3) / self.SAMPLES
        tolerance = 4 * np.sqrt((1 / 3) * (2 / 3) / self.SAMPLES)
        assert np.all(np.abs(shares - 1 / 3) < tolerance)

    def test_int_between_mean(self):
        """A fair die averages 3.5."""
        rng = RandomSource(99)
        rolls = np.fromiter(
            (rng.int_between(1, 6) for _ in range(self.SAMPLES)), dtype=np.int64
        )
        assert abs(rolls.mean() - 3.5) < 4 * np.sqrt(35 / 12 / self.SAMPLES)
        assert set(np.unique(rolls)) == {1, 2, 3, 4, 5, 6}
