"""Tests for the seeded linear-congruential generator."""

import pytest
from py_voronoi.core.seeded_rng import SeededRNG, MODULUS


class TestSeededRNG:
    """Test determinism and range of the generator."""

    def test_first_value(self):
        """Seed 1 advances to 1 * 9301 + 49297 on the first draw."""
        rng = SeededRNG(1)
        assert rng.next() == 58598 / 233280

    def test_recurrence(self):
        """Every draw follows the recurrence exactly."""
        rng = SeededRNG(12345)
        state = 12345
        for _ in range(50):
            state = (state * 9301 + 49297) % 233280
            assert rng.next() == state / 233280

    @pytest.mark.parametrize("seed", [0, 1, 42, 1700000000000, 2**63 - 1, -7])
    def test_same_seed_same_sequence(self, seed):
        """Identical seeds produce identical sequences."""
        rng1 = SeededRNG(seed)
        rng2 = SeededRNG(seed)
        assert [rng1.next() for _ in range(200)] == [rng2.next() for _ in range(200)]

    def test_different_seeds(self):
        """Different seeds produce different sequences."""
        rng_a = SeededRNG(1)
        rng_b = SeededRNG(2)
        assert [rng_a.next() for _ in range(10)] != [rng_b.next() for _ in range(10)]

    def test_range(self):
        """Values are in [0, 1)."""
        rng = SeededRNG(987654321)
        for _ in range(2000):
            value = rng.next()
            assert 0.0 <= value < 1.0

    def test_large_seed_exact(self):
        """Large seeds use exact integer arithmetic."""
        seed = 1_712_345_678_901
        rng = SeededRNG(seed)
        assert rng.next() == ((seed * 9301 + 49297) % MODULUS) / MODULUS

    def test_call_count(self):
        rng = SeededRNG(5)
        rng.next()
        rng.next()
        assert rng.call_count == 2

    def test_whole_float_seed_accepted(self):
        assert SeededRNG(7.0).next() == SeededRNG(7).next()

    @pytest.mark.parametrize("seed", [float("nan"), float("inf"), 1.5])
    def test_invalid_seed(self, seed):
        with pytest.raises(ValueError):
            SeededRNG(seed)

    @pytest.mark.parametrize("seed", ["42", None, True])
    def test_non_numeric_seed(self, seed):
        with pytest.raises(TypeError):
            SeededRNG(seed)
