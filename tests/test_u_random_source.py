"""
Unit tests for the seedable random source.
"""

import pytest

from patterndrill.random_source import RandomSource

from .utils.bar_validator import ConstantRandom


@pytest.mark.unit
class TestRandomSource:
    """Test cases for RandomSource draws."""

    @pytest.fixture
    def source(self):
        return RandomSource(seed=1234)

    def test_same_seed_reproduces_sequence(self):
        """Two sources with one seed produce identical draws."""
        first = RandomSource(seed=99)
        second = RandomSource(seed=99)

        assert [first.uniform(-5, 5) for _ in range(20)] == [second.uniform(-5, 5) for _ in range(20)]

    def test_seed_is_recorded(self):
        assert RandomSource(seed=5).seed == 5
        assert RandomSource().seed is None

    def test_uniform_stays_in_range(self, source):
        for _ in range(1000):
            value = source.uniform(-3.5, 8.25)
            assert -3.5 <= value <= 8.25

    def test_uniform_accepts_reversed_bounds(self, source):
        """Bounds given high-to-low still yield values between them."""
        for _ in range(500):
            value = source.uniform(5, 1)
            assert 1 <= value <= 5

    def test_uniform_with_zero_generator_returns_first_bound(self):
        source = RandomSource(generator=ConstantRandom(0.0))

        assert source.uniform(3, 7) == 3
        assert source.uniform(7, 3) == 7

    def test_generator_overrides_seed(self):
        stub = ConstantRandom(0.25)
        source = RandomSource(seed=1, generator=stub)

        assert source.random() == 0.25
        assert stub.calls == 1

    def test_integer_is_half_open(self, source):
        """integer(a, b) never returns b."""
        values = {source.integer(0, 3) for _ in range(500)}

        assert values == {0, 1, 2}

    def test_integer_near_one_generator_stays_below_upper_bound(self):
        source = RandomSource(generator=ConstantRandom(0.9999999999))

        assert source.integer(1, 4) == 3

    def test_chance_extremes(self, source):
        assert not any(source.chance(0) for _ in range(200))
        assert all(source.chance(1) for _ in range(200))

    def test_chance_frequency(self):
        source = RandomSource(seed=42)
        hits = sum(source.chance(0.3) for _ in range(2000))

        assert 0.25 < hits / 2000 < 0.35

    def test_choice_covers_all_items(self, source):
        items = ("a", "b", "c")
        picked = {source.choice(items) for _ in range(300)}

        assert picked == set(items)

    def test_choice_empty_raises(self, source):
        with pytest.raises(ValueError, match="empty sequence"):
            source.choice([])
