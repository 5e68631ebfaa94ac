"""Tests for the battle random source and roll helpers."""

import random

import config
from engine.dice import new_rng, roll_between, roll_chance, roll_percentile, roll_variance


class TestNewRng:
    """Tests for new_rng()."""

    def test_explicit_seed_is_deterministic(self):
        a = new_rng(123)
        b = new_rng(123)
        assert [a.random() for _ in range(5)] == [b.random() for _ in range(5)]

    def test_seed_from_config(self, monkeypatch):
        monkeypatch.setattr(config, "RNG_SEED", "42")
        expected = random.Random(42).random()
        assert new_rng().random() == expected

    def test_blank_seed_means_unseeded(self, monkeypatch):
        monkeypatch.setattr(config, "RNG_SEED", "  ")
        assert config.load_seed() is None
        assert isinstance(new_rng(), random.Random)


class TestRollChance:
    """Tests for roll_chance()."""

    def test_below_chance_succeeds(self, scripted_rng):
        assert roll_chance(0.5, scripted_rng(floats=[0.49])) is True

    def test_equal_to_chance_fails(self, scripted_rng):
        assert roll_chance(0.5, scripted_rng(floats=[0.5])) is False

    def test_zero_chance_never_succeeds(self):
        rng = random.Random(1)
        assert not any(roll_chance(0.0, rng) for _ in range(200))


class TestIntegerRolls:
    """Tests for the integer roll helpers."""

    def test_percentile_in_range(self):
        rng = random.Random(42)
        rolls = [roll_percentile(rng) for _ in range(500)]
        assert min(rolls) >= 1
        assert max(rolls) <= 100

    def test_variance_in_range(self):
        rng = random.Random(42)
        rolls = [roll_variance(100, rng) for _ in range(500)]
        assert min(rolls) >= -100
        assert max(rolls) <= 100
        assert any(r < 0 for r in rolls)

    def test_between_inclusive(self):
        rng = random.Random(7)
        rolls = {roll_between(0, 1, rng) for _ in range(100)}
        assert rolls == {0, 1}

    def test_seeded_determinism(self):
        first = [roll_percentile(random.Random(9)) for _ in range(3)]
        second = [roll_percentile(random.Random(9)) for _ in range(3)]
        assert first == second
