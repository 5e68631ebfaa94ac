"""Shared fixtures for battle engine tests."""

import random

import pytest


class ScriptedRandom(random.Random):
    """Random source that replays queued values so tests can force rolls.

    ``floats`` feed random() (dodge and critical checks); ``ints`` feed
    randint() (variance, percentile draws, construction variance). Running
    out of values raises IndexError, which flags an unexpected roll.
    """

    def __init__(self, floats=(), ints=()):
        super().__init__(0)
        self.floats = list(floats)
        self.ints = list(ints)

    def random(self):
        return self.floats.pop(0)

    def randint(self, a, b):
        value = self.ints.pop(0)
        assert a <= value <= b, f"scripted {value} outside [{a}, {b}]"
        return value


@pytest.fixture
def scripted_rng():
    """Factory for ScriptedRandom instances."""
    return ScriptedRandom
