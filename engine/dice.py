"""Random rolls for battle resolution.

Every roll takes the battle's ``random.Random`` so a fight can be replayed
exactly from a seed.
"""

import random

from config import load_seed


def new_rng(seed: int | None = None) -> random.Random:
    """Create the random source for a battle.

    Args:
        seed: Explicit seed. Falls back to the RNG_SEED setting, and to an
            unseeded generator when neither is given.

    Returns:
        A fresh Random instance.
    """
    if seed is None:
        seed = load_seed()
    return random.Random(seed)


def roll_chance(chance: float, rng: random.Random) -> bool:
    """Draw uniformly from [0, 1) and report whether it lands below chance.

    Args:
        chance: Probability of success, e.g. a dodge or critical chance.
        rng: The battle's random source.

    Returns:
        True if the roll succeeded.
    """
    return rng.random() < chance


def roll_percentile(rng: random.Random) -> int:
    """Roll a number between 1 and 100 inclusive."""
    return rng.randint(1, 100)


def roll_variance(spread: int, rng: random.Random) -> int:
    """Roll a uniform integer offset in [-spread, spread]."""
    return rng.randint(-spread, spread)


def roll_between(low: int, high: int, rng: random.Random) -> int:
    """Roll a uniform integer in [low, high]."""
    return rng.randint(low, high)
