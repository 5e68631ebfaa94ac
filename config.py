"""Engine-wide configuration constants for the Marduk battle server."""

import os

INITIAL_MANA = 500               # Mana the player starts every battle with
INITIAL_ATTRIBUTE_POINTS = 4     # Points a new character may spend
EXPERIENCE_PER_LEVEL = 50        # Experience needed for each level
ATTRIBUTE_POINTS_PER_LEVEL = 2   # Points earned per level
CRITICAL_DAMAGE_MULTIPLIER = 1.5
PLAYER_DAMAGE_VARIANCE = 100     # Player magnitudes vary by +/- this much
POISON_DAMAGE_MULTIPLIER = 0.5   # Opponent poison = base damage * this
OPPONENT_TURN_DELAY_SECONDS = float(os.environ.get("OPPONENT_TURN_DELAY_SECONDS", "0.5"))
RNG_SEED = os.environ.get("RNG_SEED")  # Seed for replayable battles, unset = random
ACTION_CATALOGUE_FILE = os.environ.get("ACTION_CATALOGUE_FILE")  # JSON override of the player actions
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


def load_seed() -> int | None:
    """Return RNG_SEED as an int, or None when it is not configured."""
    if RNG_SEED is None or not RNG_SEED.strip():
        return None
    return int(RNG_SEED)
