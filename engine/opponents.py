"""Opponent construction and the opponent behavior policy."""

from __future__ import annotations

import logging
import random

from pydantic import BaseModel, ConfigDict

from config import POISON_DAMAGE_MULTIPLIER
from engine.dice import roll_between, roll_percentile
from models.actions import Action, ActionKind, ActionSource
from models.characters import Opponent, OpponentTier, Player

logger = logging.getLogger(__name__)

# Cumulative branch thresholds on a 1..100 draw, identical for every tier
POISON_THRESHOLD = 95               # top 5%
LARGE_BONUS_THRESHOLD = 85          # next 10%
SMALL_BONUS_THRESHOLD = 50          # next 35%, the rest is a plain hit


class TierConstants(BaseModel):
    """The numbers that distinguish one opponent tier from another."""
    model_config = ConfigDict(frozen=True)

    name: str
    health_multiplier: int          # Max health = (1 + randint(0, exp // 25)) * this
    potion_heal_fraction: float     # Share of max health one potion restores
    fixed_potions: int | None       # None = exp // 50 + randint(0, 1)
    damage_divisor: int             # Base damage = randint(0, exp // divisor) * step + 2 * exp + 100
    damage_step: int
    crit_per_experience: float
    dodge_per_experience: float
    poison_turns_threshold: int     # Poison lasts 3 turns from this much player experience
    heal_probability: int           # Percent chance to drink a potion when below half health
    large_bonus: int
    small_bonus: int
    reward_per_thousand_health: int
    heal_name: str
    poison_name: str
    large_hit_name: str
    small_hit_name: str
    base_hit_name: str


TIERS: dict[OpponentTier, TierConstants] = {
    OpponentTier.COMMON: TierConstants(
        name="Wandering Mage",
        health_multiplier=2000,
        potion_heal_fraction=0.2,
        fixed_potions=None,
        damage_divisor=50,
        damage_step=100,
        crit_per_experience=0.01,
        dodge_per_experience=0.005,
        poison_turns_threshold=150,
        heal_probability=25,
        large_bonus=50,
        small_bonus=25,
        reward_per_thousand_health=5,
        heal_name="Healing Potion",
        poison_name="Poisoned Dagger",
        large_hit_name="Ice Shard",
        small_hit_name="Boulder Bash",
        base_hit_name="Magic Bolt",
    ),
    OpponentTier.ZONE_BOSS: TierConstants(
        name="Marduk's Lieutenant",
        health_multiplier=2000,
        potion_heal_fraction=0.4,
        fixed_potions=1,
        damage_divisor=10,
        damage_step=200,
        crit_per_experience=0.02,
        dodge_per_experience=0.01,
        poison_turns_threshold=150,
        heal_probability=40,
        large_bonus=100,
        small_bonus=50,
        reward_per_thousand_health=5,
        heal_name="Powerful Healing Potion",
        poison_name="Deadly Poisonous Dagger",
        large_hit_name="Shadow Cleave",
        small_hit_name="Dark Strike",
        base_hit_name="Magic Bolt",
    ),
    OpponentTier.FINAL_BOSS: TierConstants(
        name="Marduk",
        health_multiplier=4000,
        potion_heal_fraction=0.5,
        fixed_potions=1,
        damage_divisor=50,
        damage_step=300,
        crit_per_experience=0.025,
        dodge_per_experience=0.01,
        poison_turns_threshold=300,
        heal_probability=50,
        large_bonus=100,
        small_bonus=50,
        reward_per_thousand_health=0,
        heal_name="Heavenly Healing",
        poison_name="Interstellar Poison",
        large_hit_name="Supernova Destruction",
        small_hit_name="Galactic Hit",
        base_hit_name="Star Punch",
    ),
}


def create_opponent(
    tier: OpponentTier,
    player_experience: int,
    rng: random.Random,
) -> Opponent:
    """Build an opponent scaled to the player's experience.

    Args:
        tier: Which tier's constants to use.
        player_experience: The player's current experience.
        rng: Random source for the construction-time variance.

    Returns:
        A fresh Opponent at full health.
    """
    constants = TIERS[tier]
    exp = player_experience

    max_health = (roll_between(0, exp // 25, rng) + 1) * constants.health_multiplier

    if constants.fixed_potions is None:
        potions = exp // 50 + roll_between(0, 1, rng)
    else:
        potions = constants.fixed_potions

    base_damage = (
        roll_between(0, exp // constants.damage_divisor, rng) * constants.damage_step
        + exp * 2
        + 100
    )

    opponent = Opponent(
        name=constants.name,
        tier=tier,
        max_health=max_health,
        potions=potions,
        original_potions=potions,
        potion_heal=int(constants.potion_heal_fraction * max_health),
        base_damage=base_damage,
        poison_turns=3 if exp >= constants.poison_turns_threshold else 2,
        crit_chance=constants.crit_per_experience * exp,
        dodge_chance=constants.dodge_per_experience * exp,
        experience_reward=(max_health // 1000) * constants.reward_per_thousand_health,
    )
    logger.info(
        "Created %s opponent %r: health=%d potions=%d base_damage=%d",
        tier.value, opponent.name, max_health, potions, base_damage,
    )
    return opponent


def generate_opponent_action(
    opponent: Opponent,
    player: Player,
    rng: random.Random,
) -> Action:
    """Decide the opponent's move for this turn.

    Below half health with a potion left, the opponent may drink one (this
    consumes the potion). Otherwise a second draw picks poison, a strong hit,
    a medium hit or a plain hit. A poison draw against an already poisoned
    player falls through to the hits with the same draw.

    Args:
        opponent: The acting opponent. Its potion count may decrease.
        player: The opponent's target.
        rng: The battle's random source.

    Returns:
        The generated Action.
    """
    constants = TIERS[opponent.tier]

    if opponent.current_health < opponent.max_health / 2 and opponent.potions > 0:
        if roll_percentile(rng) <= constants.heal_probability:
            opponent.potions -= 1
            return _opponent_action(constants.heal_name, ActionKind.HEALING, opponent.potion_heal)

    choice = roll_percentile(rng)

    if choice > POISON_THRESHOLD and not player.has_poison_effect():
        return _opponent_action(
            constants.poison_name,
            ActionKind.POISON,
            opponent.base_damage * POISON_DAMAGE_MULTIPLIER,
            duration=opponent.poison_turns,
        )

    if choice > LARGE_BONUS_THRESHOLD:
        return _opponent_action(
            constants.large_hit_name,
            ActionKind.HIT,
            opponent.base_damage + constants.large_bonus,
        )

    if choice > SMALL_BONUS_THRESHOLD:
        return _opponent_action(
            constants.small_hit_name,
            ActionKind.HIT,
            opponent.base_damage + constants.small_bonus,
        )

    return _opponent_action(constants.base_hit_name, ActionKind.HIT, opponent.base_damage)


def _opponent_action(name: str, kind: ActionKind, effect: float, duration: int = 0) -> Action:
    return Action(
        name=name,
        kind=kind,
        effect=effect,
        duration=duration,
        source=ActionSource.OPPONENT,
    )
