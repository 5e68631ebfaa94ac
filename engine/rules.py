"""Battle rules: action gating, dodge/critical rolls and effect application."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from config import CRITICAL_DAMAGE_MULTIPLIER, PLAYER_DAMAGE_VARIANCE
from engine.dice import roll_chance, roll_variance
from models.actions import (
    CRITICAL_KINDS,
    TARGETED_KINDS,
    Action,
    ActionKind,
    ActionOutcome,
    ActionSource,
    RejectionReason,
)
from models.attributes import Attribute

if TYPE_CHECKING:
    from models.characters import Combatant, Opponent, Player

logger = logging.getLogger(__name__)


def check_action_gates(
    action: Action | None,
    player: Player,
    opponent: Opponent,
) -> RejectionReason | None:
    """Check whether the player may attempt an action right now.

    Args:
        action: The catalogue action, or None if the name was not found.
        player: The acting player.
        opponent: The player's target.

    Returns:
        The reason the action is not allowed, or None if it is.
    """
    if action is None:
        return RejectionReason.UNKNOWN_ACTION

    if player.primary(Attribute.ABILITIES) < action.required_ability_points:
        return RejectionReason.INSUFFICIENT_ABILITY_POINTS

    if player.current_mana < action.mana_cost:
        return RejectionReason.INSUFFICIENT_MANA

    if action.kind == ActionKind.POISON and opponent.has_poison_effect():
        return RejectionReason.TARGET_ALREADY_POISONED

    # Defensive multi-turn effects never stack
    is_defensive = (
        (action.kind == ActionKind.HEALING and action.is_multi_turn)
        or action.kind == ActionKind.PROTECTION
    )
    if is_defensive and (player.has_healing_effect() or player.has_protection_effect()):
        return RejectionReason.EFFECT_ALREADY_ACTIVE

    return None


def action_magnitude(action: Action, actor: Combatant) -> float:
    """Return the unmodified magnitude of an action for this actor.

    A player's special attack is as strong as their SPECIAL_DAMAGE attribute;
    every other action carries its magnitude in ``effect``.
    """
    if action.kind == ActionKind.SPECIAL and action.source == ActionSource.PLAYER:
        return actor.secondary(Attribute.SPECIAL_DAMAGE)
    return action.effect


def _with_variance(amount: int, action: Action, rng: random.Random) -> int:
    """Add the player's magnitude variance. Opponent actions are never varied."""
    if action.source != ActionSource.PLAYER:
        return amount
    return max(0, amount + roll_variance(PLAYER_DAMAGE_VARIANCE, rng))


def resolve_action(
    action: Action,
    actor: Combatant,
    target: Combatant,
    rng: random.Random,
) -> ActionOutcome:
    """Resolve an action: apply its effect on the actor, then on the target.

    Each half is independent. For any kind, at most one of the two halves
    mutates a combatant.

    Args:
        action: The action being performed.
        actor: The combatant performing it.
        target: The combatant it is aimed at.
        rng: The battle's random source.

    Returns:
        ActionOutcome with the rolls, final magnitude and narrative.
    """
    outcome = ActionOutcome(action=action)
    apply_actor_effect(action, actor, outcome, rng)
    apply_target_effect(action, actor, target, outcome, rng)
    return outcome


def apply_actor_effect(
    action: Action,
    actor: Combatant,
    outcome: ActionOutcome,
    rng: random.Random,
) -> None:
    """Apply the half of an action that benefits the actor (healing, protection)."""
    if action.kind == ActionKind.HEALING:
        amount = _with_variance(int(action.effect), action, rng)
        actor.apply_healing(amount, action.duration)
        outcome.magnitude = amount
        if action.is_multi_turn:
            outcome.messages.append(
                f"{actor.name} will heal {amount} health for {action.duration} turns."
            )
        else:
            outcome.messages.append(f"{actor.name} healed {amount} health.")

    elif action.kind == ActionKind.PROTECTION:
        actor.apply_protection(action.effect, action.duration)
        outcome.messages.append(
            f"{actor.name} will take {action.effect * 100:.1f}% damage "
            f"for {action.duration} turns."
        )

    elif action.kind in TARGETED_KINDS:
        return

    else:
        raise ValueError(f"Unknown action kind: {action.kind}")


def apply_target_effect(
    action: Action,
    actor: Combatant,
    target: Combatant,
    outcome: ActionOutcome,
    rng: random.Random,
) -> None:
    """Apply the half of an action aimed at the target (hit, poison, special).

    The target may dodge. Hits and special attacks may land critically.
    """
    if action.kind not in TARGETED_KINDS:
        return

    dodge_chance = target.secondary(Attribute.DODGE_CHANCE)
    if roll_chance(dodge_chance, rng):
        outcome.dodged = True
        outcome.messages.append(f"{target.name} dodged {actor.name}'s attack.")
        logger.debug("%s dodged %s (chance %.3f)", target.name, action.name, dodge_chance)
        return

    if action.kind in CRITICAL_KINDS:
        outcome.critical = roll_chance(actor.secondary(Attribute.CRIT_CHANCE), rng)
    multiplier = CRITICAL_DAMAGE_MULTIPLIER if outcome.critical else 1.0

    if action.kind in (ActionKind.HIT, ActionKind.SPECIAL):
        # Critical multiplier is applied and truncated before variance is added
        base = int(action_magnitude(action, actor) * multiplier)
        damage = _with_variance(base, action, rng)
        target.inflict_damage(damage)
        outcome.magnitude = damage
        outcome.messages.append(_damage_message(action, actor, target, damage, outcome.critical))

    elif action.kind == ActionKind.POISON:
        per_turn = _with_variance(int(action.effect), action, rng)
        target.inflict_poison(per_turn, action.duration)
        outcome.magnitude = per_turn
        outcome.messages.append(
            f"{actor.name} inflicted poison on {target.name} dealing {per_turn} "
            f"damage for {action.duration} turns."
        )

    logger.debug(
        "%s resolved %s on %s: magnitude=%s critical=%s",
        actor.name, action.name, target.name, outcome.magnitude, outcome.critical,
    )


def _damage_message(
    action: Action,
    actor: Combatant,
    target: Combatant,
    damage: int,
    critical: bool,
) -> str:
    if action.kind == ActionKind.SPECIAL:
        if critical:
            return f"The special attack dealt a critical hit on {target.name} for {damage} damage!"
        return f"The special attack dealt {damage} damage to {target.name}."
    if critical:
        return f"{actor.name} dealt a critical hit on {target.name} for {damage} damage!"
    return f"{actor.name} hit {target.name} for {damage} damage!"
