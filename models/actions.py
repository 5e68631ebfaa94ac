"""Battle action models for the Marduk battle server."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ActionKind(str, Enum):
    """Every kind of move that can be made in a battle."""
    HIT = "hit"
    POISON = "poison"
    HEALING = "healing"
    PROTECTION = "protection"
    SPECIAL = "special"             # Damage comes from the actor's SPECIAL_DAMAGE


# Kinds aimed at the other combatant, and therefore dodgeable
TARGETED_KINDS = (ActionKind.HIT, ActionKind.POISON, ActionKind.SPECIAL)

# Kinds that can land a critical hit
CRITICAL_KINDS = (ActionKind.HIT, ActionKind.SPECIAL)


class ActionSource(str, Enum):
    """Who authored an action."""
    PLAYER = "player"               # Hand-authored catalogue entry
    OPPONENT = "opponent"           # Generated by the behavior policy


class RejectionReason(str, Enum):
    """Why a player action failed its gating checks."""
    UNKNOWN_ACTION = "unknown action"
    INSUFFICIENT_ABILITY_POINTS = "insufficient ability points"
    INSUFFICIENT_MANA = "insufficient mana"
    TARGET_ALREADY_POISONED = "target already poisoned"
    EFFECT_ALREADY_ACTIVE = "effect already active"


class Action(BaseModel):
    """One battle move. Immutable once built."""
    model_config = ConfigDict(frozen=True)

    name: str
    kind: ActionKind
    effect: float                   # Damage, heal amount or damage multiplier
    duration: int = Field(default=0, ge=0)          # Turns, 0 = instantaneous
    mana_cost: int = Field(default=0, ge=0)
    required_ability_points: int = Field(default=0, ge=0)
    source: ActionSource = ActionSource.PLAYER

    @property
    def is_multi_turn(self) -> bool:
        return self.duration > 0


class ActionOutcome(BaseModel):
    """What happened when one action was resolved."""
    action: Action
    dodged: bool = False
    critical: bool = False
    magnitude: int | None = None    # Final amount dealt or healed
    messages: list[str] = []        # Human-readable narrative
