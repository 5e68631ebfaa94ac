"""Player and opponent models for the Marduk battle server."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, computed_field

from config import INITIAL_MANA
from models.attributes import (
    Attribute,
    PrimaryAttributes,
    UnsupportedAttributeError,
    secondary_value,
)


class StatusEffect(BaseModel):
    """A timed modifier: a per-turn magnitude and the turns it has left."""
    magnitude: int | float = 0      # Damage, healing or damage multiplier
    turns_remaining: int = Field(default=0, ge=0)

    @property
    def is_active(self) -> bool:
        return self.turns_remaining > 0


class OpponentTier(str, Enum):
    """Opponent configurations sharing one behavior shape."""
    COMMON = "common"               # Random encounters
    ZONE_BOSS = "zone_boss"         # Marduk's lieutenants
    FINAL_BOSS = "final_boss"       # Marduk himself


class Combatant(BaseModel):
    """Health and poison handling shared by players and opponents.

    Never built directly: subclasses provide ``max_health`` (a field or a
    computed property) and ``secondary()``.
    """
    name: str
    current_health: int = Field(default=0, ge=0)
    poison: StatusEffect = Field(default_factory=StatusEffect)

    def model_post_init(self, __context: Any) -> None:
        # New combatants start at full health unless told otherwise
        if "current_health" not in self.model_fields_set:
            self.current_health = self.max_health

    def secondary(self, attr: Attribute) -> float:
        raise NotImplementedError("Combatant subclasses provide secondary()")

    def add_health(self, amount: int) -> None:
        """Give health back, never exceeding the maximum."""
        self.current_health = min(self.current_health + int(amount), self.max_health)

    def inflict_damage(self, damage: int) -> None:
        """Take damage, never falling below zero."""
        self.current_health = max(self.current_health - int(damage), 0)

    def inflict_poison(self, damage_per_turn: int | float, turns: int) -> None:
        """Apply a poison effect, replacing any poison already active."""
        self.poison = StatusEffect(magnitude=int(damage_per_turn), turns_remaining=turns)

    def has_poison_effect(self) -> bool:
        return self.poison.is_active

    def is_dead(self) -> bool:
        return self.current_health == 0

    def on_turn_start(self) -> list[str]:
        """Apply and age one turn of poison.

        Returns:
            Narrative lines describing what happened.
        """
        messages: list[str] = []
        if self.poison.is_active:
            damage = int(self.poison.magnitude)
            self.inflict_damage(damage)
            self.poison.turns_remaining -= 1
            messages.append(f"{self.name} took {damage} damage from a poison effect.")
        return messages


class Player(Combatant):
    """The user's character."""
    name: str = "Player"
    class_type: str | None = None
    attributes: PrimaryAttributes = Field(default_factory=PrimaryAttributes)
    experience: int = Field(default=0, ge=0)
    current_mana: int = INITIAL_MANA
    healing: StatusEffect = Field(default_factory=StatusEffect)
    protection: StatusEffect = Field(default_factory=StatusEffect)

    @computed_field
    @property
    def max_health(self) -> int:
        return int(self.secondary(Attribute.HEALTH_POINTS))

    @computed_field
    @property
    def max_mana(self) -> int:
        return int(self.secondary(Attribute.MANA))

    def primary(self, attr: Attribute) -> int:
        """Return a primary attribute value.

        Raises:
            UnsupportedAttributeError: If attr is a secondary attribute.
        """
        return self.attributes.get(attr)

    def secondary(self, attr: Attribute) -> float:
        """Return a secondary attribute computed from current primaries.

        Raises:
            UnsupportedAttributeError: If attr is a primary attribute.
        """
        return secondary_value(attr, self.attributes)

    # --- Mana ---

    def add_mana(self, amount: int) -> None:
        self.current_mana = min(self.current_mana + int(amount), self.max_mana)

    def remove_mana(self, amount: int) -> None:
        self.current_mana -= int(amount)

    # --- Status effects ---

    def apply_healing(self, amount: int, turns: int = 0) -> None:
        """Heal now and, for multi-turn healing, keep healing each turn."""
        self.add_health(amount)
        if turns > 0:
            self.healing = StatusEffect(magnitude=int(amount), turns_remaining=turns)

    def apply_protection(self, multiplier: float, turns: int) -> None:
        """Scale incoming damage by multiplier for the given number of turns."""
        self.protection = StatusEffect(magnitude=multiplier, turns_remaining=turns)

    def has_healing_effect(self) -> bool:
        return self.healing.is_active

    def has_protection_effect(self) -> bool:
        return self.protection.is_active

    def inflict_damage(self, damage: int) -> None:
        if self.protection.is_active:
            damage = int(damage * self.protection.magnitude)
        super().inflict_damage(damage)

    # --- Battle listeners ---

    def on_battle_start(self) -> None:
        """Restore health and starting mana, and clear leftover effects."""
        self.current_health = self.max_health
        self.current_mana = INITIAL_MANA
        self.poison = StatusEffect()
        self.healing = StatusEffect()
        self.protection = StatusEffect()

    def on_turn_start(self) -> list[str]:
        """Apply poison, then healing, then count down protection, then regen mana."""
        messages = super().on_turn_start()

        if self.healing.is_active:
            amount = int(self.healing.magnitude)
            self.add_health(amount)
            self.healing.turns_remaining -= 1
            messages.append(f"{self.name} regained {amount} health from a healing effect.")

        if self.protection.is_active:
            self.protection.turns_remaining -= 1
            if not self.protection.is_active:
                messages.append(f"{self.name}'s protection wore off.")

        self.add_mana(int(self.secondary(Attribute.MANA_REGEN)))
        return messages


class Opponent(Combatant):
    """A procedurally parameterized enemy.

    Values are fixed at construction (see engine.opponents.create_opponent);
    reset() puts the mutable ones back so an encounter can be retried.
    """
    tier: OpponentTier = OpponentTier.COMMON
    max_health: int = Field(gt=0)
    potions: int = Field(default=0, ge=0)
    original_potions: int = Field(default=0, ge=0)
    potion_heal: int = Field(default=0, ge=0)
    base_damage: int = Field(default=0, ge=0)
    poison_turns: int = Field(default=2, ge=0)
    crit_chance: float = Field(default=0.0, ge=0)
    dodge_chance: float = Field(default=0.0, ge=0)
    experience_reward: int = Field(default=0, ge=0)

    def primary(self, attr: Attribute) -> int:
        raise UnsupportedAttributeError("Opponents do not have primary attributes")

    def secondary(self, attr: Attribute) -> float:
        """Return one of the secondary attributes an opponent supports.

        Raises:
            UnsupportedAttributeError: For anything other than HEALTH_POINTS,
                CRIT_CHANCE and DODGE_CHANCE.
        """
        if attr == Attribute.HEALTH_POINTS:
            return self.max_health
        if attr == Attribute.CRIT_CHANCE:
            return self.crit_chance
        if attr == Attribute.DODGE_CHANCE:
            return self.dodge_chance
        raise UnsupportedAttributeError(
            f"Attribute '{attr.value}' is unsupported by opponents"
        )

    def apply_healing(self, amount: int, turns: int = 0) -> None:
        if turns > 0:
            raise ValueError("Opponents cannot receive healing over time")
        self.add_health(amount)

    def apply_protection(self, multiplier: float, turns: int) -> None:
        raise ValueError("Opponents cannot receive protection")

    def reset(self) -> None:
        """Restore health, potions and poison to their construction-time values."""
        self.current_health = self.max_health
        self.potions = self.original_potions
        self.poison = StatusEffect()
