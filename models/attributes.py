"""Primary and secondary attribute definitions."""

from enum import Enum

from pydantic import BaseModel, Field


class UnsupportedAttributeError(ValueError):
    """Raised when an attribute is used with an accessor that cannot serve it."""


class Attribute(str, Enum):
    """Every attribute a combatant can be asked about."""
    # Primary: points assigned directly by the player
    INTELLIGENCE = "intelligence"
    HEALTH = "health"
    SPECIAL = "special"
    ABILITIES = "abilities"

    # Secondary: derived from the primary values
    HEALTH_POINTS = "health_points"
    MANA = "mana"
    MANA_REGEN = "mana_regen"
    CRIT_CHANCE = "crit_chance"
    DODGE_CHANCE = "dodge_chance"
    SPECIAL_DAMAGE = "special_damage"

    @property
    def is_primary(self) -> bool:
        return self in PRIMARY_ATTRIBUTES


PRIMARY_ATTRIBUTES = (
    Attribute.INTELLIGENCE,
    Attribute.HEALTH,
    Attribute.SPECIAL,
    Attribute.ABILITIES,
)

SECONDARY_ATTRIBUTES = (
    Attribute.HEALTH_POINTS,
    Attribute.MANA,
    Attribute.MANA_REGEN,
    Attribute.CRIT_CHANCE,
    Attribute.DODGE_CHANCE,
    Attribute.SPECIAL_DAMAGE,
)


class PrimaryAttributes(BaseModel):
    """The four point-allocated attributes."""
    intelligence: int = Field(default=0, ge=0)
    health: int = Field(default=0, ge=0)
    special: int = Field(default=0, ge=0)
    abilities: int = Field(default=0, ge=0)

    def get(self, attr: Attribute) -> int:
        """Return the value of a primary attribute.

        Raises:
            UnsupportedAttributeError: If attr is a secondary attribute.
        """
        if not attr.is_primary:
            raise UnsupportedAttributeError(
                f"Attribute '{attr.value}' is not a primary attribute"
            )
        return getattr(self, attr.value)

    @property
    def total(self) -> int:
        """Total number of points spent across all primary attributes."""
        return self.intelligence + self.health + self.special + self.abilities


def secondary_value(attr: Attribute, primaries: PrimaryAttributes) -> float:
    """Compute a secondary attribute from a snapshot of primary attributes.

    Args:
        attr: The secondary attribute to compute.
        primaries: The primary attribute values to derive it from.

    Returns:
        The derived value. Chances are fractions in [0, 1).

    Raises:
        UnsupportedAttributeError: If attr is a primary attribute.
    """
    if attr not in SECONDARY_ATTRIBUTES:
        raise UnsupportedAttributeError(
            f"Attribute '{attr.value}' is not a secondary attribute"
        )

    if attr == Attribute.HEALTH_POINTS:
        return 1000 + 1000 * primaries.health
    if attr == Attribute.MANA:
        return 500 + 500 * primaries.intelligence
    if attr == Attribute.MANA_REGEN:
        return 100 + 50 * primaries.intelligence
    if attr == Attribute.CRIT_CHANCE:
        return 0.05 + 0.01 * primaries.intelligence + 0.02 * primaries.abilities
    if attr == Attribute.DODGE_CHANCE:
        return 0.05 + 0.02 * primaries.intelligence + 0.01 * primaries.abilities
    return 800 + 100 * primaries.special  # SPECIAL_DAMAGE
