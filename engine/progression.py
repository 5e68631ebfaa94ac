"""Character creation, experience and attribute point allocation."""

from __future__ import annotations

import logging

from config import (
    ATTRIBUTE_POINTS_PER_LEVEL,
    EXPERIENCE_PER_LEVEL,
    INITIAL_ATTRIBUTE_POINTS,
)
from models.attributes import Attribute, PrimaryAttributes, UnsupportedAttributeError
from models.characters import Player

logger = logging.getLogger(__name__)

# Starting builds offered at character selection
PREMADE_CLASSES: dict[str, PrimaryAttributes] = {
    "Mage 1": PrimaryAttributes(intelligence=2, health=1, special=1, abilities=0),
    "Mage 2": PrimaryAttributes(intelligence=2, health=1, special=1, abilities=0),
    "Mage 3": PrimaryAttributes(intelligence=2, health=1, special=1, abilities=0),
}


def create_player(name: str, class_type: str) -> Player:
    """Create a new character from a premade class.

    Args:
        name: Display name for the character.
        class_type: Key into PREMADE_CLASSES.

    Returns:
        A Player with zero experience, full health and starting mana.

    Raises:
        ValueError: If class_type is not a premade class.
    """
    if class_type not in PREMADE_CLASSES:
        raise ValueError(f"Unknown class '{class_type}'")
    return Player(
        name=name,
        class_type=class_type,
        attributes=PREMADE_CLASSES[class_type].model_copy(),
    )


def earned_attribute_points(experience: int) -> int:
    """Total points a character with this much experience may spend."""
    return INITIAL_ATTRIBUTE_POINTS + (experience // EXPERIENCE_PER_LEVEL) * ATTRIBUTE_POINTS_PER_LEVEL


def unspent_attribute_points(player: Player) -> int:
    return earned_attribute_points(player.experience) - player.attributes.total


def can_level_up(player: Player) -> bool:
    return unspent_attribute_points(player) > 0


def award_experience(player: Player, amount: int) -> Player:
    """Add experience to a player. Experience never decreases.

    Raises:
        ValueError: If amount is negative.
    """
    if amount < 0:
        raise ValueError("Experience cannot be taken away")
    player.experience += amount
    logger.info("%s gained %d experience (total %d)", player.name, amount, player.experience)
    return player


def allocate_attribute_points(player: Player, attr: Attribute, points: int = 1) -> Player:
    """Spend unspent attribute points on a primary attribute.

    Args:
        player: The player spending points.
        attr: A primary attribute.
        points: How many points to spend.

    Returns:
        The updated player.

    Raises:
        UnsupportedAttributeError: If attr is a secondary attribute.
        ValueError: If points is not positive or more than are available.
    """
    if not attr.is_primary:
        raise UnsupportedAttributeError(f"Cannot allocate points to '{attr.value}'")
    if points <= 0:
        raise ValueError("Points must be positive")

    available = unspent_attribute_points(player)
    if points > available:
        raise ValueError(f"Not enough attribute points ({points} requested, {available} available)")

    setattr(player.attributes, attr.value, player.primary(attr) + points)
    return player
