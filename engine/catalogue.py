"""The player's action catalogue.

The table below is plain data so it can be tuned without touching the
resolution rules. A JSON file named by ACTION_CATALOGUE_FILE replaces it.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import TypeAdapter

import config
from models.actions import Action, ActionKind, ActionSource

logger = logging.getLogger(__name__)

# (name, kind, effect, duration, mana_cost, required_ability_points)
PLAYER_ACTION_TABLE: list[tuple[str, ActionKind, float, int, int, int]] = [
    # Hits
    ("Weak Hit",   ActionKind.HIT, 300, 0, 0,   0),
    ("Medium Hit", ActionKind.HIT, 500, 0, 150, 1),
    ("Strong Hit", ActionKind.HIT, 900, 0, 400, 4),

    # Poison: damage over several turns
    ("Weak Poison",   ActionKind.POISON, 100, 3, 0,   0),
    ("Medium Poison", ActionKind.POISON, 150, 4, 300, 3),
    ("Strong Poison", ActionKind.POISON, 200, 5, 600, 10),

    # Healing
    ("Weak Healing",      ActionKind.HEALING, 250, 0, 200, 0),
    ("Strong Healing",    ActionKind.HEALING, 500, 0, 500, 6),
    ("Sustained Healing", ActionKind.HEALING, 500, 4, 700, 8),

    # Protection: effect is the incoming damage multiplier
    ("Weak Protection",   ActionKind.PROTECTION, 0.5, 3, 200, 0),
    ("Strong Protection", ActionKind.PROTECTION, 0.5, 5, 500, 5),

    # Special: damage comes from the player's SPECIAL_DAMAGE attribute
    ("Special Attack", ActionKind.SPECIAL, 0, 0, 1000, 0),
]

_actions_adapter = TypeAdapter(list[Action])


def build_catalogue(
    rows: list[tuple[str, ActionKind, float, int, int, int]],
) -> dict[str, Action]:
    """Turn table rows into Actions keyed by name, in table order."""
    catalogue: dict[str, Action] = {}
    for name, kind, effect, duration, mana_cost, required in rows:
        catalogue[name] = Action(
            name=name,
            kind=kind,
            effect=effect,
            duration=duration,
            mana_cost=mana_cost,
            required_ability_points=required,
            source=ActionSource.PLAYER,
        )
    return catalogue


def load_catalogue(path: str) -> dict[str, Action]:
    """Load a catalogue from a JSON list of action objects.

    Args:
        path: JSON file path.

    Returns:
        Actions keyed by name.

    Raises:
        FileNotFoundError: If the file does not exist.
        pydantic.ValidationError: If an entry is malformed.
    """
    with open(Path(path)) as f:
        data = json.load(f)
    actions = _actions_adapter.validate_python(data)
    logger.info("Loaded %d player actions from %s", len(actions), path)
    return {
        action.name: action.model_copy(update={"source": ActionSource.PLAYER})
        for action in actions
    }


def get_catalogue() -> dict[str, Action]:
    """Return the configured player catalogue."""
    if config.ACTION_CATALOGUE_FILE:
        return load_catalogue(config.ACTION_CATALOGUE_FILE)
    return build_catalogue(PLAYER_ACTION_TABLE)


def find_action(name: str, catalogue: dict[str, Action]) -> Action | None:
    """Look up an action by name, ignoring case."""
    for action in catalogue.values():
        if action.name.lower() == name.lower():
            return action
    return None
