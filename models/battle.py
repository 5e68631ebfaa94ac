"""Battle state, event and turn result models."""

import random
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, PrivateAttr

from models.actions import Action, RejectionReason
from models.characters import Opponent, Player


class BattleStatus(str, Enum):
    """Possible states of the battle state machine."""
    PLAYER_TURN = "player_turn"
    OPPONENT_TURN = "opponent_turn"
    RESOLVED = "resolved"           # Terminal, see BattleState.winner


class Side(str, Enum):
    """One of the two participants."""
    PLAYER = "player"
    OPPONENT = "opponent"


class BattleEvent(BaseModel):
    """A logged line of battle narrative."""
    turn: int
    side: Side
    action_name: str | None = None  # None for turn-start effects
    description: str
    timestamp: datetime


class BattleOutcome(BaseModel):
    """The single notification sent when a battle ends."""
    model_config = ConfigDict(frozen=True)

    winner: Side
    experience_reward: int


class TurnResult(BaseModel):
    """Immutable snapshot handed back after a turn attempt."""
    model_config = ConfigDict(frozen=True)

    accepted: bool
    status: BattleStatus
    rejection: RejectionReason | None = None
    action: Action | None = None
    messages: list[str] = []
    outcome: BattleOutcome | None = None
    player: Player                  # Copies, safe to read after later turns
    opponent: Opponent


class BattleState(BaseModel):
    """The full state of one battle."""
    battle_id: str
    player: Player
    opponent: Opponent
    status: BattleStatus = BattleStatus.PLAYER_TURN
    turn_number: int = 1
    winner: Side | None = None
    outcome: BattleOutcome | None = None
    event_log: list[BattleEvent] = []

    _rng: random.Random = PrivateAttr(default_factory=random.Random)
    _host: Any = PrivateAttr(default=None)

    @property
    def rng(self) -> random.Random:
        return self._rng

    @property
    def host(self) -> Any:
        return self._host

    @property
    def is_over(self) -> bool:
        return self.status == BattleStatus.RESOLVED
