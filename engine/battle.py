"""Battle orchestration: turn order, turn-start effects and win detection."""

from __future__ import annotations

import asyncio
import logging
import random
from datetime import datetime, timezone
from typing import Protocol
from uuid import uuid4

import config
from engine.catalogue import find_action, get_catalogue
from engine.dice import new_rng
from engine.opponents import generate_opponent_action
from engine.rules import check_action_gates, resolve_action
from models.actions import Action, RejectionReason
from models.battle import (
    BattleEvent,
    BattleOutcome,
    BattleState,
    BattleStatus,
    Side,
    TurnResult,
)
from models.characters import Opponent, Player

logger = logging.getLogger(__name__)


class TurnOrderError(RuntimeError):
    """Raised when a turn is played by a side that does not own it."""


class BattleHost(Protocol):
    """What the surrounding game must provide to run a battle."""

    def show_message(self, text: str) -> None:
        """Display one line of battle narrative."""

    def on_battle_end(self, outcome: BattleOutcome) -> None:
        """Receive the result of the battle. Called exactly once."""


def start_battle(
    player: Player,
    opponent: Opponent,
    rng: random.Random | None = None,
    host: BattleHost | None = None,
    battle_id: str | None = None,
) -> BattleState:
    """Begin a battle with the player to move first.

    The player's health, mana and status effects are restored. The opponent
    is used as given; call ``opponent.reset()`` first to retry an encounter.

    Args:
        player: The player character.
        opponent: The opponent to fight.
        rng: Random source for every roll in this battle. Defaults to one
            seeded from RNG_SEED.
        host: Optional receiver of narrative and the outcome.
        battle_id: Identifier for the battle. Generated when omitted.

    Returns:
        A BattleState in PLAYER_TURN.

    Raises:
        ValueError: If the opponent is already dead.
    """
    if opponent.is_dead():
        raise ValueError("Opponent is already dead; reset it before starting a battle")

    player.on_battle_start()

    battle = BattleState(
        battle_id=battle_id or str(uuid4()),
        player=player,
        opponent=opponent,
    )
    battle._rng = rng or new_rng()
    battle._host = host

    logger.info(
        "Battle %s started: %s (%d HP) vs %s (%d HP)",
        battle.battle_id, player.name, player.current_health,
        opponent.name, opponent.current_health,
    )
    return battle


def retry_battle(battle: BattleState) -> BattleState:
    """Start the same encounter again after the player has lost it.

    A won encounter cannot be fought again.

    Args:
        battle: A battle the opponent won.

    Returns:
        A new BattleState with the same id, players and random source.

    Raises:
        TurnOrderError: If the battle is still in progress or was won.
    """
    if not battle.is_over:
        raise TurnOrderError("Battle is still in progress")
    if battle.winner != Side.OPPONENT:
        raise TurnOrderError("Only a lost battle can be retried")
    battle.opponent.reset()
    return start_battle(
        battle.player,
        battle.opponent,
        rng=battle.rng,
        host=battle.host,
        battle_id=battle.battle_id,
    )


def submit_player_action(
    battle: BattleState,
    action_name: str,
    catalogue: dict[str, Action] | None = None,
) -> TurnResult:
    """Play the player's turn with a catalogue action.

    An action that fails a gating check is rejected without changing any
    state.

    Args:
        battle: Current battle state.
        action_name: Name of the catalogue action (case-insensitive).
        catalogue: Player actions to choose from. Defaults to the configured one.

    Returns:
        TurnResult describing the turn, or the rejection.

    Raises:
        TurnOrderError: If it is not the player's turn.
    """
    if battle.status != BattleStatus.PLAYER_TURN:
        raise TurnOrderError(f"It is not the player's turn (status: {battle.status.value})")

    player = battle.player
    opponent = battle.opponent

    if catalogue is None:
        catalogue = get_catalogue()
    action = find_action(action_name, catalogue)

    rejection = check_action_gates(action, player, opponent)
    if rejection is not None:
        logger.info("Battle %s: rejected %r (%s)", battle.battle_id, action_name, rejection.value)
        return _turn_result(battle, accepted=False, rejection=rejection, action=action)

    messages = [f"{player.name} used {action.name}."]
    player.remove_mana(action.mana_cost)
    outcome = resolve_action(action, player, opponent, battle.rng)
    messages.extend(outcome.messages)
    _log(battle, Side.PLAYER, messages, action.name)

    messages.extend(_end_turn(battle, Side.OPPONENT))
    return _publish(battle, action, messages)


def advance_opponent_turn(battle: BattleState) -> TurnResult:
    """Play the opponent's turn with an action from its behavior policy.

    Args:
        battle: Current battle state.

    Returns:
        TurnResult describing the turn.

    Raises:
        TurnOrderError: If it is not the opponent's turn.
    """
    if battle.status != BattleStatus.OPPONENT_TURN:
        raise TurnOrderError(f"It is not the opponent's turn (status: {battle.status.value})")

    player = battle.player
    opponent = battle.opponent

    action = generate_opponent_action(opponent, player, battle.rng)
    messages = [f"{opponent.name} used {action.name}."]
    outcome = resolve_action(action, opponent, player, battle.rng)
    messages.extend(outcome.messages)
    _log(battle, Side.OPPONENT, messages, action.name)

    messages.extend(_end_turn(battle, Side.PLAYER))
    return _publish(battle, action, messages)


async def run_opponent_turn(battle: BattleState, delay: float | None = None) -> TurnResult:
    """Wait out the opponent's thinking time, then play its turn.

    Only the caller is suspended during the delay. Once the action is drawn
    the turn completes without yielding.

    Args:
        battle: Current battle state.
        delay: Seconds to wait. Defaults to OPPONENT_TURN_DELAY_SECONDS.

    Raises:
        TurnOrderError: If it is not the opponent's turn.
    """
    if battle.status != BattleStatus.OPPONENT_TURN:
        raise TurnOrderError(f"It is not the opponent's turn (status: {battle.status.value})")

    if delay is None:
        delay = config.OPPONENT_TURN_DELAY_SECONDS
    await asyncio.sleep(delay)
    return advance_opponent_turn(battle)


def check_winner(battle: BattleState) -> Side | None:
    """Return the side that has won, or None if both are standing."""
    if battle.player.is_dead():
        return Side.OPPONENT
    if battle.opponent.is_dead():
        return Side.PLAYER
    return None


def _end_turn(battle: BattleState, next_side: Side) -> list[str]:
    """Hand the turn to next_side, running its turn-start effects first.

    A lethal turn-start effect resolves the battle before the new turn's
    action can be chosen.
    """
    messages: list[str] = []

    winner = check_winner(battle)
    if winner is None:
        battle.turn_number += 1
        if next_side == Side.PLAYER:
            battle.status = BattleStatus.PLAYER_TURN
            ticked = battle.player.on_turn_start()
        else:
            battle.status = BattleStatus.OPPONENT_TURN
            ticked = battle.opponent.on_turn_start()
        _log(battle, next_side, ticked)
        messages.extend(ticked)
        winner = check_winner(battle)

    if winner is not None:
        messages.append(_resolve(battle, winner))

    return messages


def _resolve(battle: BattleState, winner: Side) -> str:
    """Put the battle into its terminal state and record the outcome."""
    battle.status = BattleStatus.RESOLVED
    battle.winner = winner
    battle.outcome = BattleOutcome(
        winner=winner,
        experience_reward=battle.opponent.experience_reward,
    )

    if winner == Side.PLAYER:
        line = f"{battle.player.name} defeated {battle.opponent.name}!"
    else:
        line = f"{battle.player.name} was defeated by {battle.opponent.name}."
    loser = Side.OPPONENT if winner == Side.PLAYER else Side.PLAYER
    _log(battle, loser, [line])

    logger.info(
        "Battle %s resolved: winner=%s reward=%d",
        battle.battle_id, winner.value, battle.outcome.experience_reward,
    )
    return line


def _log(
    battle: BattleState,
    side: Side,
    lines: list[str],
    action_name: str | None = None,
) -> None:
    now = datetime.now(timezone.utc)
    for line in lines:
        battle.event_log.append(BattleEvent(
            turn=battle.turn_number,
            side=side,
            action_name=action_name,
            description=line,
            timestamp=now,
        ))


def _publish(battle: BattleState, action: Action, messages: list[str]) -> TurnResult:
    """Snapshot the finished turn and pass it on to the host."""
    result = _turn_result(battle, accepted=True, action=action, messages=messages)

    host = battle.host
    if host is not None:
        for line in messages:
            host.show_message(line)
        if result.outcome is not None:
            host.on_battle_end(result.outcome)

    return result


def _turn_result(
    battle: BattleState,
    accepted: bool,
    rejection: RejectionReason | None = None,
    action: Action | None = None,
    messages: list[str] | None = None,
) -> TurnResult:
    # The outcome is reported only by the turn that produced it
    just_resolved = accepted and battle.status == BattleStatus.RESOLVED
    return TurnResult(
        accepted=accepted,
        status=battle.status,
        rejection=rejection,
        action=action,
        messages=messages or [],
        outcome=battle.outcome if just_resolved else None,
        player=battle.player.model_copy(deep=True),
        opponent=battle.opponent.model_copy(deep=True),
    )
