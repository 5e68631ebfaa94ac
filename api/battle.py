"""Battle start, turn submission, state and log endpoints."""

from __future__ import annotations

import logging
import random

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from api.players import get_player_or_404
from api.ws import notify_battle_over, notify_turn_result
from engine.battle import (
    TurnOrderError,
    retry_battle,
    run_opponent_turn,
    start_battle,
    submit_player_action,
)
from engine.opponents import create_opponent
from engine.progression import award_experience
from models.actions import Action
from models.battle import BattleOutcome, BattleState, Side, TurnResult
from models.characters import OpponentTier, Player

logger = logging.getLogger(__name__)

router = APIRouter()


class StartBattleRequest(BaseModel):
    """Request body for starting a battle."""
    player_id: str
    tier: OpponentTier = OpponentTier.COMMON


class ActionSubmission(BaseModel):
    """Request body for the player's turn."""
    action_name: str


class ExperienceHost:
    """Battle host that logs the narrative and pays out experience on a win."""

    def __init__(self, player: Player) -> None:
        self.player = player

    def show_message(self, text: str) -> None:
        logger.debug(text)

    def on_battle_end(self, outcome: BattleOutcome) -> None:
        if outcome.winner == Side.PLAYER:
            award_experience(self.player, outcome.experience_reward)


def _get_battles(request: Request) -> dict[str, BattleState]:
    """Get the battle registry from app state."""
    return request.app.state.battles


def _get_battle(request: Request, battle_id: str) -> BattleState:
    battle = _get_battles(request).get(battle_id)
    if battle is None:
        raise HTTPException(status_code=404, detail=f"Battle '{battle_id}' not found")
    return battle


def _ensure_not_fighting(request: Request, player: Player) -> None:
    """Reject a battle start while the player is still in another battle."""
    for battle in _get_battles(request).values():
        if battle.player is player and not battle.is_over:
            raise HTTPException(
                status_code=409,
                detail=f"Player is already in battle '{battle.battle_id}'",
            )


def _new_rng(request: Request) -> random.Random:
    """Derive a battle's random source from the app-wide one."""
    return random.Random(request.app.state.rng.getrandbits(64))


async def _announce(battle: BattleState, result: TurnResult) -> None:
    await notify_turn_result(battle.battle_id, result)
    if result.outcome is not None:
        await notify_battle_over(battle.battle_id, result.outcome)


@router.get("/actions", response_model=list[Action])
def list_actions(request: Request) -> list[Action]:
    """List the player's action catalogue."""
    return list(request.app.state.catalogue.values())


@router.post("")
def create_battle(body: StartBattleRequest, request: Request) -> dict:
    """Start a battle between a player and a new opponent of the given tier."""
    player = get_player_or_404(request, body.player_id)
    _ensure_not_fighting(request, player)
    rng = _new_rng(request)
    opponent = create_opponent(body.tier, player.experience, rng)
    battle = start_battle(player, opponent, rng=rng, host=ExperienceHost(player))
    _get_battles(request)[battle.battle_id] = battle
    return battle.model_dump(mode="json")


@router.get("/{battle_id}")
def get_battle(battle_id: str, request: Request) -> dict:
    """Get the current state of a battle."""
    return _get_battle(request, battle_id).model_dump(mode="json")


@router.post("/{battle_id}/action", response_model=TurnResult)
async def submit_action(
    battle_id: str,
    body: ActionSubmission,
    request: Request,
) -> TurnResult:
    """Submit the player's action for the current turn."""
    battle = _get_battle(request, battle_id)

    try:
        result = submit_player_action(battle, body.action_name, request.app.state.catalogue)
    except TurnOrderError as e:
        raise HTTPException(status_code=409, detail=str(e))

    if not result.accepted:
        raise HTTPException(status_code=400, detail=result.rejection.value)

    await _announce(battle, result)
    return result


@router.post("/{battle_id}/opponent-turn", response_model=TurnResult)
async def opponent_turn(battle_id: str, request: Request) -> TurnResult:
    """Let the opponent take its turn after its thinking delay."""
    battle = _get_battle(request, battle_id)

    try:
        result = await run_opponent_turn(battle)
    except TurnOrderError as e:
        raise HTTPException(status_code=409, detail=str(e))

    await _announce(battle, result)
    return result


@router.post("/{battle_id}/retry")
def retry(battle_id: str, request: Request) -> dict:
    """Fight a lost encounter again with the opponent reset."""
    battle = _get_battle(request, battle_id)
    if battle.is_over:
        _ensure_not_fighting(request, battle.player)
    try:
        battle = retry_battle(battle)
    except TurnOrderError as e:
        raise HTTPException(status_code=409, detail=str(e))
    _get_battles(request)[battle.battle_id] = battle
    return battle.model_dump(mode="json")


@router.get("/{battle_id}/log")
def get_battle_log(battle_id: str, request: Request) -> list[dict]:
    """Get the narrative log of a battle."""
    battle = _get_battle(request, battle_id)
    return [event.model_dump(mode="json") for event in battle.event_log]
