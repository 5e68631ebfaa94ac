"""Character creation, lookup and attribute allocation endpoints."""

from uuid import uuid4

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from engine.progression import (
    PREMADE_CLASSES,
    allocate_attribute_points,
    can_level_up,
    create_player,
    unspent_attribute_points,
)
from models.attributes import Attribute, UnsupportedAttributeError
from models.characters import Player

router = APIRouter()


class CreatePlayerRequest(BaseModel):
    """Request body for creating a character."""
    name: str
    class_type: str = "Mage 1"


class PlayerResponse(BaseModel):
    """A character and the points they still have to spend."""
    player_id: str
    player: Player
    unspent_points: int
    can_level_up: bool


class AllocateRequest(BaseModel):
    """Request body for spending attribute points."""
    attribute: Attribute
    points: int = Field(default=1, gt=0)


def _get_players(request: Request) -> dict[str, Player]:
    """Get the player registry from app state."""
    return request.app.state.players


def get_player_or_404(request: Request, player_id: str) -> Player:
    player = _get_players(request).get(player_id)
    if player is None:
        raise HTTPException(status_code=404, detail=f"Player '{player_id}' not found")
    return player


def _response(player_id: str, player: Player) -> PlayerResponse:
    return PlayerResponse(
        player_id=player_id,
        player=player,
        unspent_points=unspent_attribute_points(player),
        can_level_up=can_level_up(player),
    )


@router.get("/classes")
def list_classes() -> dict:
    """List the premade classes available at character selection."""
    return {name: attrs.model_dump() for name, attrs in PREMADE_CLASSES.items()}


@router.post("", response_model=PlayerResponse)
def create(body: CreatePlayerRequest, request: Request) -> PlayerResponse:
    """Create a new character from a premade class."""
    try:
        player = create_player(body.name, body.class_type)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    player_id = str(uuid4())
    _get_players(request)[player_id] = player
    return _response(player_id, player)


@router.get("/{player_id}", response_model=PlayerResponse)
def get(player_id: str, request: Request) -> PlayerResponse:
    """Get a character."""
    return _response(player_id, get_player_or_404(request, player_id))


@router.post("/{player_id}/attributes", response_model=PlayerResponse)
def allocate(player_id: str, body: AllocateRequest, request: Request) -> PlayerResponse:
    """Spend unspent attribute points on a primary attribute."""
    player = get_player_or_404(request, player_id)
    try:
        allocate_attribute_points(player, body.attribute, body.points)
    except (UnsupportedAttributeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _response(player_id, player)
