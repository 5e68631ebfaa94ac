"""WebSocket endpoint for real-time battle notifications."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from models.battle import BattleOutcome, TurnResult

router = APIRouter()

# Connected presentation clients
connections: list[WebSocket] = []


async def broadcast(message: dict[str, Any]) -> None:
    """Send a message to all connected WebSocket clients.

    Args:
        message: The JSON-serializable message to send.
    """
    disconnected = []
    for i, ws in enumerate(connections):
        try:
            await ws.send_json(message)
        except (WebSocketDisconnect, RuntimeError):
            disconnected.append(i)
    # Clean up disconnected clients
    for i in reversed(disconnected):
        connections.pop(i)


async def notify_turn_result(battle_id: str, result: TurnResult) -> None:
    """Notify all clients of a completed turn."""
    await broadcast({
        "type": "turn_result",
        "battle_id": battle_id,
        **result.model_dump(mode="json"),
    })


async def notify_battle_over(battle_id: str, outcome: BattleOutcome) -> None:
    """Notify all clients that a battle has been resolved."""
    await broadcast({
        "type": "battle_over",
        "battle_id": battle_id,
        **outcome.model_dump(mode="json"),
    })


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket) -> None:
    """Stream turn results to a presentation layer.

    Clients only ever see whole turns: each message is a snapshot taken
    after the turn finished.
    """
    await websocket.accept()
    connections.append(websocket)

    try:
        await websocket.send_json({"type": "connected"})

        # Keep connection alive, listen for client messages (optional)
        while True:
            try:
                await websocket.receive_text()
            except WebSocketDisconnect:
                break
    finally:
        if websocket in connections:
            connections.remove(websocket)
