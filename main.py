"""FastAPI app entry point for the Marduk battle server."""

import logging

from fastapi import FastAPI

from api.battle import router as battle_router
from api.players import router as players_router
from api.ws import router as ws_router
from config import LOG_LEVEL
from engine.catalogue import get_catalogue
from engine.dice import new_rng

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Marduk Battle Server",
    description="Turn-based battle engine for a role-playing game",
    version="0.1.0",
)

app.state.players = {}
app.state.battles = {}
app.state.catalogue = get_catalogue()
app.state.rng = new_rng()

app.include_router(players_router, prefix="/players", tags=["Players"])
app.include_router(battle_router, prefix="/battles", tags=["Battles"])
app.include_router(ws_router, prefix="/battles", tags=["WebSocket"])


@app.get("/")
def root() -> dict:
    """Root endpoint returning server info."""
    return {"name": "Marduk Battle Server", "version": "0.1.0", "status": "running"}


@app.get("/health")
def health() -> dict:
    """Health check endpoint."""
    return {"healthy": True}
