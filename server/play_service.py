"""REST service to play Crazy Eights against the computer opponent."""

from __future__ import annotations

import logging
import os
import uuid
from typing import Dict, Optional

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ValidationError

from eights.config import GameConfig, load_config
from eights.service import GameService, GameView

logger = logging.getLogger(__name__)


class StartRequest(BaseModel):
    config: Optional[GameConfig] = None


class CardRequest(BaseModel):
    rank: str
    suit: str


class SuitRequest(BaseModel):
    suit: str


sessions: Dict[str, GameService] = {}


app = FastAPI(title="Crazy Eights Play Service")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def serialize_state(view: GameView) -> Dict[str, object]:
    return view.to_dict()


def ensure_session(game_id: str) -> GameService:
    service = sessions.get(game_id)
    if service is None:
        raise HTTPException(status_code=404, detail="Game not found")
    return service


@app.post("/games")
def start_game(request: Optional[StartRequest] = None) -> Dict[str, object]:
    if request and request.config:
        config = request.config
    else:
        try:
            config = load_config()
        except ValidationError as exc:
            logger.warning(f"Invalid environment configuration: {exc}")
            raise HTTPException(status_code=422, detail=f"Invalid configuration: {exc}") from exc
    service = GameService(config=config)
    view = service.start_new_game()
    game_id = uuid.uuid4().hex
    sessions[game_id] = service
    logger.info(f"Started game {game_id}")
    return {"game_id": game_id, "state": serialize_state(view)}


@app.get("/games/{game_id}")
def get_game(game_id: str) -> Dict[str, object]:
    service = ensure_session(game_id)
    return {"state": serialize_state(service.get_view())}


@app.post("/games/{game_id}/play")
def play_card(game_id: str, request: CardRequest) -> Dict[str, object]:
    service = ensure_session(game_id)
    view = service.play_card({"rank": request.rank, "suit": request.suit})
    return {"state": serialize_state(view)}


@app.post("/games/{game_id}/draw")
def draw_card(game_id: str) -> Dict[str, object]:
    service = ensure_session(game_id)
    return {"state": serialize_state(service.draw_card())}


@app.post("/games/{game_id}/suit")
def choose_suit(game_id: str, request: SuitRequest) -> Dict[str, object]:
    service = ensure_session(game_id)
    return {"state": serialize_state(service.choose_suit(request.suit))}


@app.post("/games/{game_id}/pass")
def end_turn(game_id: str) -> Dict[str, object]:
    service = ensure_session(game_id)
    return {"state": serialize_state(service.end_turn())}


@app.post("/games/{game_id}/advance")
def advance_opponent(game_id: str) -> Dict[str, object]:
    service = ensure_session(game_id)
    return {"state": serialize_state(service.advance_opponent())}


@app.post("/games/{game_id}/restart")
def restart_game(game_id: str) -> Dict[str, object]:
    service = ensure_session(game_id)
    return {"state": serialize_state(service.start_new_game())}


@app.delete("/games/{game_id}")
def end_game(game_id: str) -> Dict[str, object]:
    ensure_session(game_id)
    del sessions[game_id]
    return {"game_id": game_id, "deleted": True}


def main() -> None:
    logging.basicConfig(
        level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    # Fail at startup rather than on the first request.
    load_config()
    uvicorn.run(app, host=os.getenv("EIGHTS_HOST", "127.0.0.1"), port=int(os.getenv("EIGHTS_PORT", "8000")))


if __name__ == "__main__":
    main()
