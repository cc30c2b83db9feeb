from fastapi.testclient import TestClient

from eights.cards import parse_card
from eights.config import GameConfig
from eights.deck import build_deck
from eights.game import CrazyEightsGame
from eights.service import GameService
from server.play_service import app, sessions

client = TestClient(app)


def start(seed: int = 3) -> tuple[str, dict]:
    response = client.post("/games", json={"config": {"seed": seed}})
    assert response.status_code == 200
    payload = response.json()
    return payload["game_id"], payload["state"]


def test_start_and_fetch_game():
    game_id, state = start()
    assert game_id in sessions
    assert len(state["hand"]) == 8
    assert state["phase"] == "awaiting_play"
    assert state["turn"] == "human"

    fetched = client.get(f"/games/{game_id}").json()["state"]
    assert fetched["version"] == state["version"]
    assert fetched["top_card"] == state["top_card"]


def test_start_without_body_uses_defaults():
    response = client.post("/games")
    assert response.status_code == 200
    assert len(response.json()["state"]["hand"]) == 8


def test_unknown_game_returns_404():
    response = client.get("/games/missing")
    assert response.status_code == 404
    assert response.json()["detail"] == "Game not found"
    assert client.post("/games/missing/draw").status_code == 404


def test_playing_opponent_card_is_rejected():
    game_id, state = start()
    card = state["opponent_hand"][0]["card"]
    response = client.post(f"/games/{game_id}/play", json=card)
    assert response.status_code == 200
    after = response.json()["state"]
    assert after["rejected"]
    assert after["version"] == state["version"]
    assert after["hand"] == state["hand"]


def test_legal_play_advances_version():
    game_id, state = start()
    playable = [view["card"] for view in state["hand"] if view["playable"]]
    if playable:
        response = client.post(f"/games/{game_id}/play", json=playable[0])
    else:
        response = client.post(f"/games/{game_id}/draw")
    after = response.json()["state"]
    assert after["rejected"] is None
    assert after["version"] > state["version"]


def test_suit_choice_without_eight_is_rejected():
    game_id, _ = start()
    after = client.post(f"/games/{game_id}/suit", json={"suit": "spades"}).json()["state"]
    assert after["rejected"] == "No suit choice is pending."


def test_delete_game():
    game_id, _ = start()
    response = client.delete(f"/games/{game_id}")
    assert response.json() == {"game_id": game_id, "deleted": True}
    assert game_id not in sessions
    assert client.get(f"/games/{game_id}").status_code == 404


def register(game_id: str, game: CrazyEightsGame) -> str:
    service = GameService(game)
    if not service.has_active_game():
        service.start_new_game()
    sessions[game_id] = service
    return game_id


def fixed_deck_game() -> CrazyEightsGame:
    return CrazyEightsGame(GameConfig(autoplay_opponent=False), deck=build_deck())


def test_eight_then_suit_then_advance():
    game_id = register("fixed-eight", fixed_deck_game())

    state = client.post(f"/games/{game_id}/play", json={"rank": "eight", "suit": "hearts"}).json()["state"]
    assert state["awaiting_suit"]
    assert state["top_card"]["short"] == "8♥"

    state = client.post(f"/games/{game_id}/suit", json={"suit": "spades"}).json()["state"]
    assert state["rejected"] is None
    assert state["active_suit"] == "spades"
    assert state["turn"] == "computer"

    # No spade and no eight in the computer hand: it draws the king of spades and keeps the turn.
    state = client.post(f"/games/{game_id}/advance").json()["state"]
    assert state["stock_count"] == 34
    assert state["opponent_card_count"] == 9
    assert state["turn"] == "computer"

    state = client.post(f"/games/{game_id}/advance").json()["state"]
    assert state["opponent_card_count"] == 8
    assert state["turn"] == "human"

    state = client.post(f"/games/{game_id}/advance").json()["state"]
    assert state["rejected"] == "It is not the computer's turn."


def test_productive_draw_then_pass():
    game = CrazyEightsGame.from_position(
        player_hand=[parse_card("3C"), parse_card("4S")],
        opponent_hand=[parse_card("9C"), parse_card("JD")],
        discard=[parse_card("KH")],
        stock=[parse_card("5H")],
        config=GameConfig(autoplay_opponent=False),
    )
    game_id = register("fixed-pass", game)

    state = client.post(f"/games/{game_id}/draw").json()["state"]
    assert state["can_pass"]
    assert [view["short"] for view in state["hand"] if view["playable"]] == ["5♥"]

    state = client.post(f"/games/{game_id}/pass").json()["state"]
    assert state["rejected"] is None
    assert state["turn"] == "computer"
    assert state["message"] == "You kept the card. AI's turn."
    assert len(state["hand"]) == 3


def test_restart_deals_fresh_game():
    game_id = register("fixed-restart", fixed_deck_game())
    before = client.post(f"/games/{game_id}/play", json={"rank": "four", "suit": "hearts"}).json()["state"]
    assert len(before["hand"]) == 7

    state = client.post(f"/games/{game_id}/restart").json()["state"]
    assert state["stock_count"] == 35
    assert len(state["hand"]) == 8
    assert state["turn"] == "human"
    assert state["version"] > before["version"]


def test_bad_seed_in_environment_returns_422(monkeypatch):
    monkeypatch.setenv("EIGHTS_SEED", "not-a-number")
    response = client.post("/games")
    assert response.status_code == 422
    assert "Invalid configuration" in response.json()["detail"]
