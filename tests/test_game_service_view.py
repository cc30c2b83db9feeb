from eights.config import GameConfig
from eights.deck import build_deck
from eights.game import CrazyEightsGame
from eights.service import GameService


def make_service(autoplay: bool = True) -> GameService:
    game = CrazyEightsGame(GameConfig(autoplay_opponent=autoplay), deck=build_deck())
    return GameService(game)


def test_game_service_initial_view():
    service = make_service()
    assert not service.has_active_game()

    view = service.start_new_game()
    assert view.phase == "awaiting_play"
    assert view.turn == "human"
    assert len(view.hand) == 8
    assert [card.short for card in view.hand if card.playable] == ["4♥", "8♥"]
    assert view.top_card.label == "Four of Diamonds"
    assert view.active_suit == "diamonds"
    assert view.stock_count == 35
    assert view.opponent_card_count == 8
    assert view.can_draw
    assert not view.can_pass
    assert view.rejected is None


def test_game_service_updates_after_play():
    service = make_service()
    service.start_new_game()

    view = service.play_card({"rank": "four", "suit": "hearts"})
    assert view.top_card.short == "9♥"
    assert view.turn == "human"
    assert view.opponent_card_count == 7
    assert [event["kind"] for event in view.events][-2:] == ["card_played", "card_played"]


def test_game_service_rejects_malformed_card():
    service = make_service()
    before = service.start_new_game()

    view = service.play_card({"rank": "joker", "suit": "hearts"})
    assert view.rejected == "Unknown rank: 'joker'"
    assert view.version == before.version
    assert len(view.hand) == 8


def test_game_service_suit_choice_flow():
    service = make_service(autoplay=False)
    service.start_new_game()

    view = service.play_card({"rank": "eight", "suit": "hearts"})
    assert view.awaiting_suit
    assert not view.can_draw
    assert view.message == "Choose a new suit!"

    view = service.choose_suit("spades")
    assert not view.awaiting_suit
    assert view.active_suit == "spades"
    assert view.turn == "computer"

    view = service.advance_opponent()
    assert view.turn in ("human", "computer")
    assert view.version > 0


def test_game_service_restart_deals_again():
    service = make_service()
    first = service.start_new_game()
    service.play_card({"rank": "four", "suit": "hearts"})
    again = service.start_new_game()
    assert again.stock_count == 35
    assert again.version > first.version
    assert again.to_dict()["hand"][0]["card"] == {"rank": "ace", "suit": "hearts"}
