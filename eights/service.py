"""Convenience service layer for UI and agents."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional

from .cards import Card, card_label, deserialize_card, serialize_card, short_label
from .config import GameConfig
from .game import CrazyEightsGame
from .state import GameSnapshot, Phase, Side


@dataclass
class CardView:
    card: dict
    label: str
    short: str
    playable: bool = False


@dataclass
class GameView:
    phase: str
    turn: str
    hand: list[CardView]
    opponent_hand: list[CardView]
    opponent_card_count: int
    top_card: Optional[CardView]
    discard_count: int
    active_suit: Optional[str]
    stock_count: int
    winner: Optional[str]
    message: str
    must_draw: bool
    can_draw: bool
    can_pass: bool
    awaiting_suit: bool
    blocked: bool
    rejected: Optional[str]
    version: int
    events: list[dict]

    def to_dict(self) -> dict:
        return asdict(self)


def _card_view(card: Card, playable: bool = False) -> CardView:
    return CardView(card=serialize_card(card), label=card_label(card), short=short_label(card), playable=playable)


class GameService:
    """Facade around CrazyEightsGame for UI consumers.

    Every action returns a fresh view of the human's side of the table;
    refused actions come back with ``rejected`` set and nothing else changed.
    """

    def __init__(self, game: Optional[CrazyEightsGame] = None, config: Optional[GameConfig] = None) -> None:
        self.game = game or CrazyEightsGame(config)

    # Session lifecycle -------------------------------------------------

    def start_new_game(self) -> GameView:
        if self.game.phase in (Phase.NOT_STARTED, Phase.FINISHED):
            self.game.start()
        else:
            self.game.restart()
        return self.get_view()

    def has_active_game(self) -> bool:
        return self.game.phase is not Phase.NOT_STARTED

    # Actions -----------------------------------------------------------

    def play_card(self, card_payload: dict) -> GameView:
        try:
            card = deserialize_card(card_payload)
        except ValueError as exc:
            self.game.reject(str(exc))
            return self.get_view()
        self.game.attempt_play(Side.HUMAN, card)
        return self.get_view()

    def draw_card(self) -> GameView:
        self.game.attempt_draw(Side.HUMAN)
        return self.get_view()

    def choose_suit(self, suit: str) -> GameView:
        self.game.choose_suit(suit)
        return self.get_view()

    def end_turn(self) -> GameView:
        self.game.pass_turn(Side.HUMAN)
        return self.get_view()

    def advance_opponent(self) -> GameView:
        self.game.advance()
        return self.get_view()

    # Views -------------------------------------------------------------

    def get_view(self) -> GameView:
        snap = self.game.snapshot()
        return build_view(snap)


def build_view(snap: GameSnapshot) -> GameView:
    human_turn = snap.phase is Phase.AWAITING_PLAY and snap.turn is Side.HUMAN and not snap.blocked
    playable = set(snap.playable) if human_turn else set()
    top = snap.top_card
    return GameView(
        phase=str(snap.phase),
        turn=str(snap.turn),
        hand=[_card_view(card, card in playable) for card in snap.player_hand],
        opponent_hand=[_card_view(card) for card in snap.opponent_hand],
        opponent_card_count=len(snap.opponent_hand),
        top_card=_card_view(top) if top is not None else None,
        discard_count=len(snap.discard_pile),
        active_suit=str(snap.active_suit) if snap.active_suit else None,
        stock_count=snap.stock_count,
        winner=str(snap.winner) if snap.winner else None,
        message=snap.message,
        must_draw=snap.must_draw,
        can_draw=human_turn,
        can_pass=human_turn and snap.drawn_playable,
        awaiting_suit=snap.phase is Phase.AWAITING_SUIT_CHOICE,
        blocked=snap.blocked,
        rejected=snap.last_rejection,
        version=snap.version,
        events=[event.to_dict() for event in snap.events],
    )
