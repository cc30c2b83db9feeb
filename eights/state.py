"""Game state for Crazy Eights."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from .cards import Card, Suit
from .deck import DECK_SIZE, build_deck
from .rules import has_playable, playable_cards

if TYPE_CHECKING:  # pragma: no cover - import cycle guard for type checking only
    from .events import GameEvent


WELCOME_MESSAGE = "Welcome to Crazy Eights!"


class Phase(Enum):
    NOT_STARTED = auto()
    AWAITING_PLAY = auto()
    AWAITING_SUIT_CHOICE = auto()
    FINISHED = auto()

    def __str__(self) -> str:
        return self.name.lower()


class Side(Enum):
    HUMAN = auto()
    COMPUTER = auto()

    def other(self) -> "Side":
        return Side.COMPUTER if self is Side.HUMAN else Side.HUMAN

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only copy of everything a presentation layer needs to draw."""

    phase: Phase
    turn: Side
    player_hand: Tuple[Card, ...]
    opponent_hand: Tuple[Card, ...]
    discard_pile: Tuple[Card, ...]
    active_suit: Optional[Suit]
    stock_count: int
    winner: Optional[Side]
    message: str
    must_draw: bool
    drawn_playable: bool
    blocked: bool
    last_rejection: Optional[str]
    version: int
    playable: Tuple[Card, ...]
    events: Tuple["GameEvent", ...] = ()

    @property
    def top_card(self) -> Optional[Card]:
        return self.discard_pile[-1] if self.discard_pile else None

    def hand(self, side: Side) -> Tuple[Card, ...]:
        return self.player_hand if side is Side.HUMAN else self.opponent_hand


@dataclass
class GameState:
    hands: Dict[Side, List[Card]] = field(default_factory=lambda: {Side.HUMAN: [], Side.COMPUTER: []})
    stock: List[Card] = field(default_factory=list)
    discard: List[Card] = field(default_factory=list)
    active_suit: Optional[Suit] = None
    turn: Side = Side.HUMAN
    phase: Phase = Phase.NOT_STARTED
    winner: Optional[Side] = None
    message: str = WELCOME_MESSAGE
    must_draw: bool = False
    drawn_playable: bool = False
    blocked: bool = False
    # Human stalemate skips since a card last moved.
    idle_skips: int = 0
    last_rejection: Optional[str] = None
    version: int = 0
    events: List["GameEvent"] = field(default_factory=list)

    def hand(self, side: Side) -> List[Card]:
        return self.hands[side]

    @property
    def top_card(self) -> Optional[Card]:
        return self.discard[-1] if self.discard else None

    def playable(self, side: Side) -> List[Card]:
        return playable_cards(self.hands[side], self.top_card, self.active_suit)

    def can_play(self, side: Side) -> bool:
        return has_playable(self.hands[side], self.top_card, self.active_suit)

    def card_count(self) -> int:
        return len(self.stock) + len(self.discard) + sum(len(hand) for hand in self.hands.values())

    def all_cards(self) -> List[Card]:
        return [*self.stock, *self.hands[Side.HUMAN], *self.hands[Side.COMPUTER], *self.discard]

    def check_conservation(self) -> None:
        """Assert every card of the full deck is present exactly once."""
        cards = self.all_cards()
        assert len(cards) == DECK_SIZE, f"Expected {DECK_SIZE} cards, found {len(cards)}."
        duplicates = [card for card, count in Counter(cards).items() if count > 1]
        assert not duplicates, f"Duplicated cards: {duplicates}"
        assert set(cards) == set(build_deck()), "Card set does not match the full deck."

    def snapshot(self, event_limit: int = 50) -> GameSnapshot:
        turn_playable = self.playable(self.turn) if self.phase is Phase.AWAITING_PLAY else []
        return GameSnapshot(
            phase=self.phase,
            turn=self.turn,
            player_hand=tuple(self.hands[Side.HUMAN]),
            opponent_hand=tuple(self.hands[Side.COMPUTER]),
            discard_pile=tuple(self.discard),
            active_suit=self.active_suit,
            stock_count=len(self.stock),
            winner=self.winner,
            message=self.message,
            must_draw=self.must_draw,
            drawn_playable=self.drawn_playable,
            blocked=self.blocked,
            last_rejection=self.last_rejection,
            version=self.version,
            playable=tuple(turn_playable),
            events=tuple(self.events[-event_limit:]),
        )
