"""Notifications emitted by the game engine for presentation layers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional

from .cards import Card, Suit, serialize_card
from .state import Side


class EventKind(Enum):
    GAME_STARTED = auto()
    CARD_PLAYED = auto()
    CARD_DRAWN = auto()
    SUIT_CHOSEN = auto()
    TURN_PASSED = auto()
    TURN_FORFEITED = auto()
    MUST_DRAW = auto()
    STALEMATE_SKIP = auto()
    BLOCKED = auto()
    GAME_WON = auto()
    ACTION_REJECTED = auto()


@dataclass(frozen=True)
class GameEvent:
    kind: EventKind
    message: str
    version: int
    side: Optional[Side] = None
    card: Optional[Card] = None
    suit: Optional[Suit] = None

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.name.lower(),
            "message": self.message,
            "version": self.version,
            "side": str(self.side) if self.side else None,
            "card": serialize_card(self.card) if self.card else None,
            "suit": str(self.suit) if self.suit else None,
        }


EventListener = Callable[[GameEvent], None]
