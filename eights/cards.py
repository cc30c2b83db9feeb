"""Card-related data structures and helpers for Crazy Eights."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Mapping


class Suit(Enum):
    HEARTS = auto()
    DIAMONDS = auto()
    CLUBS = auto()
    SPADES = auto()

    def __str__(self) -> str:
        return self.name.lower()


class Rank(Enum):
    ACE = auto()
    TWO = auto()
    THREE = auto()
    FOUR = auto()
    FIVE = auto()
    SIX = auto()
    SEVEN = auto()
    EIGHT = auto()
    NINE = auto()
    TEN = auto()
    JACK = auto()
    QUEEN = auto()
    KING = auto()

    def __str__(self) -> str:
        return self.name.lower()


# Canonical deck order.
SUIT_ORDER: list[Suit] = [Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS, Suit.SPADES]
RANK_ORDER: list[Rank] = list(Rank)

RANK_SYMBOLS: dict[Rank, str] = {
    Rank.ACE: "A",
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "10",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
}

SUIT_SYMBOLS: dict[Suit, str] = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}

RED_SUITS = frozenset({Suit.HEARTS, Suit.DIAMONDS})

WILD_RANK = Rank.EIGHT


@dataclass(frozen=True)
class Card:
    """Immutable representation of a playing card."""

    rank: Rank
    suit: Suit

    @property
    def ordinal_value(self) -> int:
        """Rank position 1..13 (ace low). Not used for legality."""
        return RANK_ORDER.index(self.rank) + 1

    def is_wild(self) -> bool:
        return self.rank is WILD_RANK

    def __str__(self) -> str:
        return short_label(self)


def parse_suit(value: str | Suit) -> Suit:
    """Return the Suit named by ``value`` (case-insensitive)."""
    if isinstance(value, Suit):
        return value
    try:
        return Suit[str(value).strip().upper()]
    except KeyError:
        raise ValueError(f"Unknown suit: {value!r}") from None


def parse_rank(value: str | Rank) -> Rank:
    """Accept a rank name (``"eight"``) or its symbol (``"8"``, ``"q"``)."""
    if isinstance(value, Rank):
        return value
    text = str(value).strip().upper()
    if text in Rank.__members__:
        return Rank[text]
    for rank, symbol in RANK_SYMBOLS.items():
        if symbol == text:
            return rank
    raise ValueError(f"Unknown rank: {value!r}")


def parse_card(text: str) -> Card:
    """Parse a compact card code such as ``"8S"``, ``"10h"`` or ``"QC"``."""
    code = text.strip()
    if len(code) < 2:
        raise ValueError(f"Malformed card code: {text!r}")
    suit_code = code[-1].upper()
    suits = {suit.name[0]: suit for suit in Suit}
    suits.update({symbol: suit for suit, symbol in SUIT_SYMBOLS.items()})
    if suit_code not in suits:
        raise ValueError(f"Malformed card code: {text!r}")
    return Card(parse_rank(code[:-1]), suits[suit_code])


def serialize_card(card: Card) -> dict[str, str]:
    return {"rank": card.rank.name.lower(), "suit": card.suit.name.lower()}


def deserialize_card(payload: Mapping[str, str]) -> Card:
    """Inverse of serialize_card; raises ValueError on a malformed payload."""
    try:
        rank_value = payload["rank"]
        suit_value = payload["suit"]
    except (KeyError, TypeError):
        raise ValueError(f"Malformed card payload: {payload!r}") from None
    return Card(parse_rank(rank_value), parse_suit(suit_value))


def short_label(card: Card) -> str:
    return f"{RANK_SYMBOLS[card.rank]}{SUIT_SYMBOLS[card.suit]}"


def card_label(card: Card) -> str:
    return f"{card.rank.name.title()} of {card.suit.name.title()}"
