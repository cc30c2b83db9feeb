"""Play legality for Crazy Eights."""

from __future__ import annotations

from typing import Iterable, List, Optional

from .cards import Card, Suit


def is_playable(card: Card, top_discard: Optional[Card], active_suit: Optional[Suit]) -> bool:
    """Return True if ``card`` may be played on ``top_discard`` under ``active_suit``."""
    if top_discard is None:
        return False
    if card.is_wild():
        return True
    return card.suit is active_suit or card.rank is top_discard.rank


def playable_cards(
    hand: Iterable[Card], top_discard: Optional[Card], active_suit: Optional[Suit]
) -> List[Card]:
    """Return the playable subset of ``hand``, keeping hand order."""
    return [card for card in hand if is_playable(card, top_discard, active_suit)]


def has_playable(hand: Iterable[Card], top_discard: Optional[Card], active_suit: Optional[Suit]) -> bool:
    return any(is_playable(card, top_discard, active_suit) for card in hand)
