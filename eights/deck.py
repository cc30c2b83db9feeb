"""Deck creation and dealing utilities for Crazy Eights."""

from __future__ import annotations

from random import Random
from typing import List, NamedTuple, Optional, Sequence

from .cards import Card, RANK_ORDER, SUIT_ORDER, Suit

DECK_SIZE = 52
HAND_SIZE = 8


class InitialDeal(NamedTuple):
    """Result of the opening deal. The stock is drawn from its end."""

    player_hand: List[Card]
    opponent_hand: List[Card]
    stock: List[Card]
    first_discard: Card

    @property
    def active_suit(self) -> Suit:
        return self.first_discard.suit


def build_deck() -> List[Card]:
    """Return the ordered 52-card deck."""
    return [Card(rank, suit) for suit in SUIT_ORDER for rank in RANK_ORDER]


def shuffle_deck(cards: Sequence[Card], rng: Optional[Random] = None) -> List[Card]:
    """Return a uniformly shuffled copy of ``cards``; the input is left untouched."""
    if rng is None:
        rng = Random()
    shuffled = list(cards)
    rng.shuffle(shuffled)
    return shuffled


def deal_initial(deck: Sequence[Card], hand_size: int = HAND_SIZE) -> InitialDeal:
    """Deal two hands in blocks and turn up the first non-eight as the discard."""
    cards = list(deck)
    if len(cards) < 2 * hand_size + 1:
        raise ValueError(f"Deck of {len(cards)} cards is too small for two hands of {hand_size}.")

    player_hand = cards[0:hand_size]
    opponent_hand = cards[hand_size : 2 * hand_size]
    stock = cards[2 * hand_size :]

    discard_index = next((i for i, card in enumerate(stock) if not card.is_wild()), 0)
    first_discard = stock.pop(discard_index)

    return InitialDeal(player_hand, opponent_hand, stock, first_discard)
