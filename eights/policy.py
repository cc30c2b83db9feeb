"""Decision policy for the computer opponent.

The policy is deterministic: it sheds a matching non-eight whenever it can,
keeps eights back for when nothing else fits, and after an eight names the
suit it holds most of. Ties are broken on hand order and a fixed suit
priority so that games replay identically from the same deal.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Optional, Sequence

from .cards import Card, SUIT_ORDER, Suit
from .rules import playable_cards


class DecisionKind(Enum):
    PLAY = auto()
    DRAW = auto()


@dataclass(frozen=True)
class OpponentDecision:
    kind: DecisionKind
    card: Optional[Card] = None

    @classmethod
    def play(cls, card: Card) -> "OpponentDecision":
        return cls(DecisionKind.PLAY, card)

    @classmethod
    def draw(cls) -> "OpponentDecision":
        return cls(DecisionKind.DRAW)


def choose_action(hand: Sequence[Card], top_discard: Optional[Card], active_suit: Optional[Suit]) -> OpponentDecision:
    """Pick the first playable non-eight, else the first eight, else draw."""
    legal = playable_cards(hand, top_discard, active_suit)
    if not legal:
        return OpponentDecision.draw()
    non_wild = next((card for card in legal if not card.is_wild()), None)
    return OpponentDecision.play(non_wild if non_wild is not None else legal[0])


def choose_suit(
    remaining_hand: Iterable[Card],
    priority: Sequence[Suit] = SUIT_ORDER,
    fallback: Suit = Suit.HEARTS,
) -> Suit:
    """Name the most common suit in ``remaining_hand``.

    ``remaining_hand`` must already exclude the eight that was just played.
    Equal counts resolve to the suit listed first in ``priority``.
    """
    counts = Counter(card.suit for card in remaining_hand)
    if not counts:
        return fallback
    best = max(counts.values())
    return next(suit for suit in priority if counts.get(suit, 0) == best)
