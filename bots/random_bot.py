"""Random baseline bot for arena runs."""

from __future__ import annotations

import random
from typing import Optional

from eights.cards import Card, Suit
from eights.game import CrazyEightsGame
from eights.state import Side

from .base import BotStrategy


class RandomBot(BotStrategy):
    name = "Random"

    def __init__(self, seed: Optional[int] = None, draw_rate: float = 0.1) -> None:
        self._rng = random.Random(seed)
        self.draw_rate = draw_rate

    def play_turn(self, game: CrazyEightsGame, side: Side) -> Optional[Card]:
        legal = game.legal_moves(side)
        if not legal:
            return None
        if game.stock_count and self._rng.random() < self.draw_rate:
            return None
        return self._rng.choice(legal)

    def keep_drawn_card(self, game: CrazyEightsGame, side: Side) -> bool:
        return self._rng.random() < 0.5

    def choose_suit(self, game: CrazyEightsGame, side: Side) -> Suit:
        return self._rng.choice(list(Suit))
