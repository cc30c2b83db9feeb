"""Baseline greedy bot."""

from __future__ import annotations

from typing import Optional

from eights.cards import Card
from eights.game import CrazyEightsGame
from eights.state import Side

from .base import BotStrategy


class GreedyBot(BotStrategy):
    """Sheds the highest-ranked matching card first and keeps eights for last."""

    name = "Greedy"

    def play_turn(self, game: CrazyEightsGame, side: Side) -> Optional[Card]:
        legal = game.legal_moves(side)
        if not legal:
            return None
        legal.sort(key=lambda c: (not c.is_wild(), c.ordinal_value))
        return legal[-1]
