"""Baseline bot that plays exactly like the built-in computer opponent."""

from __future__ import annotations

from typing import Optional

from eights.cards import Card
from eights.game import CrazyEightsGame
from eights.policy import DecisionKind, choose_action
from eights.state import Side

from .base import BotStrategy


class EightSaverBot(BotStrategy):
    name = "EightSaver"

    def play_turn(self, game: CrazyEightsGame, side: Side) -> Optional[Card]:
        state = game.state
        decision = choose_action(state.hand(side), state.top_card, state.active_suit)
        if decision.kind is DecisionKind.DRAW:
            return None
        return decision.card
