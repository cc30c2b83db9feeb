"""Common bot strategy interfaces."""

from __future__ import annotations

from typing import Optional

from eights.cards import Card, Suit
from eights.game import CrazyEightsGame
from eights.policy import choose_suit
from eights.state import Side


class BotStrategy:
    """Base class for scripted players sitting in the human seat."""

    name: str = "BaseBot"

    def on_game_start(self, game: CrazyEightsGame) -> None:
        """Optional hook invoked after each deal."""
        return None

    def play_turn(self, game: CrazyEightsGame, side: Side) -> Optional[Card]:
        """Return the card to play, or None to draw from the stock."""
        legal = game.legal_moves(side)
        return legal[0] if legal else None

    def keep_drawn_card(self, game: CrazyEightsGame, side: Side) -> bool:
        """Return True to end the turn instead of playing a freshly drawn card."""
        return False

    def choose_suit(self, game: CrazyEightsGame, side: Side) -> Suit:
        """Return the suit to name after playing an eight."""
        return choose_suit(game.state.hand(side), game.config.suit_order(), game.config.default_suit())
