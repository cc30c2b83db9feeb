"""Bot strategies for the human seat of a Crazy Eights game."""

from .baseline_eight_saver import EightSaverBot
from .baseline_greedy import GreedyBot
from .random_bot import RandomBot

__all__ = ["EightSaverBot", "GreedyBot", "RandomBot"]
