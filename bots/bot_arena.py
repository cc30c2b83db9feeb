"""Simple bot arena: a scripted bot in the human seat against the built-in opponent."""

from __future__ import annotations

import argparse
import logging
import os
from typing import Dict, Iterable, Optional

from eights.config import GameConfig
from eights.game import CrazyEightsGame
from eights.state import Phase, Side

from .base import BotStrategy
from .baseline_eight_saver import EightSaverBot
from .baseline_greedy import GreedyBot
from .random_bot import RandomBot

logger = logging.getLogger(__name__)

BOT_REGISTRY: Dict[str, type[BotStrategy]] = {
    "saver": EightSaverBot,
    "greedy": GreedyBot,
    "random": RandomBot,
}

MAX_STEPS = 2000


def _take_turn(game: CrazyEightsGame, bot: BotStrategy) -> None:
    state = game.state
    if state.phase is Phase.AWAITING_SUIT_CHOICE:
        game.choose_suit(bot.choose_suit(game, Side.HUMAN))
        return
    if state.turn is Side.COMPUTER:
        game.advance()
        return
    if state.drawn_playable and bot.keep_drawn_card(game, Side.HUMAN):
        game.pass_turn(Side.HUMAN)
        return
    card = bot.play_turn(game, Side.HUMAN)
    if card is None:
        game.attempt_draw(Side.HUMAN)
    elif not game.attempt_play(Side.HUMAN, card):
        raise RuntimeError(f"{bot.name} chose an illegal card: {card}")


def play_game(game: CrazyEightsGame, bot: BotStrategy, *, max_steps: int = MAX_STEPS) -> Optional[Side]:
    """Deal a new game and play it out; returns the winner, or None when blocked."""
    game.restart()
    bot.on_game_start(game)
    steps = 0
    while game.phase is not Phase.FINISHED and not game.state.blocked:
        _take_turn(game, bot)
        game.check_conservation()
        steps += 1
        if steps > max_steps:
            raise RuntimeError(f"Game did not finish within {max_steps} steps.")
    return game.winner


def run_match(
    bot: BotStrategy,
    *,
    n_games: int = 10,
    seed: int | None = None,
    autoplay: bool = True,
) -> dict:
    config = GameConfig(seed=seed, autoplay_opponent=autoplay)
    game = CrazyEightsGame(config)
    results = {"human": 0, "computer": 0, "blocked": 0}
    history = []
    for idx in range(n_games):
        winner = play_game(game, bot)
        outcome = str(winner) if winner is not None else "blocked"
        results[outcome] += 1
        history.append(
            {
                "game": idx,
                "winner": outcome,
                "human_cards_left": len(game.player_hand),
                "computer_cards_left": len(game.opponent_hand),
                "transitions": game.version,
            }
        )
        logger.debug(f"Game {idx + 1}/{n_games}: {outcome}")
    return {"results": results, "history": history}


def main(argv: Iterable[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run a bot against the built-in computer opponent.")
    parser.add_argument("--bot", default="greedy", choices=BOT_REGISTRY.keys())
    parser.add_argument("--n", type=int, default=100, help="Number of games to play.")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "INFO"))
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    bot = BOT_REGISTRY[args.bot]()
    match = run_match(bot, n_games=args.n, seed=args.seed)
    results = match["results"]

    logger.info(f"{bot.name} vs computer over {args.n} games: {results}")
    logger.info(f"Human win rate: {results['human'] / max(args.n, 1):.2%}")


if __name__ == "__main__":
    main()
