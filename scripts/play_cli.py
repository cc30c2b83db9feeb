#!/usr/bin/env python3
"""Interactive CLI to play Crazy Eights against the computer opponent."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Tuple

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from eights.cards import SUIT_ORDER, card_label, short_label
from eights.config import GameConfig
from eights.game import CrazyEightsGame
from eights.state import Phase, Side


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play Crazy Eights in the terminal.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the shuffle.")
    parser.add_argument("--hand-size", type=int, default=8)
    parser.add_argument("--show-opponent", action="store_true", help="Reveal the computer's hand.")
    parser.add_argument("--log-level", default="WARNING")
    return parser.parse_args()


def print_state(game: CrazyEightsGame, show_opponent: bool) -> None:
    snap = game.snapshot()
    print("\n============================")
    top = short_label(snap.top_card) if snap.top_card else "-"
    print(f"Discard: {top}   Active suit: {snap.active_suit}   Stock: {snap.stock_count}")
    print(f"Computer holds {len(snap.opponent_hand)} cards")
    if show_opponent:
        print("  " + " ".join(short_label(card) for card in snap.opponent_hand))
    print(snap.message)
    if snap.last_rejection:
        print(f"(!) {snap.last_rejection}")


def list_options(game: CrazyEightsGame) -> List[Tuple[str, object]]:
    snap = game.snapshot()
    if snap.phase is Phase.AWAITING_SUIT_CHOICE:
        return [(f"Name {suit}", suit) for suit in SUIT_ORDER]
    options: List[Tuple[str, object]] = []
    playable = set(snap.playable)
    for card in snap.player_hand:
        marker = "" if card in playable else " (no match)"
        options.append((f"Play {card_label(card)}{marker}", card))
    if snap.stock_count:
        options.append(("Draw a card", "draw"))
    if snap.drawn_playable:
        options.append(("End turn", "pass"))
    return options


def choose_option(options: List[Tuple[str, object]]) -> object:
    for idx, (label, _) in enumerate(options):
        print(f"[{idx}] {label}")
    while True:
        choice = input("Select action (q to quit): ").strip()
        if choice.lower() == "q":
            raise KeyboardInterrupt
        if not choice.isdigit():
            print("Please enter a number.")
            continue
        option_idx = int(choice)
        if 0 <= option_idx < len(options):
            return options[option_idx][1]
        print("Invalid choice. Try again.")


def apply_choice(game: CrazyEightsGame, choice: object) -> None:
    if game.phase is Phase.AWAITING_SUIT_CHOICE:
        game.choose_suit(choice)
    elif choice == "draw":
        game.attempt_draw(Side.HUMAN)
    elif choice == "pass":
        game.pass_turn(Side.HUMAN)
    else:
        game.attempt_play(Side.HUMAN, choice)


def play_game(game: CrazyEightsGame, show_opponent: bool) -> None:
    game.restart()
    while not game.is_finished() and not game.state.blocked:
        print_state(game, show_opponent)
        apply_choice(game, choose_option(list_options(game)))
    print_state(game, show_opponent)
    if game.winner is Side.HUMAN:
        print("Congratulations, you won!")
    elif game.winner is Side.COMPUTER:
        print("The computer wins this one.")


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))
    game = CrazyEightsGame(GameConfig(seed=args.seed, hand_size=args.hand_size))
    try:
        while True:
            play_game(game, args.show_opponent)
            if input("Play again? [y/N] ").strip().lower() != "y":
                break
    except KeyboardInterrupt:
        print("\nExiting early.")


if __name__ == "__main__":
    main()
