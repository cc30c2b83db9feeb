"""Turn state machine for a human vs. computer game of Crazy Eights."""

from __future__ import annotations

import logging
from random import Random
from typing import Callable, List, Optional, Sequence, Tuple

from .cards import Card, Suit, card_label, parse_suit
from .config import GameConfig
from .deck import build_deck, deal_initial, shuffle_deck
from .events import EventKind, EventListener, GameEvent
from .policy import DecisionKind, choose_action, choose_suit
from .rules import is_playable
from .state import GameSnapshot, GameState, Phase, Side

logger = logging.getLogger(__name__)


class RejectedAction(RuntimeError):
    """Raised when a command is not allowed in the current state."""


YOUR_TURN = "Your turn! Match the card or play an 8."
MUST_DRAW = "No playable cards! You must draw from the deck."
STALEMATE = "No playable cards and deck is empty! Skipping turn..."
BLOCKED = "Neither side can play and the deck is empty. Restart to play again."


class CrazyEightsGame:
    """Owns the game state and applies every command as one atomic transition.

    Commands never raise for invalid requests: they return ``False``, leave
    the state untouched and record the reason in ``last_rejection``.

    Usage:
        game = CrazyEightsGame(GameConfig(seed=7))
        game.start()
        card = game.legal_moves(Side.HUMAN)[0]
        game.attempt_play(Side.HUMAN, card)
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        *,
        rng: Optional[Random] = None,
        deck: Optional[Sequence[Card]] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rng = rng or Random(self.config.seed)
        # A fixed deck is dealt as given instead of being shuffled.
        self.deck = list(deck) if deck is not None else None
        self.state = GameState()
        self._listeners: List[EventListener] = []
        # Events of the transition in progress, delivered once it has settled.
        self._pending: List[GameEvent] = []

    @classmethod
    def from_position(
        cls,
        *,
        player_hand: Sequence[Card],
        opponent_hand: Sequence[Card],
        discard: Sequence[Card],
        stock: Sequence[Card] = (),
        active_suit: Optional[Suit] = None,
        turn: Side = Side.HUMAN,
        config: Optional[GameConfig] = None,
    ) -> "CrazyEightsGame":
        """Build a game already in progress from an explicit position."""
        if not discard:
            raise ValueError("A position needs at least one discarded card.")
        game = cls(config)
        game.state = GameState(
            hands={Side.HUMAN: list(player_hand), Side.COMPUTER: list(opponent_hand)},
            stock=list(stock),
            discard=list(discard),
            active_suit=active_suit or discard[-1].suit,
            turn=turn,
            phase=Phase.AWAITING_PLAY,
            message=YOUR_TURN if turn is Side.HUMAN else "AI is thinking...",
        )
        game._settle()
        game._flush()
        return game

    # Listeners ---------------------------------------------------------

    def subscribe(self, listener: EventListener) -> Callable[[], None]:
        """Register ``listener`` for every event; returns an unsubscribe callable.

        Events reach listeners after the command that produced them has fully
        settled. A listener that raises is logged and skipped.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # Commands ----------------------------------------------------------

    def start(self) -> bool:
        return self._run(self._start)

    def restart(self) -> bool:
        return self._run(self._deal)

    def attempt_play(self, side: Side, card: Card) -> bool:
        return self._run(self._play, side, card)

    def attempt_draw(self, side: Side) -> bool:
        return self._run(self._draw, side)

    def choose_suit(self, suit: Suit | str) -> bool:
        return self._run(self._choose_suit, suit)

    def pass_turn(self, side: Side) -> bool:
        return self._run(self._pass, side)

    def advance(self) -> bool:
        """Let the computer act; needed only when autoplay is switched off."""
        return self._run(self._advance)

    def reject(self, reason: str) -> None:
        """Record a refused request made before it reached a command."""
        self._reject(reason)
        self._flush()

    # Queries -----------------------------------------------------------

    def snapshot(self) -> GameSnapshot:
        return self.state.snapshot(self.config.event_log_limit)

    def legal_moves(self, side: Side) -> List[Card]:
        if self.state.phase is not Phase.AWAITING_PLAY or side is not self.state.turn:
            return []
        return self.state.playable(side)

    def check_conservation(self) -> None:
        self.state.check_conservation()

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def turn(self) -> Side:
        return self.state.turn

    @property
    def winner(self) -> Optional[Side]:
        return self.state.winner

    @property
    def active_suit(self) -> Optional[Suit]:
        return self.state.active_suit

    @property
    def top_card(self) -> Optional[Card]:
        return self.state.top_card

    @property
    def stock_count(self) -> int:
        return len(self.state.stock)

    @property
    def message(self) -> str:
        return self.state.message

    @property
    def version(self) -> int:
        return self.state.version

    @property
    def must_draw(self) -> bool:
        return self.state.must_draw

    @property
    def player_hand(self) -> Tuple[Card, ...]:
        return tuple(self.state.hands[Side.HUMAN])

    @property
    def opponent_hand(self) -> Tuple[Card, ...]:
        return tuple(self.state.hands[Side.COMPUTER])

    @property
    def discard_pile(self) -> Tuple[Card, ...]:
        return tuple(self.state.discard)

    def is_finished(self) -> bool:
        return self.state.phase is Phase.FINISHED

    # Transitions -------------------------------------------------------

    def _run(self, action: Callable[..., None], *args) -> bool:
        accepted = True
        try:
            action(*args)
        except RejectedAction as exc:
            self._reject(str(exc))
            accepted = False
        else:
            self._settle()
        self._flush()
        return accepted

    def _start(self) -> None:
        if self.state.phase not in (Phase.NOT_STARTED, Phase.FINISHED):
            raise RejectedAction("A game is already in progress.")
        self._deal()

    def _deal(self) -> None:
        cards = list(self.deck) if self.deck is not None else shuffle_deck(build_deck(), self.rng)
        deal = deal_initial(cards, self.config.hand_size)
        self.state = GameState(
            hands={Side.HUMAN: deal.player_hand, Side.COMPUTER: deal.opponent_hand},
            stock=deal.stock,
            discard=[deal.first_discard],
            active_suit=deal.active_suit,
            turn=Side.HUMAN,
            phase=Phase.AWAITING_PLAY,
            version=self.state.version,
        )
        self._commit(EventKind.GAME_STARTED, YOUR_TURN, card=deal.first_discard, suit=deal.active_suit)

    def _play(self, side: Side, card: Card) -> None:
        self._require_turn(side)
        state = self.state
        hand = state.hands[side]
        if card not in hand:
            raise RejectedAction(f"{_describe(card)} is not in the {side} hand.")
        if not is_playable(card, state.top_card, state.active_suit):
            raise RejectedAction(
                f"{card_label(card)} does not match {state.active_suit} or the {state.top_card.rank} on the pile."
            )

        hand.remove(card)
        state.discard.append(card)
        state.drawn_playable = False
        state.must_draw = False
        state.idle_skips = 0

        if not hand:
            state.phase = Phase.FINISHED
            state.winner = side
            self._commit(EventKind.CARD_PLAYED, f"{_actor(side)} played {card_label(card)}.", side=side, card=card)
            self._commit(
                EventKind.GAME_WON,
                "You win! All your cards are gone." if side is Side.HUMAN else "AI wins! Better luck next time.",
                side=side,
            )
            return

        if card.is_wild():
            if side is Side.HUMAN:
                state.phase = Phase.AWAITING_SUIT_CHOICE
                self._commit(EventKind.CARD_PLAYED, "Choose a new suit!", side=side, card=card)
                return
            suit = choose_suit(hand, self.config.suit_order(), self.config.default_suit())
            state.active_suit = suit
            self._commit(EventKind.CARD_PLAYED, f"AI played {card_label(card)}.", side=side, card=card)
            self._flip_turn()
            self._commit(EventKind.SUIT_CHOSEN, f"AI played an 8 and chose {suit}!", side=side, suit=suit)
            return

        state.active_suit = card.suit
        self._flip_turn()
        self._commit(
            EventKind.CARD_PLAYED,
            "AI is thinking..." if side is Side.HUMAN else "Your turn!",
            side=side,
            card=card,
        )

    def _draw(self, side: Side) -> None:
        self._require_turn(side)
        state = self.state
        if not state.stock:
            self._flip_turn()
            self._commit(EventKind.TURN_FORFEITED, "Deck is empty! Skipping turn.", side=side)
            return

        card = state.stock.pop()
        state.hands[side].append(card)
        state.idle_skips = 0
        if is_playable(card, state.top_card, state.active_suit):
            state.drawn_playable = True
            state.must_draw = False
            message = (
                "You drew a playable card! You can play it or end turn."
                if side is Side.HUMAN
                else "AI drew a card."
            )
        else:
            self._flip_turn()
            message = (
                "You drew a card, but it's not playable. AI's turn."
                if side is Side.HUMAN
                else "AI drew a card."
            )
        self._commit(EventKind.CARD_DRAWN, message, side=side, card=card)

    def _choose_suit(self, suit: Suit | str) -> None:
        if self.state.phase is not Phase.AWAITING_SUIT_CHOICE:
            raise RejectedAction("No suit choice is pending.")
        try:
            chosen = parse_suit(suit)
        except ValueError as exc:
            raise RejectedAction(str(exc)) from exc
        state = self.state
        state.active_suit = chosen
        state.phase = Phase.AWAITING_PLAY
        self._flip_turn()
        self._commit(EventKind.SUIT_CHOSEN, f"You chose {chosen}. AI's turn.", side=Side.HUMAN, suit=chosen)

    def _pass(self, side: Side) -> None:
        self._require_turn(side)
        if not self.state.drawn_playable:
            raise RejectedAction("You can only end your turn after drawing a playable card.")
        self._flip_turn()
        self._commit(
            EventKind.TURN_PASSED,
            "You kept the card. AI's turn." if side is Side.HUMAN else "AI passed. Your turn!",
            side=side,
        )

    def _advance(self) -> None:
        if self.state.phase is not Phase.AWAITING_PLAY or self.state.turn is not Side.COMPUTER:
            raise RejectedAction("It is not the computer's turn.")
        if self.state.blocked:
            raise RejectedAction(BLOCKED)
        self._opponent_step()

    def _opponent_step(self) -> None:
        state = self.state
        decision = choose_action(state.hands[Side.COMPUTER], state.top_card, state.active_suit)
        logger.debug(f"Opponent decision: {decision.kind.name} {decision.card}")
        if decision.kind is DecisionKind.PLAY:
            assert decision.card is not None
            self._play(Side.COMPUTER, decision.card)
        else:
            self._draw(Side.COMPUTER)

    def _settle(self) -> None:
        """Resolve automatic steps until someone has to make a decision."""
        state = self.state
        while state.phase is Phase.AWAITING_PLAY and not state.blocked:
            if state.turn is Side.HUMAN:
                if state.can_play(Side.HUMAN):
                    state.must_draw = False
                    return
                if state.stock:
                    if not state.must_draw:
                        state.must_draw = True
                        self._commit(EventKind.MUST_DRAW, MUST_DRAW, side=Side.HUMAN)
                    return
                if state.idle_skips:
                    state.must_draw = True
                    state.blocked = True
                    self._commit(EventKind.BLOCKED, BLOCKED)
                    return
                state.idle_skips += 1
                self._commit(EventKind.STALEMATE_SKIP, STALEMATE, side=Side.HUMAN)
                self._flip_turn()
                continue
            if not self.config.autoplay_opponent:
                return
            self._opponent_step()

    # Helpers -----------------------------------------------------------

    def _require_turn(self, side: Side) -> None:
        state = self.state
        if state.phase is not Phase.AWAITING_PLAY:
            raise RejectedAction(f"Cannot act while the game is {state.phase}.")
        if state.blocked:
            raise RejectedAction(BLOCKED)
        if side is not state.turn:
            raise RejectedAction(f"It is not the {side} turn.")

    def _flip_turn(self) -> None:
        state = self.state
        state.turn = state.turn.other()
        state.drawn_playable = False
        state.must_draw = False

    def _commit(
        self,
        kind: EventKind,
        message: str,
        *,
        side: Optional[Side] = None,
        card: Optional[Card] = None,
        suit: Optional[Suit] = None,
    ) -> None:
        state = self.state
        state.version += 1
        state.message = message
        state.last_rejection = None
        event = GameEvent(kind=kind, message=message, version=state.version, side=side, card=card, suit=suit)
        logger.debug(f"v{state.version} {kind.name}: {message}")
        self._record(event)

    def _reject(self, reason: str) -> None:
        state = self.state
        state.last_rejection = reason
        event = GameEvent(kind=EventKind.ACTION_REJECTED, message=reason, version=state.version)
        logger.info(f"Rejected: {reason}")
        self._record(event)

    def _record(self, event: GameEvent) -> None:
        events = self.state.events
        events.append(event)
        del events[: -self.config.event_log_limit]
        self._pending.append(event)

    def _flush(self) -> None:
        """Deliver the events of a finished transition to every listener."""
        pending, self._pending = self._pending, []
        for event in pending:
            for listener in list(self._listeners):
                try:
                    listener(event)
                except Exception:
                    logger.exception(f"Event listener failed on {event.kind.name}")


def _actor(side: Side) -> str:
    return "You" if side is Side.HUMAN else "AI"


def _describe(card: object) -> str:
    return card_label(card) if isinstance(card, Card) else repr(card)
