"""Streamlit table for playing Crazy Eights against the computer."""

from __future__ import annotations

import streamlit as st

from eights.cards import SUIT_ORDER, SUIT_SYMBOLS
from eights.config import load_config
from eights.service import GameService, GameView


def get_service() -> GameService:
    if "game_service" not in st.session_state:
        st.session_state["game_service"] = GameService(config=load_config())
    return st.session_state["game_service"]


def rerun() -> None:
    st.rerun()


def render_table(view: GameView) -> None:
    cols = st.columns(3)
    with cols[0]:
        st.metric("Computer cards", view.opponent_card_count)
    with cols[1]:
        top = view.top_card.short if view.top_card else "-"
        suit = view.active_suit or "-"
        st.metric("Discard", top, help=f"Active suit: {suit}")
        if view.active_suit:
            st.caption(f"Active suit: {view.active_suit}")
    with cols[2]:
        st.metric("Stock", view.stock_count)


def render_hand(service: GameService, view: GameView) -> None:
    st.subheader("Your hand")
    if not view.hand:
        st.write("No cards left.")
        return
    cols = st.columns(len(view.hand))
    for idx, (col, card) in enumerate(zip(cols, view.hand)):
        disabled = not (view.can_draw and card.playable)
        if col.button(card.short, key=f"card-{idx}-{card.label}", disabled=disabled, help=card.label):
            service.play_card(card.card)
            rerun()


def render_turn_controls(service: GameService, view: GameView) -> None:
    cols = st.columns(2)
    draw_label = "Draw (you must draw)" if view.must_draw else "Draw"
    if cols[0].button(draw_label, disabled=not view.can_draw or view.stock_count == 0):
        service.draw_card()
        rerun()
    if cols[1].button("End turn", disabled=not view.can_pass):
        service.end_turn()
        rerun()


def render_suit_picker(service: GameService) -> None:
    st.subheader("Pick a new suit")
    cols = st.columns(len(SUIT_ORDER))
    for col, suit in zip(cols, SUIT_ORDER):
        if col.button(f"{SUIT_SYMBOLS[suit]} {suit}", key=f"suit-{suit}"):
            service.choose_suit(str(suit))
            rerun()


def render_finished(service: GameService, view: GameView) -> None:
    if view.winner == "human":
        st.success("Victory! You've cleared all your cards.")
    else:
        st.error("Defeat! The computer emptied its hand first.")
    if st.button("Play again"):
        service.start_new_game()
        rerun()


def render_log(view: GameView) -> None:
    with st.expander("Game log"):
        for event in reversed(view.events):
            st.write(f"[{event['version']}] {event['message']}")


def main() -> None:
    st.set_page_config(page_title="Crazy Eights", layout="wide")
    st.title("Crazy Eights")

    service = get_service()

    st.sidebar.header("Game")
    if st.sidebar.button("New game"):
        service.start_new_game()
        rerun()
    show_opponent = st.sidebar.checkbox("Show computer hand", value=False)

    if not service.has_active_game():
        st.info("Match the suit or rank of the top card. Eights are wild. Start a new game to begin.")
        return

    view = service.get_view()
    render_table(view)
    st.info(view.message)
    if view.rejected:
        st.warning(view.rejected)
    if show_opponent:
        st.write("Computer: " + " ".join(card.short for card in view.opponent_hand))

    if view.phase == "finished":
        render_finished(service, view)
    elif view.awaiting_suit:
        render_suit_picker(service)
    elif view.blocked:
        st.warning("Nobody can move. Start a new game.")
    else:
        render_turn_controls(service, view)
    render_hand(service, view)
    render_log(view)


if __name__ == "__main__":
    main()
