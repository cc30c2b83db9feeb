from random import Random

import pytest

from eights.cards import Card, Rank, Suit, card_label, deserialize_card, parse_card, serialize_card, short_label
from eights.deck import DECK_SIZE, build_deck, deal_initial, shuffle_deck


def test_build_deck_has_52_unique_cards():
    deck = build_deck()
    assert len(deck) == DECK_SIZE
    assert len(set(deck)) == DECK_SIZE
    assert {(card.rank, card.suit) for card in deck} == {(rank, suit) for rank in Rank for suit in Suit}


def test_build_deck_canonical_order():
    deck = build_deck()
    assert deck[0] == Card(Rank.ACE, Suit.HEARTS)
    assert deck[12] == Card(Rank.KING, Suit.HEARTS)
    assert deck[13] == Card(Rank.ACE, Suit.DIAMONDS)
    assert deck[-1] == Card(Rank.KING, Suit.SPADES)
    assert deck == build_deck()


def test_shuffle_preserves_cards_and_leaves_input_untouched():
    deck = build_deck()
    original = list(deck)
    shuffled = shuffle_deck(deck, Random(3))
    assert deck == original
    assert sorted(shuffled, key=str) == sorted(original, key=str)
    assert shuffled != original


def test_shuffle_is_reproducible_with_seeded_rng():
    assert shuffle_deck(build_deck(), Random(11)) == shuffle_deck(build_deck(), Random(11))
    assert shuffle_deck(build_deck(), Random(11)) != shuffle_deck(build_deck(), Random(12))


def test_deal_initial_blocks_and_first_discard():
    deck = build_deck()
    deal = deal_initial(deck)
    assert deal.player_hand == deck[0:8]
    assert deal.opponent_hand == deck[8:16]
    # deck[16] is the four of diamonds, the first card left after dealing.
    assert deal.first_discard == Card(Rank.FOUR, Suit.DIAMONDS)
    assert deal.active_suit is Suit.DIAMONDS
    assert deal.first_discard not in deal.stock
    assert len(deal.stock) == DECK_SIZE - 17


def test_deal_initial_skips_leading_eights():
    deck = build_deck()
    eights = [card for card in deck if card.rank is Rank.EIGHT]
    rest = [card for card in deck if card.rank is not Rank.EIGHT]
    arranged = rest[:16] + eights + rest[16:]
    deal = deal_initial(arranged)
    assert deal.first_discard == rest[16]
    assert deal.stock[:4] == eights


def test_deal_initial_falls_back_to_eight_when_only_eights_remain():
    eights = [Card(Rank.EIGHT, suit) for suit in Suit]
    hands = [Card(Rank.TWO, Suit.HEARTS), Card(Rank.THREE, Suit.HEARTS)]
    deal = deal_initial(hands + eights, hand_size=1)
    assert deal.first_discard == eights[0]
    assert deal.stock == eights[1:]


def test_deal_initial_rejects_short_deck():
    with pytest.raises(ValueError):
        deal_initial(build_deck()[:16])


def test_ordinal_value_and_labels():
    card = Card(Rank.QUEEN, Suit.SPADES)
    assert card.ordinal_value == 12
    assert Card(Rank.ACE, Suit.CLUBS).ordinal_value == 1
    assert short_label(card) == "Q♠"
    assert card_label(card) == "Queen of Spades"


def test_card_serialization_and_parsing():
    card = Card(Rank.EIGHT, Suit.SPADES)
    assert serialize_card(card) == {"rank": "eight", "suit": "spades"}
    assert deserialize_card({"rank": "8", "suit": "Spades"}) == card
    assert parse_card("10h") == Card(Rank.TEN, Suit.HEARTS)
    assert parse_card("8♠") == card
    with pytest.raises(ValueError):
        deserialize_card({"rank": "joker", "suit": "spades"})
    with pytest.raises(ValueError):
        deserialize_card({"suit": "spades"})
    with pytest.raises(ValueError):
        parse_card("Z")
