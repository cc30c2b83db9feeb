import pytest
from pydantic import ValidationError

from eights.cards import Suit
from eights.config import GameConfig, load_config


def test_defaults():
    config = GameConfig()
    assert config.hand_size == 8
    assert config.suit_order() == [Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS, Suit.SPADES]
    assert config.default_suit() is Suit.HEARTS
    assert config.autoplay_opponent
    assert config.seed is None


def test_suit_priority_must_be_a_permutation():
    assert GameConfig(suit_priority=["Spades", "clubs", "diamonds", "hearts"]).suit_order()[0] is Suit.SPADES
    with pytest.raises(ValidationError):
        GameConfig(suit_priority=["hearts", "hearts", "clubs", "spades"])
    with pytest.raises(ValidationError):
        GameConfig(suit_priority=["hearts", "stars", "clubs", "spades"])


def test_rejects_bad_values():
    with pytest.raises(ValidationError):
        GameConfig(hand_size=0)
    with pytest.raises(ValidationError):
        GameConfig(hand_size=26)
    with pytest.raises(ValidationError):
        GameConfig(fallback_suit="stars")


def test_load_config_reads_seed_from_environment(monkeypatch):
    monkeypatch.setenv("EIGHTS_SEED", "17")
    assert load_config().seed == 17
    assert load_config({"seed": 3}).seed == 3
    monkeypatch.delenv("EIGHTS_SEED")
    assert load_config().seed is None
