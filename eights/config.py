"""Validation schema for Crazy Eights game configuration."""

from __future__ import annotations

import os
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from .cards import Suit, parse_suit

SUIT_NAMES = ("hearts", "diamonds", "clubs", "spades")

SEED_ENV_VAR = "EIGHTS_SEED"


def _validate_suit(value: str) -> str:
    normalized = value.lower()
    if normalized not in SUIT_NAMES:
        raise ValueError(f"Unknown suit: {value!r}")
    return normalized


class GameConfig(BaseModel):
    hand_size: int = Field(8, ge=1, le=25, description="Cards dealt to each side at the start.")
    suit_priority: list[str] = Field(
        default_factory=lambda: list(SUIT_NAMES),
        description="Tie-break order when the computer picks a suit after an eight.",
    )
    fallback_suit: str = Field("hearts", description="Suit named by the computer when its hand is empty.")
    autoplay_opponent: bool = Field(
        True,
        description="Run the computer's turn as soon as it becomes the turn owner.",
    )
    seed: Optional[int] = Field(None, description="Seed for the shuffle; random when unset.")
    event_log_limit: int = Field(50, ge=1, description="Number of recent events kept in snapshots.")

    @field_validator("suit_priority")
    @classmethod
    def validate_suit_priority(cls, value: list[str]) -> list[str]:
        normalized = [_validate_suit(suit) for suit in value]
        if sorted(normalized) != sorted(SUIT_NAMES):
            raise ValueError("Suit priority must list each suit exactly once.")
        return normalized

    @field_validator("fallback_suit")
    @classmethod
    def validate_fallback_suit(cls, value: str) -> str:
        return _validate_suit(value)

    def suit_order(self) -> list[Suit]:
        return [parse_suit(name) for name in self.suit_priority]

    def default_suit(self) -> Suit:
        return parse_suit(self.fallback_suit)


def load_config(mapping: Optional[Mapping[str, Any]] = None) -> GameConfig:
    """Build a GameConfig, taking the seed from EIGHTS_SEED when none is given."""
    data = dict(mapping or {})
    if data.get("seed") is None and os.environ.get(SEED_ENV_VAR):
        data["seed"] = os.environ[SEED_ENV_VAR]
    return GameConfig.model_validate(data)
