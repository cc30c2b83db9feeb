"""Core engine package for Crazy Eights."""

__all__ = [
    "cards",
    "deck",
    "rules",
    "state",
    "events",
    "policy",
    "config",
    "game",
    "service",
]
