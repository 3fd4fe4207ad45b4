"""Core rules engine package for Seep."""

__all__ = [
    "cards",
    "seats",
    "deck",
    "stack",
    "combinations",
    "moves",
    "state",
    "rules",
    "mechanics",
    "scoring",
    "rules_schema",
    "game",
    "service",
]
