"""Top-level package for the Go Fish game engine."""

from . import belief, cards, engine, policy, rules, state

__all__ = [
    "belief",
    "cards",
    "engine",
    "policy",
    "rules",
    "state",
]
