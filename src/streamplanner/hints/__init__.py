"""Planner hints."""

from .early_fire import NO_EARLY_FIRE, EarlyFireParameters, parse_early_fire_hint
from .join_hints import JoinStrategy, RelHint

__all__ = [
    "EarlyFireParameters",
    "JoinStrategy",
    "NO_EARLY_FIRE",
    "RelHint",
    "parse_early_fire_hint",
]
