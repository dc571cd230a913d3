"""Planner hints attached to join nodes."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


@dataclass(frozen=True)
class RelHint:
    """A hint such as ``/*+ EARLY_FIRE('delay'='500', 'frequency'='1000') */``.

    Attributes:
        hint_name: Name as written in the query; matching is case-insensitive
        list_options: Positional options, e.g. table names for join strategies
        kv_options: Key/value options in declaration order
    """

    hint_name: str
    list_options: tuple[str, ...] = ()
    kv_options: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "kv_options", MappingProxyType(dict(self.kv_options)))

    @classmethod
    def of(cls, hint_name: str, *list_options: str, **kv_options: str) -> RelHint:
        return cls(hint_name=hint_name, list_options=tuple(list_options), kv_options=kv_options)

    def __hash__(self) -> int:
        return hash((self.hint_name, self.list_options, tuple(self.kv_options.items())))


class JoinStrategy(str, Enum):
    """Join hints understood by the stream planner."""

    BROADCAST = "BROADCAST"
    SHUFFLE_HASH = "SHUFFLE_HASH"
    SHUFFLE_MERGE = "SHUFFLE_MERGE"
    NEST_LOOP = "NEST_LOOP"
    LOOKUP = "LOOKUP"
    EARLY_FIRE = "EARLY_FIRE"

    @classmethod
    def is_early_fire_hint(cls, hint_name: str) -> bool:
        return hint_name.upper() == cls.EARLY_FIRE.value

