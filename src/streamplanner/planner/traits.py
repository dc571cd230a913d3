"""Physical traits carried by plan nodes."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import Literal

DistributionKind = Literal["any", "singleton", "hash"]


@dataclass(frozen=True)
class Distribution:
    """How the rows of a stream are partitioned across parallel instances."""

    kind: DistributionKind = "any"
    keys: tuple[int, ...] = ()

    @classmethod
    def hash(cls, keys: Iterable[int]) -> Distribution:
        return cls("hash", tuple(keys))

    def satisfies(self, required: Distribution) -> bool:
        if required.kind == "any":
            return True
        return self == required

    def __str__(self) -> str:
        if self.kind == "hash":
            return f"hash[{', '.join(f'${k}' for k in self.keys)}]"
        return self.kind


ANY = Distribution("any")
SINGLETON = Distribution("singleton")


def distribution_for_keys(keys: Iterable[int]) -> Distribution:
    """Hash on ``keys``, or gather to a single instance when there are none."""
    keys = tuple(keys)
    if not keys:
        return SINGLETON
    return Distribution.hash(keys)


@dataclass(frozen=True)
class TraitSet:
    convention: str = "NONE"
    distribution: Distribution = ANY

    def replace(self, **changes: object) -> TraitSet:
        return replace(self, **changes)  # type: ignore[arg-type]


STREAM_PHYSICAL = TraitSet(convention="STREAM_PHYSICAL")
