"""Shared machinery for rules converting logical joins to stream operators."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Collection
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from ...config import PlannerConfig
from ...logical.plan import Join
from ...physical.nodes import StreamPhysicalExchange, StreamPhysicalRel
from ..traits import STREAM_PHYSICAL, Distribution, TraitSet, distribution_for_keys

logger = logging.getLogger(__name__)

Conversion = Callable[[StreamPhysicalRel], StreamPhysicalRel]


@dataclass
class RuleCall:
    """A join offered to a rule together with its already converted inputs."""

    join: Join
    left_input: StreamPhysicalRel
    right_input: StreamPhysicalRel
    results: list[StreamPhysicalRel] = field(default_factory=list)

    def rel(self, ordinal: int) -> Any:
        """Return the matched operand: 0 is the join, 1 and 2 its inputs."""
        return (self.join, self.left_input, self.right_input)[ordinal]

    def transform_to(self, node: StreamPhysicalRel) -> None:
        self.results.append(node)

    @property
    def result(self) -> Optional[StreamPhysicalRel]:
        return self.results[-1] if self.results else None


def convert_input(input: StreamPhysicalRel, required: Distribution) -> StreamPhysicalRel:
    """Make ``input`` satisfy ``required``, adding an exchange when needed."""
    if input.traits.distribution.satisfies(required):
        return input
    traits = STREAM_PHYSICAL.replace(distribution=required)
    return StreamPhysicalExchange(input=input, traits=traits)


class StreamPhysicalJoinRuleBase(ABC):
    """Base class for rules turning a logical :class:`Join` into a stream join.

    Subclasses decide applicability in :meth:`matches`, report the equi-join
    keys each input must be partitioned on, and build the physical node in
    :meth:`transform`. :meth:`on_match` ties these together.
    """

    def __init__(self, description: str, config: Optional[PlannerConfig] = None):
        self.description = description
        self.config = config or PlannerConfig()

    def __repr__(self) -> str:
        return self.description

    def matches(self, call: RuleCall) -> bool:
        return True

    @abstractmethod
    def compute_join_left_keys(self, join: Join) -> Collection[int]:
        """Positions of the left input the join is partitioned on."""

    @abstractmethod
    def compute_join_right_keys(self, join: Join) -> Collection[int]:
        """Positions of the right input the join is partitioned on."""

    @abstractmethod
    def transform(
        self,
        join: Join,
        left_input: StreamPhysicalRel,
        left_conversion: Conversion,
        right_input: StreamPhysicalRel,
        right_conversion: Conversion,
        provided_traits: TraitSet,
    ) -> StreamPhysicalRel:
        """Build the physical replacement of ``join``."""

    def on_match(self, call: RuleCall) -> StreamPhysicalRel:
        join: Join = call.rel(0)
        left_required = distribution_for_keys(self.compute_join_left_keys(join))
        right_required = distribution_for_keys(self.compute_join_right_keys(join))

        def left_conversion(input: StreamPhysicalRel) -> StreamPhysicalRel:
            return convert_input(input, left_required)

        def right_conversion(input: StreamPhysicalRel) -> StreamPhysicalRel:
            return convert_input(input, right_required)

        node = self.transform(
            join,
            call.left_input,
            left_conversion,
            call.right_input,
            right_conversion,
            STREAM_PHYSICAL,
        )
        self.log_decision(
            "%s converted %s join into %s", self, join.join_type.value, node.operator_name
        )
        call.transform_to(node)
        return node

    def log_decision(self, msg: str, *args: object) -> None:
        level = logging.INFO if self.config.log_decisions else logging.DEBUG
        logger.log(level, msg, *args)
