"""Rule converting joins without time bounds into regular stream joins."""

from __future__ import annotations

from typing import Optional

from ...config import PlannerConfig
from ...expressions.functions import compose_conjunction
from ...logical.plan import Join
from ...physical.nodes import StreamPhysicalJoin, StreamPhysicalRel
from ...types import is_rowtime_indicator_type
from ...utils.exceptions import PlanningError
from ..traits import TraitSet
from ..window_bounds import satisfy_interval_join
from .base import Conversion, RuleCall, StreamPhysicalJoinRuleBase


class StreamPhysicalJoinRule(StreamPhysicalJoinRuleBase):
    """Converts joins that are not interval joins into :class:`StreamPhysicalJoin`."""

    def __init__(self, config: Optional[PlannerConfig] = None):
        super().__init__("StreamPhysicalJoinRule", config)

    def matches(self, call: RuleCall) -> bool:
        join: Join = call.rel(0)
        if satisfy_interval_join(join):
            return False

        if any(is_rowtime_indicator_type(f.type) for f in join.row_type):
            raise PlanningError(
                "Rowtime attributes must not be in the input rows of a regular join. "
                "As a workaround you can cast the time attributes of input tables to "
                "TIMESTAMP before."
            )
        return True

    def compute_join_left_keys(self, join: Join) -> list[int]:
        return list(join.analyze_condition().left_keys)

    def compute_join_right_keys(self, join: Join) -> list[int]:
        return list(join.analyze_condition().right_keys)

    def transform(
        self,
        join: Join,
        left_input: StreamPhysicalRel,
        left_conversion: Conversion,
        right_input: StreamPhysicalRel,
        right_conversion: Conversion,
        provided_traits: TraitSet,
    ) -> StreamPhysicalRel:
        info = join.analyze_condition()
        return StreamPhysicalJoin(
            traits=provided_traits,
            left=left_conversion(left_input),
            right=right_conversion(right_input),
            join_type=join.join_type,
            condition=join.condition,
            left_keys=info.left_keys,
            right_keys=info.right_keys,
            non_equi_condition=compose_conjunction(list(info.non_equi_conditions)),
        )
