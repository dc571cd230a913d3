"""Rule converting time-bounded joins into interval joins."""

from __future__ import annotations

from typing import Optional

from ...config import PlannerConfig
from ...expressions.column import literal
from ...hints.early_fire import parse_early_fire_hint
from ...logical.plan import Join
from ...physical.nodes import StreamPhysicalIntervalJoin, StreamPhysicalRel
from ...types import is_rowtime_indicator_type, sql_type_name, type_string
from ...utils.exceptions import InternalPlannerError, PlanningError, ValidationError
from ..traits import TraitSet
from ..window_bounds import WindowBounds, extract_window_bounds, satisfy_interval_join
from .base import Conversion, RuleCall, StreamPhysicalJoinRuleBase


def _require_bounds(bounds: Optional[WindowBounds], join: Join) -> WindowBounds:
    if bounds is None:
        raise InternalPlannerError(
            "Window bounds are missing for a join that satisfies the interval join shape.",
            context={"join_type": join.join_type.value},
        )
    return bounds


class StreamPhysicalIntervalJoinRule(StreamPhysicalJoinRuleBase):
    """Converts non-SEMI/ANTI joins with window bounds in their condition
    into :class:`StreamPhysicalIntervalJoin`.
    """

    def __init__(self, config: Optional[PlannerConfig] = None):
        super().__init__("StreamPhysicalIntervalJoinRule", config)

    def matches(self, call: RuleCall) -> bool:
        join: Join = call.rel(0)

        if not satisfy_interval_join(join):
            return False

        # validate the join
        window_bounds = _require_bounds(extract_window_bounds(join)[0], join)

        if window_bounds.is_event_time:
            left_time_type = join.left.row_type[window_bounds.left_time_idx].type
            right_time_type = join.right.row_type[window_bounds.right_time_idx].type
            if sql_type_name(left_time_type) != sql_type_name(right_time_type):
                raise ValidationError(
                    "Interval join with rowtime attribute requires same rowtime types,"
                    f" but the types are {type_string(left_time_type)}"
                    f" and {type_string(right_time_type)}."
                )
        else:
            # A processing time window join cannot hold back watermarks, so no
            # event-time attribute may reach it. Unused attributes are expected
            # to be projected away before the join.
            if any(is_rowtime_indicator_type(f.type) for f in join.row_type):
                raise PlanningError(
                    "Interval join with proctime attribute requires no event-time "
                    "attributes are in the join inputs."
                )

        self.log_decision("%s matched window [%s]", self, window_bounds)
        return True

    def compute_join_left_keys(self, join: Join) -> list[int]:
        window_bounds, _ = extract_window_bounds(join)
        time_idx = _require_bounds(window_bounds, join).left_time_idx
        return [k for k in join.analyze_condition().left_keys if k != time_idx]

    def compute_join_right_keys(self, join: Join) -> list[int]:
        window_bounds, _ = extract_window_bounds(join)
        time_idx = _require_bounds(window_bounds, join).right_time_idx
        return [k for k in join.analyze_condition().right_keys if k != time_idx]

    def transform(
        self,
        join: Join,
        left_input: StreamPhysicalRel,
        left_conversion: Conversion,
        right_input: StreamPhysicalRel,
        right_conversion: Conversion,
        provided_traits: TraitSet,
    ) -> StreamPhysicalRel:
        window_bounds, remain_condition = extract_window_bounds(join)
        early_fire = parse_early_fire_hint(join.hints)

        return StreamPhysicalIntervalJoin(
            traits=provided_traits,
            left=left_conversion(left_input),
            right=right_conversion(right_input),
            join_type=join.join_type,
            original_condition=join.condition,
            remain_condition=remain_condition if remain_condition is not None else literal(True),
            window_bounds=_require_bounds(window_bounds, join),
            early_fire_delay=early_fire.delay,
            early_fire_frequency=early_fire.frequency,
        )
