"""Extraction of time-window bounds from interval join conditions.

An interval join condition bounds the time attribute of one input relative
to the time attribute of the other, for example::

    l.rowtime >= r.rowtime - INTERVAL '5' SECOND AND
    l.rowtime <= r.rowtime + INTERVAL '10' SECOND

which is normalized to ``r.rowtime - 5000 <= l.rowtime <= r.rowtime + 10000``.
All offsets are milliseconds.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from ..expressions.column import Column, input_ref
from ..expressions.functions import and_, compose_conjunction, split_conjunctions
from ..logical.plan import Join
from ..types import RowType, TimeIndicatorType
from ..utils.exceptions import PlanningError

logger = logging.getLogger(__name__)

_BOUND_OPS = frozenset({"lt", "le", "gt", "ge", "eq"})
_FLIPPED = {"lt": "gt", "le": "ge", "gt": "lt", "ge": "le", "eq": "eq"}


@dataclass(frozen=True)
class WindowBounds:
    """Time window of an interval join.

    A left row joins a right row when
    ``right.t + left_lower_bound <= left.t <= right.t + left_upper_bound``.

    Attributes:
        is_event_time: True for rowtime attributes, False for proctime
        left_lower_bound: Lower offset in milliseconds
        left_upper_bound: Upper offset in milliseconds
        left_time_idx: Position of the time attribute in the left input
        right_time_idx: Position of the time attribute in the right input
    """

    is_event_time: bool
    left_lower_bound: int
    left_upper_bound: int
    left_time_idx: int
    right_time_idx: int

    def time_predicate(self, left_field_count: int) -> Column:
        """Rebuild the window as a condition over the joined row."""
        left = input_ref(self.left_time_idx)
        right = input_ref(left_field_count + self.right_time_idx)
        return and_(left >= right + self.left_lower_bound, left <= right + self.left_upper_bound)

    def __str__(self) -> str:
        return (
            f"isRowTime={str(self.is_event_time).lower()}, "
            f"leftLowerBound={self.left_lower_bound}, "
            f"leftUpperBound={self.left_upper_bound}, "
            f"leftTimeIndex={self.left_time_idx}, "
            f"rightTimeIndex={self.right_time_idx}"
        )


@dataclass(frozen=True)
class _TimeBound:
    left_idx: int
    right_idx: int
    is_event_time: bool
    lower: Optional[int]
    upper: Optional[int]


def _interval_millis(expression: Column) -> Optional[int]:
    if not expression.is_literal:
        return None
    value = expression.value
    if isinstance(value, timedelta):
        millis, remainder = divmod(value, timedelta(milliseconds=1))
        if remainder:
            raise PlanningError(
                f"Interval literal {value!r} is not a whole number of milliseconds.",
                suggestion="Time bounds of an interval join have millisecond precision.",
            )
        return millis
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def _time_operand(expression: Column) -> Optional[tuple[int, int]]:
    """Decompose ``$i``, ``$i + c``, ``$i - c`` or ``c + $i`` into ``(i, c)``."""
    if expression.is_input_ref:
        return expression.index, 0
    if expression.op not in ("add", "sub"):
        return None
    a, b = expression.args
    if a.is_input_ref:
        offset = _interval_millis(b)
        if offset is not None:
            return a.index, offset if expression.op == "add" else -offset
    if expression.op == "add" and b.is_input_ref:
        offset = _interval_millis(a)
        if offset is not None:
            return b.index, offset
    return None


def _as_time_bound(
    conjunct: Column, left_type: RowType, right_type: RowType
) -> Optional[_TimeBound]:
    if conjunct.op not in _BOUND_OPS:
        return None
    lhs = _time_operand(conjunct.args[0])
    rhs = _time_operand(conjunct.args[1])
    if lhs is None or rhs is None:
        return None

    op = conjunct.op
    left_count = left_type.field_count
    (a, off_a), (b, off_b) = lhs, rhs
    if b < left_count <= a:
        (a, off_a), (b, off_b) = rhs, lhs
        op = _FLIPPED[op]
    elif not a < left_count <= b:
        return None

    left_idx, right_idx = a, b - left_count
    left_time = left_type[left_idx].type
    right_time = right_type[right_idx].type
    if not isinstance(left_time, TimeIndicatorType) or not isinstance(
        right_time, TimeIndicatorType
    ):
        return None
    if left_time.kind != right_time.kind:
        return None

    # left.t + off_a <op> right.t + off_b  <=>  left.t <op> right.t + offset
    offset = off_b - off_a
    lower: Optional[int] = None
    upper: Optional[int] = None
    if op == "ge":
        lower = offset
    elif op == "gt":
        lower = offset + 1
    elif op == "le":
        upper = offset
    elif op == "lt":
        upper = offset - 1
    else:
        lower = upper = offset
    return _TimeBound(left_idx, right_idx, left_time.is_event_time, lower, upper)


def extract_window_bounds(join: Join) -> tuple[Optional[WindowBounds], Optional[Column]]:
    """Extract the window bounds and the remaining condition of ``join``.

    The first pair of time attributes bounded from both below and above
    defines the window; all comparisons between that pair are consumed and
    the tightest bound in each direction is kept.

    Returns:
        ``(bounds, remaining)``; ``bounds`` is ``None`` when the condition has
        no bounded time predicate, ``remaining`` is ``None`` when the bounds
        consumed the whole condition.
    """
    left_type = join.left.row_type
    right_type = join.right.row_type
    conjuncts = split_conjunctions(join.condition)

    groups: dict[tuple[int, int], list[tuple[int, _TimeBound]]] = {}
    for position, conjunct in enumerate(conjuncts):
        bound = _as_time_bound(conjunct, left_type, right_type)
        if bound is not None:
            groups.setdefault((bound.left_idx, bound.right_idx), []).append((position, bound))

    for (left_idx, right_idx), members in groups.items():
        lowers = [b.lower for _, b in members if b.lower is not None]
        uppers = [b.upper for _, b in members if b.upper is not None]
        if not lowers or not uppers:
            continue
        bounds = WindowBounds(
            is_event_time=members[0][1].is_event_time,
            left_lower_bound=max(lowers),
            left_upper_bound=min(uppers),
            left_time_idx=left_idx,
            right_time_idx=right_idx,
        )
        if bounds.left_lower_bound > bounds.left_upper_bound:
            logger.warning("Interval join window is empty: %s", bounds)
        consumed = {position for position, _ in members}
        remaining = [c for position, c in enumerate(conjuncts) if position not in consumed]
        return bounds, compose_conjunction(remaining)

    return None, None


def satisfy_interval_join(join: Join) -> bool:
    """Whether ``join`` is a non-SEMI/ANTI join with window bounds."""
    if not join.join_type.projects_right:
        return False
    bounds, _ = extract_window_bounds(join)
    return bounds is not None
