"""Tests for window bound extraction."""

from __future__ import annotations

import logging
from datetime import timedelta

import pytest

from streamplanner.expressions import and_, lit, ref
from streamplanner.logical import operators
from streamplanner.planner.window_bounds import (
    WindowBounds,
    extract_window_bounds,
    satisfy_interval_join,
)
from streamplanner.utils.exceptions import PlanningError
from tests.plan_fixtures import ORDER_TIME, SHIP_TIME


def test_extracts_symmetric_window(orders, shipments):
    condition = (ref(ORDER_TIME) >= ref(SHIP_TIME) - 5000) & (
        ref(ORDER_TIME) <= ref(SHIP_TIME) + 5000
    )
    bounds, remaining = extract_window_bounds(operators.join(orders, shipments, condition))

    assert bounds == WindowBounds(
        is_event_time=True,
        left_lower_bound=-5000,
        left_upper_bound=5000,
        left_time_idx=3,
        right_time_idx=2,
    )
    assert remaining is None


def test_timedelta_offsets_are_milliseconds(orders, shipments):
    condition = (ref(ORDER_TIME) >= ref(SHIP_TIME) - timedelta(seconds=2)) & (
        ref(ORDER_TIME) <= ref(SHIP_TIME) + timedelta(minutes=1)
    )
    bounds, _ = extract_window_bounds(operators.join(orders, shipments, condition))

    assert bounds.left_lower_bound == -2000
    assert bounds.left_upper_bound == 60000


def test_sub_millisecond_interval_is_rejected(orders, shipments):
    condition = (ref(ORDER_TIME) >= ref(SHIP_TIME) - timedelta(microseconds=500)) & (
        ref(ORDER_TIME) <= ref(SHIP_TIME) + 10
    )
    with pytest.raises(PlanningError, match="not a whole number of milliseconds"):
        extract_window_bounds(operators.join(orders, shipments, condition))


def test_whole_millisecond_microseconds_are_accepted(orders, shipments):
    condition = (ref(ORDER_TIME) >= ref(SHIP_TIME) - timedelta(microseconds=2000)) & (
        ref(ORDER_TIME) <= ref(SHIP_TIME) + 10
    )
    bounds, _ = extract_window_bounds(operators.join(orders, shipments, condition))
    assert bounds.left_lower_bound == -2


def test_strict_comparisons_tighten_bounds(orders, shipments):
    condition = (ref(ORDER_TIME) > ref(SHIP_TIME) - 10) & (ref(ORDER_TIME) < ref(SHIP_TIME) + 10)
    bounds, _ = extract_window_bounds(operators.join(orders, shipments, condition))

    assert (bounds.left_lower_bound, bounds.left_upper_bound) == (-9, 9)


def test_bounds_written_from_the_right_side_are_flipped(orders, shipments):
    # r.t - 100 <= l.t  and  r.t >= l.t - 50
    condition = (ref(SHIP_TIME) - 100 <= ref(ORDER_TIME)) & (ref(SHIP_TIME) >= ref(ORDER_TIME) - 50)
    bounds, _ = extract_window_bounds(operators.join(orders, shipments, condition))

    assert (bounds.left_lower_bound, bounds.left_upper_bound) == (-100, 50)


def test_offset_on_left_time_attribute(orders, shipments):
    # l.t + 10 >= r.t  and  10 + l.t <= r.t + 30
    condition = (ref(ORDER_TIME) + 10 >= ref(SHIP_TIME)) & (
        lit(10) + ref(ORDER_TIME) <= ref(SHIP_TIME) + 30
    )
    bounds, _ = extract_window_bounds(operators.join(orders, shipments, condition))

    assert (bounds.left_lower_bound, bounds.left_upper_bound) == (-10, 20)


def test_equality_gives_zero_width_window(orders, shipments):
    bounds, remaining = extract_window_bounds(
        operators.join(orders, shipments, ref(ORDER_TIME) == ref(SHIP_TIME))
    )
    assert (bounds.left_lower_bound, bounds.left_upper_bound) == (0, 0)
    assert remaining is None


def test_tightest_bounds_win(orders, shipments):
    condition = and_(
        ref(ORDER_TIME) >= ref(SHIP_TIME) - 100,
        ref(ORDER_TIME) >= ref(SHIP_TIME) - 10,
        ref(ORDER_TIME) <= ref(SHIP_TIME) + 100,
        ref(ORDER_TIME) <= ref(SHIP_TIME) + 20,
    )
    bounds, remaining = extract_window_bounds(operators.join(orders, shipments, condition))

    assert (bounds.left_lower_bound, bounds.left_upper_bound) == (-10, 20)
    assert remaining is None


def test_other_conjuncts_remain(orders, shipments):
    amount_filter = ref(2) > 100
    condition = and_(
        ref(0) == ref(5),
        ref(ORDER_TIME) >= ref(SHIP_TIME),
        amount_filter,
        ref(ORDER_TIME) <= ref(SHIP_TIME) + 1000,
    )
    _, remaining = extract_window_bounds(operators.join(orders, shipments, condition))

    assert remaining.same_as((ref(0) == ref(5)) & amount_filter)


def test_comparison_between_non_time_fields_is_not_a_bound(orders, shipments):
    condition = (ref(0) >= ref(4) - 5) & (ref(0) <= ref(4) + 5)
    assert extract_window_bounds(operators.join(orders, shipments, condition)) == (None, None)


def test_disjunction_is_not_a_bound(orders, shipments):
    condition = (ref(ORDER_TIME) >= ref(SHIP_TIME) - 5) | (ref(ORDER_TIME) <= ref(SHIP_TIME) + 5)
    assert extract_window_bounds(operators.join(orders, shipments, condition)) == (None, None)


def test_time_attributes_of_one_side_are_not_a_bound(orders, shipments):
    condition = (ref(ORDER_TIME) >= ref(ORDER_TIME) - 5) & (ref(ORDER_TIME) <= ref(ORDER_TIME) + 5)
    assert extract_window_bounds(operators.join(orders, shipments, condition)) == (None, None)


def test_proctime_bounds_are_not_event_time(orders_proctime, shipments_proctime):
    condition = (ref(ORDER_TIME) >= ref(SHIP_TIME) - 5) & (ref(ORDER_TIME) <= ref(SHIP_TIME) + 5)
    bounds, _ = extract_window_bounds(
        operators.join(orders_proctime, shipments_proctime, condition)
    )
    assert bounds.is_event_time is False


def test_empty_window_is_logged(orders, shipments, caplog):
    caplog.set_level(logging.WARNING, logger="streamplanner")
    condition = (ref(ORDER_TIME) >= ref(SHIP_TIME) + 10) & (ref(ORDER_TIME) <= ref(SHIP_TIME))
    bounds, _ = extract_window_bounds(operators.join(orders, shipments, condition))

    assert bounds is not None
    assert "window is empty" in caplog.text


@pytest.mark.parametrize(
    "how, expected",
    [("inner", True), ("left", True), ("full", True), ("semi", False), ("anti", False)],
)
def test_satisfy_interval_join_excludes_semi_and_anti(orders, shipments, how, expected):
    condition = (ref(ORDER_TIME) >= ref(SHIP_TIME) - 5) & (ref(ORDER_TIME) <= ref(SHIP_TIME) + 5)
    assert satisfy_interval_join(operators.join(orders, shipments, condition, how=how)) is expected


def test_window_bounds_str_uses_operator_terms():
    bounds = WindowBounds(True, -5000, 5000, 3, 2)
    assert str(bounds) == (
        "isRowTime=true, leftLowerBound=-5000, leftUpperBound=5000, "
        "leftTimeIndex=3, rightTimeIndex=2"
    )
