"""Tests for logical plan nodes."""

from __future__ import annotations

import pytest
from sqlalchemy.types import BIGINT

from streamplanner.expressions import ref
from streamplanner.logical import operators
from streamplanner.logical.plan import JoinType


def test_join_row_type_concatenates_inputs(orders, shipments):
    join = operators.join(orders, shipments, ref(0) == ref(5))
    assert join.row_type.field_names == [
        "order_id",
        "product",
        "amount",
        "order_time",
        "ship_id",
        "order_id",
        "ship_time",
    ]


@pytest.mark.parametrize("how", ["semi", "anti"])
def test_semi_and_anti_joins_keep_left_fields(orders, shipments, how):
    join = operators.join(orders, shipments, ref(0) == ref(5), how=how)
    assert join.row_type.field_count == 4


def test_analyze_condition_pairs_keys_in_order(orders, shipments):
    condition = (ref(5) == ref(0)) & (ref(1) == ref(4)) & (ref(2) > 3)
    info = operators.join(orders, shipments, condition).analyze_condition()

    assert (info.left_keys, info.right_keys) == ((0, 1), (1, 0))
    assert info.non_equi_conditions[0].same_as(ref(2) > 3)


def test_equality_within_one_side_is_not_a_key(orders, shipments):
    info = operators.join(orders, shipments, ref(0) == ref(2)).analyze_condition()
    assert info.left_keys == ()
    assert len(info.non_equi_conditions) == 1


def test_project_keeps_types_and_renames(orders):
    projected = operators.project(orders, [ref(3).alias("ts"), 0])
    assert projected.row_type.field_names == ["ts", "order_id"]
    assert projected.row_type[0].type is orders.row_type[3].type


def test_project_rejects_computed_columns(orders):
    with pytest.raises(TypeError):
        operators.project(orders, [ref(0) + 1])


def test_join_type_names():
    assert JoinType("full").display_name == "FullJoin"
    assert JoinType.INNER.projects_right
    assert not JoinType.ANTI.projects_right


def test_scan_accepts_pairs():
    scan = operators.scan("t", [("id", BIGINT())], alias="x")
    assert scan.row_type.field_names == ["id"]
    assert scan.alias == "x"
