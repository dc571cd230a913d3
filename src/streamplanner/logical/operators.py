"""Factory helpers for logical plan nodes."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Union

from sqlalchemy.types import TypeEngine

from ..expressions.column import Column, input_ref
from ..hints.join_hints import RelHint
from ..types import Field, RowType
from .plan import Filter, Join, JoinType, LogicalPlan, Project, TableScan


def scan(
    table: str,
    fields: Union[RowType, Sequence[Union[Field, tuple[str, TypeEngine]]]],
    alias: str | None = None,
) -> TableScan:
    """Create a TableScan logical plan node.

    Args:
        table: Name of the table to scan
        fields: Row type of the table, or ``(name, type)`` pairs
        alias: Optional alias for the table

    Returns:
        TableScan logical plan node
    """
    schema = fields if isinstance(fields, RowType) else RowType.of(*fields)
    return TableScan(table=table, schema=schema, alias=alias)


def filter(child: LogicalPlan, predicate: Column) -> Filter:
    """Create a Filter logical plan node.

    Args:
        child: Child logical plan
        predicate: Column expression for the filter condition

    Returns:
        Filter logical plan node
    """
    return Filter(child=child, predicate=predicate)


def project(child: LogicalPlan, columns: Sequence[Union[int, Column]]) -> Project:
    """Create a Project logical plan node.

    Args:
        child: Child logical plan
        columns: Input positions or input references to keep, in output order

    Returns:
        Project logical plan node
    """
    projections = tuple(c if isinstance(c, Column) else input_ref(c) for c in columns)
    for projection in projections:
        if not projection.is_input_ref:
            raise TypeError("Project only supports input references")
    return Project(child=child, projections=projections)


def join(
    left: LogicalPlan,
    right: LogicalPlan,
    condition: Column,
    *,
    how: Union[str, JoinType] = JoinType.INNER,
    hints: Sequence[RelHint] = (),
) -> Join:
    """Create a Join logical plan node.

    Args:
        left: Left logical plan
        right: Right logical plan
        condition: Join condition over the concatenated left and right rows
        how: Join type ("inner", "left", "right", "full", "semi", "anti")
        hints: Planner hints attached to the join

    Returns:
        Join logical plan node
    """
    return Join(
        left=left,
        right=right,
        join_type=JoinType(how),
        condition=condition,
        hints=tuple(hints),
    )
