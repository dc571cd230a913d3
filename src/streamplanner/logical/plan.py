"""Logical plan node definitions."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from ..expressions.column import Column
from ..expressions.functions import split_conjunctions
from ..hints.join_hints import RelHint
from ..types import Field, RowType


class JoinType(str, Enum):
    INNER = "inner"
    LEFT = "left"
    RIGHT = "right"
    FULL = "full"
    SEMI = "semi"
    ANTI = "anti"

    @property
    def projects_right(self) -> bool:
        """Whether rows of this join carry the right input's fields."""
        return self not in (JoinType.SEMI, JoinType.ANTI)

    @property
    def display_name(self) -> str:
        return f"{self.value.capitalize()}Join"


@dataclass(frozen=True)
class LogicalPlan:
    """Base class for logical operators."""

    def children(self) -> Sequence[LogicalPlan]:
        return ()

    @property
    def row_type(self) -> RowType:
        raise NotImplementedError


@dataclass(frozen=True)
class TableScan(LogicalPlan):
    table: str
    schema: RowType
    alias: str | None = None

    @property
    def row_type(self) -> RowType:
        return self.schema


@dataclass(frozen=True)
class Filter(LogicalPlan):
    child: LogicalPlan
    predicate: Column

    def children(self) -> Sequence[LogicalPlan]:
        return (self.child,)

    @property
    def row_type(self) -> RowType:
        return self.child.row_type


@dataclass(frozen=True)
class Project(LogicalPlan):
    """Projection of input fields by position.

    Only plain input references are supported, which keeps field types (and
    therefore time attributes) intact through the projection.
    """

    child: LogicalPlan
    projections: tuple[Column, ...]

    def children(self) -> Sequence[LogicalPlan]:
        return (self.child,)

    @property
    def row_type(self) -> RowType:
        input_type = self.child.row_type
        fields = []
        for projection in self.projections:
            source = input_type[projection.index]
            fields.append(Field(projection.alias_name or source.name, source.type))
        return RowType(tuple(fields))


@dataclass(frozen=True)
class JoinInfo:
    """Equi-join keys and leftover predicates of a join condition.

    ``left_keys[i]`` pairs with ``right_keys[i]``; right keys are positions in
    the right input's own row type.
    """

    left_keys: tuple[int, ...]
    right_keys: tuple[int, ...]
    non_equi_conditions: tuple[Column, ...] = ()


@dataclass(frozen=True)
class Join(LogicalPlan):
    left: LogicalPlan
    right: LogicalPlan
    join_type: JoinType
    condition: Column
    hints: tuple[RelHint, ...] = field(default=())

    def children(self) -> Sequence[LogicalPlan]:
        return (self.left, self.right)

    @property
    def row_type(self) -> RowType:
        if self.join_type.projects_right:
            return self.left.row_type.concat(self.right.row_type)
        return self.left.row_type

    def analyze_condition(self) -> JoinInfo:
        """Split the condition into equi-join key pairs and the rest.

        A conjunct ``$l = $r`` where ``$l`` is a field of the left input and
        ``$r`` a field of the right input contributes a key pair; every other
        conjunct is kept as a non-equi condition.
        """
        left_count = self.left.row_type.field_count
        left_keys: list[int] = []
        right_keys: list[int] = []
        others: list[Column] = []
        for conjunct in split_conjunctions(self.condition):
            if conjunct.op == "eq":
                lhs, rhs = conjunct.args
                if lhs.is_input_ref and rhs.is_input_ref:
                    a, b = lhs.index, rhs.index
                    if a < left_count <= b:
                        left_keys.append(a)
                        right_keys.append(b - left_count)
                        continue
                    if b < left_count <= a:
                        left_keys.append(b)
                        right_keys.append(a - left_count)
                        continue
            others.append(conjunct)
        return JoinInfo(tuple(left_keys), tuple(right_keys), tuple(others))
