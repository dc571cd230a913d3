"""Compile row expressions into SQLAlchemy column expressions."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any

from sqlalchemy import and_, column, false, literal, literal_column, not_, null, or_, true
from sqlalchemy.sql import ColumnElement

from ..expressions.column import Column
from ..types import RowType
from ..utils.exceptions import PlanningError

logger = logging.getLogger(__name__)


def unique_field_names(row_type: RowType) -> list[str]:
    """Field names with duplicates suffixed by ``0``, ``1``, ..."""
    seen: dict[str, int] = {}
    names = []
    taken = set(row_type.field_names)
    for name in row_type.field_names:
        if name not in seen:
            seen[name] = 0
            names.append(name)
            continue
        candidate = f"{name}{seen[name]}"
        while candidate in taken:
            seen[name] += 1
            candidate = f"{name}{seen[name]}"
        seen[name] += 1
        taken.add(candidate)
        names.append(candidate)
    return names


class ExpressionCompiler:
    """Compile :class:`Column` trees over a row type into SQLAlchemy expressions."""

    def __init__(self, row_type: RowType):
        self.row_type = row_type
        self._names = unique_field_names(row_type)

    def compile_expr(self, expression: Column) -> ColumnElement:
        """Compile a :class:`Column` expression to a SQLAlchemy column expression."""
        return self._compile(expression)

    def emit(self, expression: Column) -> str:
        """Compile a :class:`Column` expression to a SQL string.

        Args:
            expression: :class:`Column` expression to compile

        Returns:
            SQL string representation of the expression
        """
        compiled = self.compile_expr(expression)
        return str(compiled.compile(compile_kwargs={"literal_binds": True}))

    def _literal(self, value: Any) -> ColumnElement:
        if value is None:
            return null()
        if value is True:
            return true()
        if value is False:
            return false()
        if isinstance(value, timedelta):
            millis = value // timedelta(milliseconds=1)
            return literal_column(f"INTERVAL '{millis}' MILLISECOND")
        return literal(value)

    def _compile(self, expression: Column) -> ColumnElement:
        if not isinstance(expression, Column):
            raise PlanningError(f"Expected Column expression, got {type(expression)}")

        op = expression.op
        args = expression.args

        if op == "input_ref":
            index = args[0]
            if index >= len(self._names):
                raise PlanningError(
                    f"Input reference ${index} is out of range for row type {self.row_type}"
                )
            return column(self._names[index])
        if op == "literal":
            return self._literal(args[0])
        if op == "and":
            return and_(self._compile(args[0]), self._compile(args[1]))
        if op == "or":
            return or_(self._compile(args[0]), self._compile(args[1]))
        if op == "not":
            return not_(self._compile(args[0]))
        if op == "neg":
            return -self._compile(args[0])
        if op == "is_null":
            return self._compile(args[0]).is_(None)
        if op == "is_not_null":
            return self._compile(args[0]).is_not(None)

        left = self._compile(args[0])
        right = self._compile(args[1])
        if op == "add":
            return left + right
        if op == "sub":
            return left - right
        if op == "mul":
            return left * right
        if op == "eq":
            return left == right
        if op == "ne":
            return left != right
        if op == "lt":
            return left < right
        if op == "le":
            return left <= right
        if op == "gt":
            return left > right
        if op == "ge":
            return left >= right

        logger.debug("Unsupported operator in expression: %s", op)
        raise PlanningError(f"Unsupported expression operator: {op!r}")
