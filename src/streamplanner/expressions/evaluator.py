"""Evaluate row expressions against concrete rows.

The planner never executes joins; this interpreter exists so that rewritten
conditions can be checked against the conditions they replace.
"""

from __future__ import annotations

import operator
from collections.abc import Sequence
from datetime import datetime, timedelta
from typing import Any, Callable

from ..utils.exceptions import PlanningError
from .column import Column

_BINARY: dict[str, Callable[[Any, Any], Any]] = {
    "add": operator.add,
    "sub": operator.sub,
    "mul": operator.mul,
    "eq": operator.eq,
    "ne": operator.ne,
    "lt": operator.lt,
    "le": operator.le,
    "gt": operator.gt,
    "ge": operator.ge,
}


def _normalize(value: Any) -> Any:
    # Time values compare in epoch milliseconds, like interval literals.
    if isinstance(value, timedelta):
        return value // timedelta(milliseconds=1)
    if isinstance(value, datetime):
        return int(value.timestamp() * 1000)
    return value


def evaluate(expression: Column, row: Sequence[Any]) -> Any:
    """Evaluate ``expression`` over ``row`` with SQL ``NULL`` semantics.

    Args:
        expression: Expression whose input references index into ``row``
        row: Field values; ``datetime`` and ``timedelta`` values are
            compared as milliseconds

    Returns:
        The value of the expression; ``None`` stands for ``NULL``

    Raises:
        PlanningError: If the expression uses an operator the evaluator does not know
    """
    op = expression.op
    if op == "input_ref":
        return _normalize(row[expression.args[0]])
    if op == "literal":
        return _normalize(expression.args[0])
    if op == "and":
        left, right = (evaluate(arg, row) for arg in expression.args)
        if left is False or right is False:
            return False
        if left is None or right is None:
            return None
        return True
    if op == "or":
        left, right = (evaluate(arg, row) for arg in expression.args)
        if left is True or right is True:
            return True
        if left is None or right is None:
            return None
        return False
    if op == "not":
        value = evaluate(expression.args[0], row)
        return None if value is None else not value
    if op == "neg":
        value = evaluate(expression.args[0], row)
        return None if value is None else -value
    if op == "is_null":
        return evaluate(expression.args[0], row) is None
    if op == "is_not_null":
        return evaluate(expression.args[0], row) is not None
    if op in _BINARY:
        left, right = (evaluate(arg, row) for arg in expression.args)
        if left is None or right is None:
            return None
        return _BINARY[op](left, right)
    raise PlanningError(f"Cannot evaluate expression with operator {op!r}")
