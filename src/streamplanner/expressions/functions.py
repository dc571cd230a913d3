"""Helper functions for building and rewriting conditions."""

from __future__ import annotations

from collections.abc import Sequence
from functools import reduce
from typing import Optional

from .column import Column, ColumnLike, LiteralValue, ensure_column, input_ref, literal


def lit(value: LiteralValue) -> Column:
    """Create a literal column expression from a Python value.

    Args:
        value: The literal value (bool, int, float, str, timedelta, or None)

    Returns:
        Column expression representing the literal value

    Example:
        >>> from streamplanner.expressions import functions as F
        >>> F.lit(5000)
        >>> F.lit(timedelta(seconds=5))
    """
    return literal(value)


def ref(index: int) -> Column:
    """Shorthand for :func:`~streamplanner.expressions.column.input_ref`."""
    return input_ref(index)


def and_(*conditions: ColumnLike) -> Column:
    """Combine conditions with ``AND``.

    Nested conjunctions are flattened first, so ``and_(a & b, c)`` and
    ``and_(a, b, c)`` produce the same tree.
    """
    parts: list[Column] = []
    for condition in conditions:
        parts.extend(split_conjunctions(ensure_column(condition)))
    composed = compose_conjunction(parts)
    return composed if composed is not None else literal(True)


def split_conjunctions(condition: Optional[Column]) -> list[Column]:
    """Flatten a tree of ``AND`` nodes into its conjuncts.

    A literal ``TRUE`` contributes no conjuncts.
    """
    if condition is None:
        return []
    if condition.op == "and":
        result: list[Column] = []
        for arg in condition.args:
            result.extend(split_conjunctions(arg))
        return result
    if condition.op == "literal" and condition.args[0] is True:
        return []
    return [condition]


def compose_conjunction(conditions: Sequence[Column]) -> Optional[Column]:
    """Left-fold ``conditions`` with ``AND``; ``None`` when there are none."""
    if not conditions:
        return None
    return reduce(lambda acc, cond: Column(op="and", args=(acc, cond)), conditions)

