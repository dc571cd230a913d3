"""Column helper for building row expressions over plan inputs."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import timedelta
from typing import Any, Union
from typing_extensions import TypeAlias

from .expr import Expression

LiteralValue = Union[bool, int, float, str, timedelta, None]
ColumnLike: TypeAlias = Union["Column", LiteralValue]


@dataclass(frozen=True, eq=False)
class Column(Expression):
    """Expression node with Python operator overloads.

    Columns reference the fields of a plan node's input row by position
    (see :func:`input_ref`); a join condition references the concatenation
    of the left and right input rows.
    """

    # ------------------------------------------------------------------ helpers
    def alias(self, alias: str) -> "Column":
        return replace(self, _alias=alias)

    def is_null(self) -> "Column":
        return Column(op="is_null", args=(self,))

    def is_not_null(self) -> "Column":
        return Column(op="is_not_null", args=(self,))

    @property
    def is_input_ref(self) -> bool:
        return self.op == "input_ref"

    @property
    def is_literal(self) -> bool:
        return self.op == "literal"

    @property
    def index(self) -> int:
        """Position referenced by an ``input_ref`` column."""
        if self.op != "input_ref":
            raise TypeError(f"Column {self.op!r} is not an input reference")
        return int(self.args[0])

    @property
    def value(self) -> Any:
        if self.op != "literal":
            raise TypeError(f"Column {self.op!r} is not a literal")
        return self.args[0]

    # ---------------------------------------------------------------- operators
    def _binary(self, op: str, other: ColumnLike) -> "Column":
        return Column(op=op, args=(self, ensure_column(other)))

    def _unary(self, op: str) -> "Column":
        return Column(op=op, args=(self,))

    def __add__(self, other: ColumnLike) -> "Column":
        return self._binary("add", other)

    def __radd__(self, other: ColumnLike) -> "Column":
        return Column(op="add", args=(ensure_column(other), self))

    def __sub__(self, other: ColumnLike) -> "Column":
        return self._binary("sub", other)

    def __mul__(self, other: ColumnLike) -> "Column":
        return self._binary("mul", other)

    def __neg__(self) -> "Column":
        return self._unary("neg")

    def __eq__(self, other: object) -> "Column":  # type: ignore[override]
        return self._binary("eq", other)  # type: ignore[arg-type]

    def __ne__(self, other: object) -> "Column":  # type: ignore[override]
        return self._binary("ne", other)  # type: ignore[arg-type]

    def __lt__(self, other: ColumnLike) -> "Column":
        return self._binary("lt", other)

    def __le__(self, other: ColumnLike) -> "Column":
        return self._binary("le", other)

    def __gt__(self, other: ColumnLike) -> "Column":
        return self._binary("gt", other)

    def __ge__(self, other: ColumnLike) -> "Column":
        return self._binary("ge", other)

    def __and__(self, other: ColumnLike) -> "Column":
        return self._binary("and", other)

    def __or__(self, other: ColumnLike) -> "Column":
        return self._binary("or", other)

    def __invert__(self) -> "Column":
        return self._unary("not")

    __hash__ = object.__hash__

    def same_as(self, other: object) -> bool:
        """Structural equality (``==`` builds an ``eq`` expression instead)."""
        if not isinstance(other, Column):
            return False
        if self.op != other.op or len(self.args) != len(other.args):
            return False
        for mine, theirs in zip(self.args, other.args):
            if isinstance(mine, Column):
                if not mine.same_as(theirs):
                    return False
            elif isinstance(theirs, Column) or type(mine) is not type(theirs) or mine != theirs:
                return False
        return True

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        if self.op == "input_ref":
            return f"${self.args[0]}"
        if self.op == "literal":
            return repr(self.args[0])
        args = ", ".join(repr(arg) for arg in self.args)
        return f"{self.op}({args})"


def input_ref(index: int) -> Column:
    """Reference the field at ``index`` of the input row."""
    if index < 0:
        raise ValueError(f"Input reference index must be non-negative, got {index}")
    return Column(op="input_ref", args=(index,))


def literal(value: LiteralValue) -> Column:
    return Column(op="literal", args=(value,))


def ensure_column(value: ColumnLike) -> Column:
    if isinstance(value, Column):
        return value
    return literal(value)
