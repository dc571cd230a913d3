"""Row types and time-indicator types used by the planner.

Field types are plain SQLAlchemy :class:`~sqlalchemy.types.TypeEngine`
instances. Time attributes are marked with :class:`TimeIndicatorType`, a
``TIMESTAMP`` decorator that remembers whether the column carries event time
(``rowtime``) or processing time (``proctime``).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any, Literal, Union, overload

from sqlalchemy.types import TIMESTAMP, TypeDecorator, TypeEngine

TimeKind = Literal["rowtime", "proctime"]


class TimeIndicatorType(TypeDecorator):
    """``TIMESTAMP`` column that is a rowtime or proctime attribute."""

    impl = TIMESTAMP
    cache_ok = True

    def __init__(
        self, kind: TimeKind = "rowtime", precision: int = 3, local_time_zone: bool = False
    ):
        if kind not in ("rowtime", "proctime"):
            raise ValueError(f"Unknown time indicator kind: {kind!r}")
        super().__init__(timezone=local_time_zone)
        self.kind = kind
        self.precision = precision
        self.local_time_zone = local_time_zone

    @property
    def is_event_time(self) -> bool:
        return self.kind == "rowtime"

    def __repr__(self) -> str:
        return (
            f"TimeIndicatorType(kind={self.kind!r}, precision={self.precision}, "
            f"local_time_zone={self.local_time_zone})"
        )


def rowtime(precision: int = 3, local_time_zone: bool = False) -> TimeIndicatorType:
    """Create an event-time attribute type."""
    return TimeIndicatorType("rowtime", precision=precision, local_time_zone=local_time_zone)


def proctime(precision: int = 3) -> TimeIndicatorType:
    """Create a processing-time attribute type.

    Processing time is always reported in the local time zone.
    """
    return TimeIndicatorType("proctime", precision=precision, local_time_zone=True)


def is_rowtime_indicator_type(type_: TypeEngine) -> bool:
    return isinstance(type_, TimeIndicatorType) and type_.kind == "rowtime"


def sql_type_name(type_: TypeEngine) -> str:
    """Return the SQL type name of ``type_``, ignoring precision and nullability.

    Two time indicators share a type name when both are ``TIMESTAMP`` or both
    are ``TIMESTAMP_WITH_LOCAL_TIME_ZONE``, regardless of their precision.
    """
    if isinstance(type_, TimeIndicatorType):
        return "TIMESTAMP_WITH_LOCAL_TIME_ZONE" if type_.local_time_zone else "TIMESTAMP"
    if isinstance(type_, TIMESTAMP) and type_.timezone:
        return "TIMESTAMP_WITH_LOCAL_TIME_ZONE"
    return str(type_).split("(", 1)[0]


def type_string(type_: TypeEngine) -> str:
    """Return the display string of ``type_`` as used in planner messages.

    Examples:
        >>> type_string(rowtime())
        'TIMESTAMP(3) *ROWTIME*'
        >>> type_string(rowtime(local_time_zone=True))
        'TIMESTAMP_LTZ(3) *ROWTIME*'
    """
    if isinstance(type_, TimeIndicatorType):
        base = "TIMESTAMP_LTZ" if type_.local_time_zone else "TIMESTAMP"
        return f"{base}({type_.precision}) *{type_.kind.upper()}*"
    return str(type_)


@dataclass(frozen=True)
class Field:
    """Named, typed field of a row type."""

    name: str
    type: TypeEngine

    def __str__(self) -> str:
        return f"{self.name} {type_string(self.type)}"


@dataclass(frozen=True)
class RowType:
    """Ordered collection of fields describing the rows a plan node produces."""

    fields: tuple[Field, ...] = ()

    @classmethod
    def of(cls, *fields: Union[Field, tuple[str, TypeEngine]]) -> RowType:
        """Build a row type from fields or ``(name, type)`` pairs."""
        return cls(tuple(f if isinstance(f, Field) else Field(f[0], f[1]) for f in fields))

    @property
    def field_count(self) -> int:
        return len(self.fields)

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    def concat(self, other: RowType) -> RowType:
        return RowType(self.fields + other.fields)

    def select(self, indices: Iterable[int]) -> RowType:
        return RowType(tuple(self.fields[i] for i in indices))

    @overload
    def __getitem__(self, index: int) -> Field: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Field, ...]: ...

    def __getitem__(self, index: Any) -> Any:
        return self.fields[index]

    def __iter__(self) -> Iterator[Field]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def __str__(self) -> str:
        return "(" + ", ".join(str(f) for f in self.fields) + ")"
