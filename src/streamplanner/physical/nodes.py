"""Physical stream plan nodes."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from ..expressions.column import Column
from ..hints.early_fire import EarlyFireParameters
from ..logical.plan import JoinType
from ..planner.traits import STREAM_PHYSICAL, TraitSet
from ..planner.window_bounds import WindowBounds
from ..sql.expression_compiler import ExpressionCompiler, unique_field_names
from ..types import RowType


@dataclass(frozen=True)
class StreamPhysicalRel:
    """Base class for physical operators.

    Subclasses provide a ``traits`` field and a ``row_type`` property.
    """

    def inputs(self) -> Sequence[StreamPhysicalRel]:
        return ()

    @property
    def operator_name(self) -> str:
        return type(self).__name__.replace("StreamPhysical", "")

    def explain_terms(self) -> list[tuple[str, str]]:
        return []


@dataclass(frozen=True)
class StreamPhysicalTableSourceScan(StreamPhysicalRel):
    table: str
    schema: RowType
    traits: TraitSet = STREAM_PHYSICAL

    @property
    def row_type(self) -> RowType:
        return self.schema

    def explain_terms(self) -> list[tuple[str, str]]:
        return [("table", self.table), ("fields", ", ".join(self.schema.field_names))]


@dataclass(frozen=True)
class StreamPhysicalCalc(StreamPhysicalRel):
    """Filter and/or projection by input position."""

    input: StreamPhysicalRel
    projection: Optional[tuple[int, ...]] = None
    condition: Optional[Column] = None
    output_names: Optional[tuple[str, ...]] = None
    traits: TraitSet = STREAM_PHYSICAL

    def inputs(self) -> Sequence[StreamPhysicalRel]:
        return (self.input,)

    @property
    def row_type(self) -> RowType:
        input_type = self.input.row_type
        if self.projection is None:
            return input_type
        projected = input_type.select(self.projection)
        if self.output_names is None:
            return projected
        return RowType.of(*((n, f.type) for n, f in zip(self.output_names, projected)))

    def explain_terms(self) -> list[tuple[str, str]]:
        names = unique_field_names(self.input.row_type)
        terms = []
        if self.projection is not None:
            terms.append(("select", ", ".join(names[i] for i in self.projection)))
        if self.condition is not None:
            compiler = ExpressionCompiler(self.input.row_type)
            terms.append(("where", compiler.emit(self.condition)))
        return terms


@dataclass(frozen=True)
class StreamPhysicalExchange(StreamPhysicalRel):
    """Redistributes its input according to ``traits.distribution``."""

    input: StreamPhysicalRel
    traits: TraitSet = STREAM_PHYSICAL

    def inputs(self) -> Sequence[StreamPhysicalRel]:
        return (self.input,)

    @property
    def row_type(self) -> RowType:
        return self.input.row_type

    def explain_terms(self) -> list[tuple[str, str]]:
        return [("distribution", str(self.traits.distribution))]


@dataclass(frozen=True)
class _PhysicalJoinBase(StreamPhysicalRel):
    traits: TraitSet
    left: StreamPhysicalRel
    right: StreamPhysicalRel
    join_type: JoinType

    def inputs(self) -> Sequence[StreamPhysicalRel]:
        return (self.left, self.right)

    @property
    def row_type(self) -> RowType:
        if self.join_type.projects_right:
            return self.left.row_type.concat(self.right.row_type)
        return self.left.row_type

    def _input_compiler(self) -> ExpressionCompiler:
        return ExpressionCompiler(self.left.row_type.concat(self.right.row_type))

    def _select_term(self) -> tuple[str, str]:
        return ("select", ", ".join(unique_field_names(self.row_type)))


@dataclass(frozen=True)
class StreamPhysicalJoin(_PhysicalJoinBase):
    """Regular (unbounded state) stream join."""

    condition: Column
    left_keys: tuple[int, ...] = ()
    right_keys: tuple[int, ...] = ()
    non_equi_condition: Optional[Column] = None

    def explain_terms(self) -> list[tuple[str, str]]:
        return [
            ("joinType", self.join_type.display_name),
            ("where", self._input_compiler().emit(self.condition)),
            self._select_term(),
        ]


@dataclass(frozen=True)
class StreamPhysicalIntervalJoin(_PhysicalJoinBase):
    """Stream join whose rows only match inside a bounded time window.

    ``remain_condition`` is the part of ``original_condition`` that the
    window bounds do not express; it is the literal ``TRUE`` when the bounds
    consumed the whole condition.
    """

    original_condition: Column
    remain_condition: Column
    window_bounds: WindowBounds
    early_fire_delay: int = 0
    early_fire_frequency: int = 0

    @property
    def early_fire(self) -> EarlyFireParameters:
        return EarlyFireParameters(self.early_fire_delay, self.early_fire_frequency)

    @property
    def operator_name(self) -> str:
        return "IntervalJoin"

    def explain_terms(self) -> list[tuple[str, str]]:
        terms = [
            ("joinType", self.join_type.display_name),
            ("windowBounds", str(self.window_bounds)),
            ("where", self._input_compiler().emit(self.original_condition)),
            self._select_term(),
        ]
        if self.early_fire.enabled:
            terms.append(
                (
                    "earlyFire",
                    f"delay={self.early_fire_delay}, frequency={self.early_fire_frequency}",
                )
            )
        return terms


def explain(node: StreamPhysicalRel, indent: int = 0) -> str:
    """Render ``node`` and its inputs as an indented plan tree."""
    terms = ", ".join(f"{name}=[{value}]" for name, value in node.explain_terms())
    lines = [f"{'   ' * indent}{'+- ' if indent else ''}{node.operator_name}({terms})"]
    for child in node.inputs():
        lines.append(explain(child, indent + 1))
    return "\n".join(lines)
