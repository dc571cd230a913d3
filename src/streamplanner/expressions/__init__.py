"""Expression system public exports."""

from .column import Column, ensure_column, input_ref, literal
from .evaluator import evaluate
from .functions import (
    and_,
    compose_conjunction,
    lit,
    ref,
    split_conjunctions,
)

__all__ = [
    "Column",
    "and_",
    "compose_conjunction",
    "ensure_column",
    "evaluate",
    "input_ref",
    "lit",
    "literal",
    "ref",
    "split_conjunctions",
]
