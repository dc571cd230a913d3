"""Public streamplanner API."""

from __future__ import annotations

from .config import PlannerConfig, create_config
from .expressions import and_, lit, ref
from .hints import EarlyFireParameters, RelHint
from .logical.operators import filter, join, project, scan
from .logical.plan import LogicalPlan
from .physical.nodes import StreamPhysicalIntervalJoin, StreamPhysicalRel, explain
from .planner.optimizer import StreamPlanner
from .planner.window_bounds import WindowBounds, extract_window_bounds
from .types import proctime, rowtime

__version__ = "0.1.0"

__all__ = [
    "EarlyFireParameters",
    "PlannerConfig",
    "RelHint",
    "StreamPhysicalIntervalJoin",
    "StreamPlanner",
    "WindowBounds",
    "__version__",
    "and_",
    "create_config",
    "explain",
    "extract_window_bounds",
    "filter",
    "join",
    "lit",
    "plan",
    "proctime",
    "project",
    "ref",
    "rowtime",
    "scan",
]


def plan(logical_plan: LogicalPlan, config: PlannerConfig | None = None) -> StreamPhysicalRel:
    """Convert ``logical_plan`` into a physical stream plan.

    Configuration can be provided via ``config`` or environment variables:
    - STREAMPLANNER_INTERVAL_JOIN_ENABLED: Register the interval join rule
    - STREAMPLANNER_REGULAR_JOIN_ENABLED: Register the regular join rule
    - STREAMPLANNER_LOG_DECISIONS: Log rule decisions at INFO level

    Returns:
        Root of the physical plan
    """
    return StreamPlanner(config).optimize(logical_plan)
