"""Bottom-up conversion of logical plans into physical stream plans."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Optional

from ..config import PlannerConfig, create_config
from ..logical.plan import Filter, Join, LogicalPlan, Project, TableScan
from ..physical.nodes import StreamPhysicalCalc, StreamPhysicalRel, StreamPhysicalTableSourceScan
from ..utils.exceptions import PlanningError
from .rules.base import RuleCall, StreamPhysicalJoinRuleBase
from .rules.interval_join import StreamPhysicalIntervalJoinRule
from .rules.regular_join import StreamPhysicalJoinRule

logger = logging.getLogger(__name__)


def default_join_rules(config: PlannerConfig) -> list[StreamPhysicalJoinRuleBase]:
    """Join rules in the order they are offered each join."""
    rules: list[StreamPhysicalJoinRuleBase] = []
    if config.interval_join_enabled:
        rules.append(StreamPhysicalIntervalJoinRule(config))
    if config.regular_join_enabled:
        rules.append(StreamPhysicalJoinRule(config))
    return rules


class StreamPlanner:
    """Convert a logical plan into a physical stream plan.

    Inputs are converted before their parents. Each logical join is offered
    to the join rules in order; the first rule that matches replaces it.
    """

    def __init__(
        self,
        config: Optional[PlannerConfig] = None,
        rules: Optional[Sequence[StreamPhysicalJoinRuleBase]] = None,
    ):
        self.config = config or create_config()
        self.rules = list(rules) if rules is not None else default_join_rules(self.config)

    def optimize(self, plan: LogicalPlan) -> StreamPhysicalRel:
        """Convert ``plan`` and all its inputs.

        Raises:
            ValidationError: If a join is semantically invalid
            PlanningError: If no rule can convert a join, or a rule's contract is violated
        """
        if isinstance(plan, TableScan):
            return StreamPhysicalTableSourceScan(table=plan.alias or plan.table, schema=plan.schema)

        if isinstance(plan, Filter):
            return StreamPhysicalCalc(input=self.optimize(plan.child), condition=plan.predicate)

        if isinstance(plan, Project):
            names = plan.row_type.field_names
            return StreamPhysicalCalc(
                input=self.optimize(plan.child),
                projection=tuple(p.index for p in plan.projections),
                output_names=tuple(names),
            )

        if isinstance(plan, Join):
            return self._convert_join(plan)

        raise PlanningError(f"Unsupported logical plan node: {type(plan).__name__}")

    def _convert_join(self, join: Join) -> StreamPhysicalRel:
        call = RuleCall(join, self.optimize(join.left), self.optimize(join.right))
        for rule in self.rules:
            if rule.matches(call):
                rule.on_match(call)
                return call.result
            logger.debug("%s does not match %s join", rule, join.join_type.value)
        raise PlanningError(
            "Cannot generate a valid execution plan for the given join.",
            suggestion="Check that the join rules needed by this query are enabled.",
            context={"join_type": join.join_type.value, "rules": self.rules},
        )
