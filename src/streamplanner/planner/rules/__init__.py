"""Join conversion rules."""

from .base import RuleCall, StreamPhysicalJoinRuleBase, convert_input
from .interval_join import StreamPhysicalIntervalJoinRule
from .regular_join import StreamPhysicalJoinRule

__all__ = [
    "RuleCall",
    "StreamPhysicalIntervalJoinRule",
    "StreamPhysicalJoinRule",
    "StreamPhysicalJoinRuleBase",
    "convert_input",
]
