"""Physical stream plan nodes."""

from .nodes import (
    StreamPhysicalCalc,
    StreamPhysicalExchange,
    StreamPhysicalIntervalJoin,
    StreamPhysicalJoin,
    StreamPhysicalRel,
    StreamPhysicalTableSourceScan,
    explain,
)

__all__ = [
    "StreamPhysicalCalc",
    "StreamPhysicalExchange",
    "StreamPhysicalIntervalJoin",
    "StreamPhysicalJoin",
    "StreamPhysicalRel",
    "StreamPhysicalTableSourceScan",
    "explain",
]
