"""Logical plan nodes."""

from .plan import Filter, Join, JoinInfo, JoinType, LogicalPlan, Project, TableScan

__all__ = ["Filter", "Join", "JoinInfo", "JoinType", "LogicalPlan", "Project", "TableScan"]
