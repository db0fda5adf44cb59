"""Consolidation planning services."""

from .base import Candidate, ConsolidationPlan, TargetSelector
from .dispatcher import get_selector
from .service import build_consolidation_plan, plan_consolidation

__all__ = [
    "Candidate",
    "ConsolidationPlan",
    "TargetSelector",
    "build_consolidation_plan",
    "get_selector",
    "plan_consolidation",
]
