"""Factory for target selection rules based on configuration."""

from __future__ import annotations

from .base import TargetSelector
from .selectors import BestFitSelector, FirstFitSelector


def get_selector(method: str) -> TargetSelector:
    match method:
        case "first_fit":
            return FirstFitSelector()
        case "best_fit":
            return BestFitSelector()
        case _:
            raise ValueError(f"Unknown target selection method '{method}'.")
