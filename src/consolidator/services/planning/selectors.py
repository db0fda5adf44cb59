"""Target selection rules for the greedy planner."""

from __future__ import annotations

from typing import Optional, Sequence

from .base import Candidate, TargetSelector


class FirstFitSelector(TargetSelector):
    """Take the first fitting candidate in ascending-totes scan order."""

    name = "first_fit"

    def select(
        self,
        *,
        source_totes: int,
        candidates: Sequence[Candidate],
        capacity: int,
    ) -> Optional[Candidate]:
        return candidates[0] if candidates else None


class BestFitSelector(TargetSelector):
    """Take the candidate left with the least free space after the merge.

    Ties keep scan order.
    """

    name = "best_fit"

    def select(
        self,
        *,
        source_totes: int,
        candidates: Sequence[Candidate],
        capacity: int,
    ) -> Optional[Candidate]:
        if not candidates:
            return None
        return min(candidates, key=lambda c: capacity - (c.running_totes + source_totes))
