"""Base classes for merge target selection."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Sequence

from ...models.domain import MoveSuggestion, Section


@dataclass(slots=True)
class Candidate:
    """A potential merge target and its simulated running total."""

    section: Section
    running_totes: int
    position: int


class TargetSelector(ABC):
    """Contract for choosing one target among the candidates that fit."""

    name: str = ""

    @abstractmethod
    def select(
        self,
        *,
        source_totes: int,
        candidates: Sequence[Candidate],
        capacity: int,
    ) -> Optional[Candidate]:
        raise NotImplementedError


@dataclass(slots=True)
class ConsolidationPlan:
    """Container for the planner output."""

    moves: list[MoveSuggestion]
    unmatched: list[Section] = field(default_factory=list)
    sections_before: int = 0
    metadata: dict = field(default_factory=dict)

    @property
    def sections_after(self) -> int:
        return self.sections_before - len(self.moves)

    def moves_for_shipment(self, shipment: str) -> list[MoveSuggestion]:
        return [move for move in self.moves if move.shipment == shipment]
