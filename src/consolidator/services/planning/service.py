"""Greedy capacity-constrained consolidation of sections."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from ...config import settings
from ...models.domain import SECTION_TYPES, MoveSuggestion, Section
from .base import Candidate, ConsolidationPlan, TargetSelector
from .dispatcher import get_selector


def _plan_partition(
    sections: Sequence[Section],
    *,
    capacity: int,
    selector: TargetSelector,
    allow_chained_targets: bool,
) -> Tuple[List[MoveSuggestion], List[Section]]:
    """Plan one shipment/type partition.

    Sources are visited smallest first. Sections whose source turn has passed
    no longer receive merges. With ``allow_chained_targets`` a section that
    already received totes is moved on again with its running total;
    otherwise it stays where it is.
    """
    ordered = sorted(sections, key=lambda s: s.totes)
    running = [section.totes for section in ordered]
    consumed: set[int] = set()
    processed: set[int] = set()
    received: set[int] = set()
    moves: List[MoveSuggestion] = []
    unmatched: List[Section] = []

    for pos, source in enumerate(ordered):
        if pos in consumed:
            continue
        processed.add(pos)
        if pos in received and not allow_chained_targets:
            continue
        source_totes = running[pos]

        candidates = [
            Candidate(section=target, running_totes=running[idx], position=idx)
            for idx, target in enumerate(ordered)
            if idx not in processed
            and target.consignment != source.consignment
            and running[idx] + source_totes <= capacity
        ]
        chosen = selector.select(source_totes=source_totes, candidates=candidates, capacity=capacity)
        if chosen is None:
            unmatched.append(replace(source, totes=source_totes))
            continue

        before = running[chosen.position]
        after = before + source_totes
        moves.append(
            MoveSuggestion(
                shipment=source.shipment,
                type=source.type,
                from_consignment=source.consignment,
                to_consignment=chosen.section.consignment,
                from_totes=source_totes,
                to_totes_before=before,
                to_totes_after=after,
                from_section_id=source.section_id,
                to_section_id=chosen.section.section_id,
            )
        )
        running[chosen.position] = after
        received.add(chosen.position)
        running[pos] = 0
        consumed.add(pos)

    return moves, unmatched


def build_consolidation_plan(
    sections_by_shipment: Mapping[str, Sequence[Section]],
    *,
    capacity: Optional[int] = None,
    selection: Optional[str] = None,
    allow_chained_targets: Optional[bool] = None,
) -> ConsolidationPlan:
    """Propose merge moves per shipment and per section type.

    Shipments and types are planned independently; every emitted move keeps
    the target at or below ``capacity``.
    """
    capacity = settings.section_capacity if capacity is None else capacity
    if capacity < 1:
        raise ValueError("capacity must be >= 1")
    selection = selection or settings.target_selection
    selector = get_selector(selection)
    if allow_chained_targets is None:
        allow_chained_targets = settings.allow_chained_targets

    moves: List[MoveSuggestion] = []
    unmatched: List[Section] = []
    sections_before = 0
    per_shipment: Dict[str, int] = {}

    for shipment, sections in sections_by_shipment.items():
        live = [section for section in sections if section.totes > 0]
        sections_before += len(live)
        shipment_moves: List[MoveSuggestion] = []
        for section_type in SECTION_TYPES:
            partition = [section for section in live if section.type == section_type]
            if len(partition) < 2:
                unmatched.extend(partition)
                continue
            partition_moves, partition_unmatched = _plan_partition(
                partition,
                capacity=capacity,
                selector=selector,
                allow_chained_targets=allow_chained_targets,
            )
            shipment_moves.extend(partition_moves)
            unmatched.extend(partition_unmatched)
        per_shipment[shipment] = len(shipment_moves)
        moves.extend(shipment_moves)
        logging.debug(f"Shipment '{shipment}': {len(shipment_moves)} merge moves from {len(live)} sections")

    if unmatched:
        logging.info(f"{len(unmatched)} sections have no merge target within capacity {capacity}")

    metadata = {
        "capacity": capacity,
        "selection": selector.name,
        "allow_chained_targets": allow_chained_targets,
        "moves_per_shipment": per_shipment,
    }
    return ConsolidationPlan(
        moves=moves,
        unmatched=unmatched,
        sections_before=sections_before,
        metadata=metadata,
    )


def plan_consolidation(
    sections_by_shipment: Mapping[str, Sequence[Section]],
    *,
    capacity: Optional[int] = None,
    selection: Optional[str] = None,
    allow_chained_targets: Optional[bool] = None,
) -> List[MoveSuggestion]:
    """Return only the merge moves of :func:`build_consolidation_plan`."""
    plan = build_consolidation_plan(
        sections_by_shipment,
        capacity=capacity,
        selection=selection,
        allow_chained_targets=allow_chained_targets,
    )
    return plan.moves
