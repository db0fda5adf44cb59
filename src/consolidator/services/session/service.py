"""Holds one ingested batch and applies planner edits to its route overlay."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Mapping, Optional

from ...data.rows_repository import filter_consignment_rows
from ...models.domain import SECTION_TYPES, ConsignmentSummary, Section, SectionRef
from .. import assignment
from ..estimator import routes_needed
from ..extraction import enrich_and_extract, load_status
from ..planning import ConsolidationPlan, build_consolidation_plan


@dataclass(slots=True)
class PlanSnapshot:
    summaries: List[ConsignmentSummary] = field(default_factory=list)
    sections_by_shipment: Dict[str, List[Section]] = field(default_factory=dict)
    plan: ConsolidationPlan = field(default_factory=lambda: ConsolidationPlan(moves=[]))
    routes_needed: int = 0
    routes: assignment.RouteSet = ()


class PlanningSession:
    """Single-writer owner of the current batch.

    Every read and write takes the same lock, so the eviction scan and the
    placement of an overlay edit are observed together.
    """

    def __init__(
        self,
        *,
        consignment_threshold: Optional[int] = None,
        trollies_per_section: Optional[int] = None,
        **planner_options,
    ) -> None:
        self._lock = threading.Lock()
        self._consignment_threshold = consignment_threshold
        self._trollies_per_section = trollies_per_section
        self._planner_options = planner_options
        self._snapshot = PlanSnapshot()

    def ingest(self, rows: Iterable[Mapping[str, object]]) -> PlanSnapshot:
        """Replace all state with a plan built from ``rows``."""
        kept = filter_consignment_rows(rows)
        extraction = enrich_and_extract(
            kept,
            trollies_per_section=self._trollies_per_section,
            consignment_threshold=self._consignment_threshold,
        )
        plan = build_consolidation_plan(extraction.sections_by_shipment, **self._planner_options)
        needed = routes_needed(extraction.summaries, threshold=self._consignment_threshold)
        snapshot = PlanSnapshot(
            summaries=extraction.summaries,
            sections_by_shipment=extraction.sections_by_shipment,
            plan=plan,
            routes_needed=needed,
            routes=assignment.new_route_set(needed),
        )
        with self._lock:
            self._snapshot = snapshot
        logging.info(
            f"Ingested batch: {len(kept)} rows, {len(plan.moves)} suggested moves, {needed} routes needed"
        )
        return snapshot

    def snapshot(self) -> PlanSnapshot:
        with self._lock:
            return self._snapshot

    def clear(self) -> None:
        with self._lock:
            self._snapshot = PlanSnapshot()

    def place(self, route_id: int, sub_route_id: int, ref: SectionRef, role: str) -> PlanSnapshot:
        """Drop ``ref`` into the from-slot or the to-list of a sub-route."""
        if role == "from":
            transition = assignment.place_as_from
        elif role == "to":
            transition = assignment.place_as_to
        else:
            raise ValueError(f"Unknown slot role '{role}'. Expected 'from' or 'to'.")
        with self._lock:
            try:
                routes = transition(self._snapshot.routes, route_id, sub_route_id, ref)
            except assignment.InvalidReferenceError as exc:
                logging.warning(f"Rejected placement of {ref.consignment_id}/{ref.type}: {exc}")
                raise
            self._snapshot = replace(self._snapshot, routes=routes)
            return self._snapshot

    def remove(self, route_id: int, sub_route_id: int, ref: SectionRef, role: str) -> PlanSnapshot:
        with self._lock:
            try:
                routes = assignment.remove(self._snapshot.routes, route_id, sub_route_id, ref, role)
            except assignment.InvalidReferenceError as exc:
                logging.warning(f"Rejected removal of {ref.consignment_id}/{ref.type}: {exc}")
                raise
            self._snapshot = replace(self._snapshot, routes=routes)
            return self._snapshot

    def section_status(
        self,
        thresholds: Optional[tuple[int, int]] = None,
        snapshot: Optional[PlanSnapshot] = None,
    ) -> List[dict]:
        """Per consignment totals with overlay usage and load colour, for rendering.

        Pass ``snapshot`` to render a state already read from :meth:`snapshot`.
        """
        snapshot = snapshot or self.snapshot()
        statuses: List[dict] = []
        for summary in snapshot.summaries:
            entry: dict = {
                "shipment": summary.shipment,
                "consignment": summary.consignment,
                "ambient_trollies": summary.ambient_trollies,
                "chill_trollies": summary.chill_trollies,
            }
            for section_type in SECTION_TYPES:
                totes = summary.totes_for(section_type)
                entry[f"{section_type}_totes"] = totes
                entry[f"{section_type}_used"] = assignment.is_used(snapshot.routes, summary.consignment, section_type)
                entry[f"{section_type}_status"] = load_status(totes, thresholds)
            statuses.append(entry)
        return statuses
