"""Turn raw shipment rows into consignment summaries and plannable sections."""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ...config import settings
from ...data.rows_repository import (
    AMBIENT_COLUMN,
    CHILLED_COLUMN,
    CONSIGNMENT_COLUMN,
    FREEZER_COLUMN,
    SHIPMENT_COLUMN,
)
from ...models.domain import ConsignmentSummary, Section, SectionType

_TYPE_SUFFIX: dict[SectionType, str] = {"ambient": "amb", "chill": "chi"}
_QUANTITY_PATTERN = re.compile(r"[0-9]+(?:\.[0-9]+)?")


@dataclass(slots=True)
class ExtractionResult:
    summaries: List[ConsignmentSummary]
    sections_by_shipment: Dict[str, List[Section]] = field(default_factory=dict)

    @property
    def section_count(self) -> int:
        return sum(len(sections) for sections in self.sections_by_shipment.values())


def parse_tote_quantity(value: object) -> int:
    """Return the completed quantity of a tote field.

    ``"5/30"`` yields 30 (the denominator), ``"12"`` yields 12, a decimal such
    as ``"30.0"`` is truncated to 30, anything else yields 0.
    """
    if value is None:
        return 0
    parts = str(value).split("/")
    candidate = (parts[1] if len(parts) > 1 else parts[0]).strip()
    if not _QUANTITY_PATTERN.fullmatch(candidate):
        return 0
    return int(float(candidate))


def load_status(totes: int, thresholds: Optional[Tuple[int, int]] = None) -> str:
    """Traffic-light colour for a section's fill level."""
    orange_at, red_at = thresholds or settings.load_status_thresholds
    if totes < orange_at:
        return "green"
    if totes < red_at:
        return "orange"
    return "red"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def allocate_trollies(
    consignment_count: int,
    *,
    per_section: Optional[int] = None,
    threshold: Optional[int] = None,
) -> int:
    """Trollies each section of a shipment gets once its consignments share the threshold."""
    per_section = settings.trollies_per_section if per_section is None else per_section
    threshold = settings.consignment_threshold if threshold is None else threshold
    if consignment_count <= threshold:
        return per_section
    scale = threshold / consignment_count
    return max(0, _round_half_up(per_section * scale))


def _row_value(row: Mapping[str, object], column: str) -> str:
    value = row.get(column)
    return "" if value is None else str(value).strip()


def enrich_and_extract(
    rows: Iterable[Mapping[str, object]],
    *,
    trollies_per_section: Optional[int] = None,
    consignment_threshold: Optional[int] = None,
) -> ExtractionResult:
    """Aggregate rows per (shipment, consignment) and per section type.

    Sections are pre-aggregated across rows so the planner only ever sees one
    section per (shipment, consignment, type); zero-tote sections are never
    materialized.
    """
    totals: Dict[Tuple[str, str], List[int]] = {}
    section_totes: Dict[Tuple[str, str, SectionType], int] = {}
    section_ids: Dict[Tuple[str, str, SectionType], str] = {}
    shipment_order: List[str] = []
    row_count = 0

    for idx, row in enumerate(rows):
        row_count += 1
        shipment = _row_value(row, SHIPMENT_COLUMN)
        consignment = _row_value(row, CONSIGNMENT_COLUMN)
        ambient = parse_tote_quantity(row.get(AMBIENT_COLUMN))
        chill = parse_tote_quantity(row.get(CHILLED_COLUMN)) + parse_tote_quantity(row.get(FREEZER_COLUMN))

        key = (shipment, consignment)
        if key not in totals:
            totals[key] = [0, 0]
        totals[key][0] += ambient
        totals[key][1] += chill
        if shipment not in shipment_order:
            shipment_order.append(shipment)

        for section_type, totes in (("ambient", ambient), ("chill", chill)):
            if totes <= 0:
                continue
            section_key = (shipment, consignment, section_type)
            if section_key not in section_totes:
                section_totes[section_key] = 0
                section_ids[section_key] = f"{consignment}_{_TYPE_SUFFIX[section_type]}_{idx}"
            section_totes[section_key] += totes

    sections_by_shipment: Dict[str, List[Section]] = {shipment: [] for shipment in shipment_order}
    for (shipment, consignment, section_type), totes in section_totes.items():
        sections_by_shipment[shipment].append(
            Section(
                section_id=section_ids[(shipment, consignment, section_type)],
                shipment=shipment,
                consignment=consignment,
                type=section_type,
                totes=totes,
            )
        )

    summaries = [
        ConsignmentSummary(
            shipment=shipment,
            consignment=consignment,
            ambient_totes=ambient,
            chill_totes=chill,
        )
        for (shipment, consignment), (ambient, chill) in totals.items()
    ]
    summaries = _with_trollies(
        summaries,
        per_section=trollies_per_section,
        threshold=consignment_threshold,
    )

    result = ExtractionResult(summaries=summaries, sections_by_shipment=sections_by_shipment)
    logging.info(
        f"Extracted {len(summaries)} consignments and {result.section_count} sections "
        f"across {len(shipment_order)} shipments from {row_count} rows"
    )
    return result


def _with_trollies(
    summaries: Sequence[ConsignmentSummary],
    *,
    per_section: Optional[int],
    threshold: Optional[int],
) -> List[ConsignmentSummary]:
    per_shipment: Dict[str, int] = {}
    for summary in summaries:
        per_shipment[summary.shipment] = per_shipment.get(summary.shipment, 0) + 1

    enriched: List[ConsignmentSummary] = []
    for summary in summaries:
        trollies = allocate_trollies(
            per_shipment[summary.shipment],
            per_section=per_section,
            threshold=threshold,
        )
        enriched.append(replace(summary, ambient_trollies=trollies, chill_trollies=trollies))
    return enriched
