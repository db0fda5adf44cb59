"""Utilities to serialize consolidation plans into CSV artifacts."""

from __future__ import annotations

import csv
import io
from dataclasses import asdict
from typing import Sequence

from ...models.domain import MoveSuggestion

SUGGESTION_FIELDS = [
    "shipment",
    "type",
    "from_consignment",
    "to_consignment",
    "from_totes",
    "to_totes_before",
    "to_totes_after",
    "from_section_id",
    "to_section_id",
]


def suggestions_to_csv(moves: Sequence[MoveSuggestion]) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=SUGGESTION_FIELDS)
    writer.writeheader()
    for move in moves:
        writer.writerow(asdict(move))
    return buffer.getvalue()


def summaries_to_csv(statuses: Sequence[dict]) -> str:
    """Write section status rows (see ``PlanningSession.section_status``)."""
    buffer = io.StringIO()
    fieldnames = list(statuses[0].keys()) if statuses else ["shipment", "consignment"]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for entry in statuses:
        writer.writerow(entry)
    return buffer.getvalue()
