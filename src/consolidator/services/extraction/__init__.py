"""Row enrichment and section extraction."""

from .service import (
    ExtractionResult,
    allocate_trollies,
    enrich_and_extract,
    load_status,
    parse_tote_quantity,
)

__all__ = [
    "ExtractionResult",
    "allocate_trollies",
    "enrich_and_extract",
    "load_status",
    "parse_tote_quantity",
]
