"""Estimate how many consolidation routes a batch needs."""

from __future__ import annotations

from typing import Iterable, Optional

from ..config import settings
from ..models.domain import ConsignmentSummary


def routes_needed(summaries: Iterable[ConsignmentSummary], *, threshold: Optional[int] = None) -> int:
    """One route per distinct consignment beyond the dispatch threshold."""
    threshold = settings.consignment_threshold if threshold is None else threshold
    distinct = {summary.consignment for summary in summaries}
    return max(0, len(distinct) - threshold)
