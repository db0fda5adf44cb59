"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request, status

from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root(request: Request) -> dict:
    """Simple health check reporting the planner configuration in use."""
    snapshot = request.app.state.planning_session.snapshot()
    return {
        "status": "ok",
        "section_capacity": settings.section_capacity,
        "target_selection": settings.target_selection,
        "loaded_consignments": len(snapshot.summaries),
    }
