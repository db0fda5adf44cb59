"""API routes for consolidation plans and the route overlay."""

from __future__ import annotations

import logging
from pathlib import Path as FilePath

from fastapi import APIRouter, Body, File, HTTPException, Path, Request, UploadFile, status
from fastapi.responses import PlainTextResponse

from ...data.rows_repository import SUPPORTED_SUFFIXES, read_rows
from ...schemas.planning import (
    ConsignmentStatusModel,
    MoveSuggestionModel,
    PlanResponse,
    RouteModel,
    RowsRequest,
    SectionModel,
    SectionRefModel,
)
from ...services.assignment import InvalidReferenceError
from ...services.outputs.formatter import suggestions_to_csv, summaries_to_csv
from ...services.session import PlanningSession

router = APIRouter(prefix="/plans", tags=["plans"])

SLOT_PATH = "/current/routes/{route_id}/sub-routes/{sub_route_id}/{role}"


def _session(request: Request) -> PlanningSession:
    return request.app.state.planning_session


def _plan_response(session: PlanningSession) -> PlanResponse:
    snapshot = session.snapshot()
    return PlanResponse(
        consignments=[
            ConsignmentStatusModel(**entry) for entry in session.section_status(snapshot=snapshot)
        ],
        sections={
            shipment: [SectionModel.model_validate(section) for section in sections]
            for shipment, sections in snapshot.sections_by_shipment.items()
        },
        suggestions=[MoveSuggestionModel.model_validate(move) for move in snapshot.plan.moves],
        unmatched=[SectionModel.model_validate(section) for section in snapshot.plan.unmatched],
        routes_needed=snapshot.routes_needed,
        routes=[RouteModel.model_validate(route) for route in snapshot.routes],
        metadata={
            **snapshot.plan.metadata,
            "sections_before": snapshot.plan.sections_before,
            "sections_after": snapshot.plan.sections_after,
        },
    )


@router.post("/upload", response_model=PlanResponse, status_code=status.HTTP_200_OK)
async def upload_plan_file(request: Request, file: UploadFile = File(...)) -> PlanResponse:
    """Ingest a CSV/Excel shipment export; replaces the current plan."""
    if not file.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Filename is required.")

    suffix = FilePath(file.filename).suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail="Only .csv and .xlsx files are supported.",
        )

    try:
        rows = read_rows(await file.read(), suffix)
    except (ValueError, UnicodeDecodeError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    session = _session(request)
    session.ingest(rows)
    logging.info(f"Plan rebuilt from upload '{file.filename}'")
    return _plan_response(session)


@router.post("/rows", response_model=PlanResponse, status_code=status.HTTP_200_OK)
def ingest_rows(request: Request, payload: RowsRequest) -> PlanResponse:
    session = _session(request)
    session.ingest(payload.rows)
    return _plan_response(session)


@router.get("/current", response_model=PlanResponse, status_code=status.HTTP_200_OK)
def get_current_plan(request: Request) -> PlanResponse:
    return _plan_response(_session(request))


@router.delete("/current", status_code=status.HTTP_204_NO_CONTENT)
def clear_current_plan(request: Request) -> None:
    _session(request).clear()


@router.get("/current/suggestions.csv", response_class=PlainTextResponse)
def download_suggestions(request: Request) -> PlainTextResponse:
    moves = _session(request).snapshot().plan.moves
    return PlainTextResponse(
        suggestions_to_csv(moves),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="suggestions.csv"'},
    )


@router.get("/current/consignments.csv", response_class=PlainTextResponse)
def download_consignments(request: Request) -> PlainTextResponse:
    statuses = _session(request).section_status()
    return PlainTextResponse(
        summaries_to_csv(statuses),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="consignments.csv"'},
    )


def _check_role(role: str) -> None:
    if role not in {"from", "to"}:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown slot role '{role}'. Expected 'from' or 'to'.",
        )


@router.post(SLOT_PATH, response_model=PlanResponse, status_code=status.HTTP_200_OK)
def place_section(
    request: Request,
    route_id: int = Path(..., ge=1),
    sub_route_id: int = Path(..., ge=1),
    role: str = Path(..., description="'from' or 'to'"),
    ref: SectionRefModel = Body(...),
) -> PlanResponse:
    """Place a section into a slot, evicting it from wherever it was."""
    _check_role(role)
    session = _session(request)
    try:
        session.place(route_id, sub_route_id, ref.to_domain(), role)
    except InvalidReferenceError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return _plan_response(session)


@router.delete(SLOT_PATH, response_model=PlanResponse, status_code=status.HTTP_200_OK)
def remove_section(
    request: Request,
    route_id: int = Path(..., ge=1),
    sub_route_id: int = Path(..., ge=1),
    role: str = Path(..., description="'from' or 'to'"),
    ref: SectionRefModel = Body(...),
) -> PlanResponse:
    _check_role(role)
    session = _session(request)
    try:
        session.remove(route_id, sub_route_id, ref.to_domain(), role)
    except InvalidReferenceError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return _plan_response(session)
