"""Pydantic request/response models for consolidation planning endpoints."""

from __future__ import annotations

from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ..models.domain import SectionRef


class SectionRefModel(BaseModel):
    consignment_id: str = Field(..., min_length=1, description="Consignment code of the section.")
    type: Literal["ambient", "chill"]
    totes: Optional[int] = Field(default=None, ge=0, description="Tote snapshot shown with the slot.")

    model_config = ConfigDict(from_attributes=True)

    def to_domain(self) -> SectionRef:
        return SectionRef(consignment_id=self.consignment_id, type=self.type, totes=self.totes)


class RowsRequest(BaseModel):
    rows: List[Dict[str, Union[str, int, float, None]]] = Field(
        ..., description="Shipment rows keyed by column header."
    )


class SectionModel(BaseModel):
    section_id: str
    shipment: str
    consignment: str
    type: Literal["ambient", "chill"]
    totes: int

    model_config = ConfigDict(from_attributes=True)


class MoveSuggestionModel(BaseModel):
    shipment: str
    type: Literal["ambient", "chill"]
    from_consignment: str
    to_consignment: str
    from_totes: int
    to_totes_before: int
    to_totes_after: int
    from_section_id: Optional[str] = None
    to_section_id: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class SubRouteModel(BaseModel):
    id: int
    from_ref: Optional[SectionRefModel] = None
    tos: List[SectionRefModel] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class RouteModel(BaseModel):
    id: int
    sub_routes: List[SubRouteModel]

    model_config = ConfigDict(from_attributes=True)


class ConsignmentStatusModel(BaseModel):
    shipment: str
    consignment: str
    ambient_totes: int
    chill_totes: int
    ambient_trollies: int
    chill_trollies: int
    ambient_used: bool
    chill_used: bool
    ambient_status: Literal["green", "orange", "red"]
    chill_status: Literal["green", "orange", "red"]


class PlanResponse(BaseModel):
    consignments: List[ConsignmentStatusModel]
    sections: Dict[str, List[SectionModel]]
    suggestions: List[MoveSuggestionModel]
    unmatched: List[SectionModel]
    routes_needed: int
    routes: List[RouteModel]
    metadata: dict
