"""Domain models for consignment sections, merge moves and the route overlay."""

from dataclasses import dataclass, field
from typing import Literal, Optional

SectionType = Literal["ambient", "chill"]
SlotRole = Literal["from", "to"]

SECTION_TYPES: tuple[SectionType, ...] = ("ambient", "chill")


@dataclass(frozen=True, slots=True)
class ConsignmentSummary:
    """Tote totals of one consignment within one shipment."""

    shipment: str
    consignment: str
    ambient_totes: int = 0
    chill_totes: int = 0
    ambient_trollies: int = 0
    chill_trollies: int = 0

    @property
    def id(self) -> str:
        return f"{self.shipment}::{self.consignment}"

    def totes_for(self, section_type: SectionType) -> int:
        return self.ambient_totes if section_type == "ambient" else self.chill_totes


@dataclass(frozen=True, slots=True)
class Section:
    """The smallest plannable unit: a consignment's totes of one type in one shipment."""

    section_id: str
    shipment: str
    consignment: str
    type: SectionType
    totes: int


@dataclass(frozen=True, slots=True)
class MoveSuggestion:
    """Fully absorb the totes of the ``from`` section into the ``to`` section."""

    shipment: str
    type: SectionType
    from_consignment: str
    to_consignment: str
    from_totes: int
    to_totes_before: int
    to_totes_after: int
    from_section_id: Optional[str] = None
    to_section_id: Optional[str] = None


@dataclass(frozen=True, slots=True)
class SectionRef:
    """Reference to a section placed in the route overlay.

    Identity is the (consignment, type) pair; ``totes`` is a display snapshot.
    """

    consignment_id: str
    type: SectionType
    totes: Optional[int] = field(default=None, compare=False)

    @property
    def key(self) -> tuple[str, str]:
        return (self.consignment_id, self.type)

    def matches(self, consignment_id: str, section_type: str) -> bool:
        return self.consignment_id == consignment_id and self.type == section_type


@dataclass(frozen=True, slots=True)
class SubRoute:
    id: int
    from_ref: Optional[SectionRef] = None
    tos: tuple[SectionRef, ...] = ()


@dataclass(frozen=True, slots=True)
class Route:
    id: int
    sub_routes: tuple[SubRoute, ...]
