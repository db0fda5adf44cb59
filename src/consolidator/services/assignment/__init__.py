"""Route assignment overlay."""

from .service import (
    InvalidReferenceError,
    RouteSet,
    is_used,
    new_route_set,
    place_as_from,
    place_as_to,
    remove,
    remove_everywhere,
    slot_count,
)

__all__ = [
    "InvalidReferenceError",
    "RouteSet",
    "is_used",
    "new_route_set",
    "place_as_from",
    "place_as_to",
    "remove",
    "remove_everywhere",
    "slot_count",
]
