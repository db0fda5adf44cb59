"""Manual route overlay: pure transitions over an immutable route set.

Every placement first evicts the section reference from all slots it
occupies, so a (consignment, type) pair is never in two slots at once.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Sequence

from ...models.domain import Route, SectionRef, SubRoute

RouteSet = tuple[Route, ...]

SUB_ROUTES_PER_ROUTE = 2


class InvalidReferenceError(LookupError):
    """Raised when a route or sub-route id does not exist in the route set."""

    def __init__(self, route_id: int, sub_route_id: int | None = None):
        self.route_id = route_id
        self.sub_route_id = sub_route_id
        if sub_route_id is None:
            message = f"Route {route_id} does not exist."
        else:
            message = f"Sub-route {sub_route_id} of route {route_id} does not exist."
        super().__init__(message)


def new_route_set(count: int) -> RouteSet:
    """Create ``count`` empty routes numbered from 1, each with two sub-routes."""
    return tuple(
        Route(
            id=route_id,
            sub_routes=tuple(SubRoute(id=sub_id) for sub_id in range(1, SUB_ROUTES_PER_ROUTE + 1)),
        )
        for route_id in range(1, max(0, count) + 1)
    )


def _check_reference(routes: Sequence[Route], route_id: int, sub_route_id: int) -> None:
    route = next((r for r in routes if r.id == route_id), None)
    if route is None:
        raise InvalidReferenceError(route_id)
    if not any(sr.id == sub_route_id for sr in route.sub_routes):
        raise InvalidReferenceError(route_id, sub_route_id)


def _update_sub_route(
    routes: Sequence[Route],
    route_id: int,
    sub_route_id: int,
    change: Callable[[SubRoute], SubRoute],
) -> RouteSet:
    updated: list[Route] = []
    for route in routes:
        if route.id != route_id:
            updated.append(route)
            continue
        sub_routes = tuple(change(sr) if sr.id == sub_route_id else sr for sr in route.sub_routes)
        updated.append(replace(route, sub_routes=sub_routes))
    return tuple(updated)


def remove_everywhere(routes: Sequence[Route], ref: SectionRef) -> RouteSet:
    """Clear ``ref`` from every from-slot and filter it out of every to-list."""
    cleaned: list[Route] = []
    for route in routes:
        sub_routes = tuple(
            SubRoute(
                id=sr.id,
                from_ref=None if sr.from_ref is not None and sr.from_ref.key == ref.key else sr.from_ref,
                tos=tuple(item for item in sr.tos if item.key != ref.key),
            )
            for sr in route.sub_routes
        )
        cleaned.append(replace(route, sub_routes=sub_routes))
    return tuple(cleaned)


def place_as_from(routes: Sequence[Route], route_id: int, sub_route_id: int, ref: SectionRef) -> RouteSet:
    """Make ``ref`` the from-section of a sub-route, replacing any prior occupant."""
    _check_reference(routes, route_id, sub_route_id)
    evicted = remove_everywhere(routes, ref)
    return _update_sub_route(evicted, route_id, sub_route_id, lambda sr: replace(sr, from_ref=ref))


def place_as_to(routes: Sequence[Route], route_id: int, sub_route_id: int, ref: SectionRef) -> RouteSet:
    """Append ``ref`` to the to-list of a sub-route."""
    _check_reference(routes, route_id, sub_route_id)
    evicted = remove_everywhere(routes, ref)
    return _update_sub_route(evicted, route_id, sub_route_id, lambda sr: replace(sr, tos=sr.tos + (ref,)))


def remove(
    routes: Sequence[Route],
    route_id: int,
    sub_route_id: int,
    ref: SectionRef,
    role: str,
) -> RouteSet:
    """Take ``ref`` out of one slot of one sub-route; other slots are untouched."""
    _check_reference(routes, route_id, sub_route_id)
    if role == "from":
        def change(sr: SubRoute) -> SubRoute:
            if sr.from_ref is not None and sr.from_ref.key == ref.key:
                return replace(sr, from_ref=None)
            return sr
    elif role == "to":
        def change(sr: SubRoute) -> SubRoute:
            return replace(sr, tos=tuple(item for item in sr.tos if item.key != ref.key))
    else:
        raise ValueError(f"Unknown slot role '{role}'. Expected 'from' or 'to'.")
    return _update_sub_route(routes, route_id, sub_route_id, change)


def slot_count(routes: Sequence[Route], consignment_id: str, section_type: str) -> int:
    count = 0
    for route in routes:
        for sr in route.sub_routes:
            if sr.from_ref is not None and sr.from_ref.matches(consignment_id, section_type):
                count += 1
            count += sum(1 for item in sr.tos if item.matches(consignment_id, section_type))
    return count


def is_used(routes: Sequence[Route], consignment_id: str, section_type: str) -> bool:
    return slot_count(routes, consignment_id, section_type) > 0
