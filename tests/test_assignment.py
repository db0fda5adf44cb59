import random

import pytest

from consolidator.models.domain import SectionRef
from consolidator.services.assignment import (
    InvalidReferenceError,
    is_used,
    new_route_set,
    place_as_from,
    place_as_to,
    remove,
    remove_everywhere,
    slot_count,
)


def _ref(cons: str, section_type: str = "ambient", totes: int | None = None) -> SectionRef:
    return SectionRef(consignment_id=cons, type=section_type, totes=totes)


def _sub_route(routes, route_id: int, sub_route_id: int):
    route = next(r for r in routes if r.id == route_id)
    return next(sr for sr in route.sub_routes if sr.id == sub_route_id)


def test_new_route_set_creates_empty_sub_routes():
    routes = new_route_set(3)

    assert [route.id for route in routes] == [1, 2, 3]
    sub_routes = [sr for route in routes for sr in route.sub_routes]
    assert len(sub_routes) == 6
    assert all(sr.from_ref is None and sr.tos == () for sr in sub_routes)
    assert [sr.id for sr in routes[0].sub_routes] == [1, 2]


def test_new_route_set_with_no_routes():
    assert new_route_set(0) == ()
    assert new_route_set(-2) == ()


def test_moving_from_slot_to_another_sub_route_evicts_it():
    routes = new_route_set(1)

    routes = place_as_from(routes, 1, 1, _ref("C1"))
    routes = place_as_to(routes, 1, 2, _ref("C1"))

    assert _sub_route(routes, 1, 1).from_ref is None
    assert _sub_route(routes, 1, 2).tos == (_ref("C1"),)
    assert slot_count(routes, "C1", "ambient") == 1


def test_place_as_from_overwrites_prior_occupant():
    routes = place_as_from(new_route_set(1), 1, 1, _ref("C1"))

    routes = place_as_from(routes, 1, 1, _ref("C2"))

    assert _sub_route(routes, 1, 1).from_ref == _ref("C2")
    assert not is_used(routes, "C1", "ambient")


def test_place_as_from_is_idempotent():
    once = place_as_from(new_route_set(2), 2, 1, _ref("C1", totes=12))
    twice = place_as_from(once, 2, 1, _ref("C1", totes=12))

    assert once == twice


def test_to_list_keeps_insertion_order_and_moves_between_lists():
    routes = new_route_set(2)
    routes = place_as_to(routes, 1, 1, _ref("C1"))
    routes = place_as_to(routes, 1, 1, _ref("C2"))
    routes = place_as_to(routes, 2, 2, _ref("C1"))

    assert _sub_route(routes, 1, 1).tos == (_ref("C2"),)
    assert _sub_route(routes, 2, 2).tos == (_ref("C1"),)


def test_types_are_distinct_references():
    routes = new_route_set(1)
    routes = place_as_from(routes, 1, 1, _ref("C1", "ambient"))
    routes = place_as_to(routes, 1, 1, _ref("C1", "chill"))

    assert is_used(routes, "C1", "ambient")
    assert is_used(routes, "C1", "chill")
    assert _sub_route(routes, 1, 1).from_ref == _ref("C1", "ambient")


def test_remove_from_only_clears_matching_occupant():
    routes = place_as_from(new_route_set(1), 1, 1, _ref("C1"))

    unchanged = remove(routes, 1, 1, _ref("C2"), "from")
    cleared = remove(routes, 1, 1, _ref("C1"), "from")

    assert _sub_route(unchanged, 1, 1).from_ref == _ref("C1")
    assert _sub_route(cleared, 1, 1).from_ref is None


def test_remove_to_filters_the_list():
    routes = new_route_set(1)
    routes = place_as_to(routes, 1, 2, _ref("C1"))
    routes = place_as_to(routes, 1, 2, _ref("C2"))

    routes = remove(routes, 1, 2, _ref("C1"), "to")

    assert _sub_route(routes, 1, 2).tos == (_ref("C2"),)
    assert not is_used(routes, "C1", "ambient")


def test_remove_only_touches_the_named_sub_route():
    routes = place_as_to(new_route_set(1), 1, 2, _ref("C1"))

    routes = remove(routes, 1, 1, _ref("C1"), "to")

    assert is_used(routes, "C1", "ambient")


def test_remove_everywhere_clears_all_slots():
    routes = place_as_from(new_route_set(2), 1, 1, _ref("C1"))

    cleared = remove_everywhere(routes, _ref("C1"))

    assert not is_used(cleared, "C1", "ambient")


def test_unknown_ids_raise_without_touching_state():
    routes = place_as_from(new_route_set(1), 1, 1, _ref("C1"))

    with pytest.raises(InvalidReferenceError):
        place_as_to(routes, 2, 1, _ref("C1"))
    with pytest.raises(InvalidReferenceError):
        place_as_from(routes, 1, 3, _ref("C1"))
    with pytest.raises(InvalidReferenceError):
        remove(routes, 5, 1, _ref("C1"), "from")

    assert _sub_route(routes, 1, 1).from_ref == _ref("C1")


def test_unknown_role_is_rejected():
    with pytest.raises(ValueError):
        remove(new_route_set(1), 1, 1, _ref("C1"), "middle")


def test_single_occupancy_holds_after_random_placements():
    rng = random.Random(7)
    routes = new_route_set(3)
    refs = [_ref(f"C{idx}", section_type) for idx in range(6) for section_type in ("ambient", "chill")]

    for _ in range(300):
        ref = rng.choice(refs)
        route_id = rng.randint(1, 3)
        sub_route_id = rng.randint(1, 2)
        action = rng.choice((place_as_from, place_as_to))
        routes = action(routes, route_id, sub_route_id, ref)
        for candidate in refs:
            assert slot_count(routes, candidate.consignment_id, candidate.type) <= 1

    assert any(is_used(routes, ref.consignment_id, ref.type) for ref in refs)
