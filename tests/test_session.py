import pytest

from consolidator.models.domain import SectionRef
from consolidator.services.assignment import InvalidReferenceError
from consolidator.services.session import PlanningSession


def _rows(count: int, shipment: str = "S1", ambient: str = "0/10") -> list[dict]:
    return [
        {
            "Shipment": shipment,
            "Consignment": f"C{idx}",
            "Completed Totes - Ambient": ambient,
            "Completed Totes - Chilled": "",
            "Completed Totes - Freezer": "",
        }
        for idx in range(count)
    ]


@pytest.fixture
def session() -> PlanningSession:
    return PlanningSession(capacity=40, selection="first_fit", allow_chained_targets=True)


def test_ingest_builds_plan_and_empty_routes(session):
    snapshot = session.ingest(_rows(12) + [{"Shipment": "S1", "Consignment": ""}])

    assert len(snapshot.summaries) == 12
    assert snapshot.routes_needed == 3
    assert len(snapshot.routes) == 3
    assert all(sr.from_ref is None and not sr.tos for route in snapshot.routes for sr in route.sub_routes)
    assert snapshot.plan.moves
    assert all(move.to_totes_after <= 40 for move in snapshot.plan.moves)


def test_ingest_is_a_hard_reset(session):
    session.ingest(_rows(11))
    session.place(1, 1, SectionRef("C1", "ambient", 10), "from")

    snapshot = session.ingest(_rows(3, shipment="S9"))

    assert snapshot.routes == ()
    assert {summary.shipment for summary in snapshot.summaries} == {"S9"}
    assert session.snapshot() is snapshot


def test_place_and_remove_replace_the_snapshot(session):
    session.ingest(_rows(11))
    before = session.snapshot()

    after = session.place(1, 1, SectionRef("C1", "ambient", 10), "from")
    after = session.place(2, 2, SectionRef("C1", "ambient", 10), "to")

    assert before.routes[0].sub_routes[0].from_ref is None
    assert after.routes[0].sub_routes[0].from_ref is None
    assert after.routes[1].sub_routes[1].tos == (SectionRef("C1", "ambient"),)

    cleared = session.remove(2, 2, SectionRef("C1", "ambient"), "to")
    assert cleared.routes[1].sub_routes[1].tos == ()


def test_invalid_reference_leaves_state_untouched(session):
    session.ingest(_rows(10))
    session.place(1, 2, SectionRef("C3", "ambient"), "to")
    current = session.snapshot()

    with pytest.raises(InvalidReferenceError):
        session.place(4, 1, SectionRef("C3", "ambient"), "from")
    with pytest.raises(ValueError):
        session.place(1, 1, SectionRef("C3", "ambient"), "sideways")

    assert session.snapshot() is current


def test_section_status_reports_usage_and_colour(session):
    session.ingest(_rows(10, ambient="0/25"))
    session.place(1, 1, SectionRef("C0", "ambient", 25), "from")

    statuses = {entry["consignment"]: entry for entry in session.section_status((20, 30))}

    assert statuses["C0"]["ambient_used"] is True
    assert statuses["C1"]["ambient_used"] is False
    assert statuses["C0"]["ambient_status"] == "orange"
    assert statuses["C0"]["chill_totes"] == 0
    assert statuses["C0"]["chill_status"] == "green"


def test_threshold_override_reaches_estimator_and_trollies():
    session = PlanningSession(
        consignment_threshold=5,
        trollies_per_section=4,
        capacity=40,
        selection="first_fit",
    )

    snapshot = session.ingest(_rows(10))

    assert snapshot.routes_needed == 5
    assert len(snapshot.routes) == 5
    assert all(summary.ambient_trollies == 2 for summary in snapshot.summaries)


def test_clear_resets_everything(session):
    session.ingest(_rows(12))

    session.clear()

    snapshot = session.snapshot()
    assert snapshot.summaries == []
    assert snapshot.routes == ()
    assert snapshot.plan.moves == []
