import pytest

from consolidator.services.extraction import (
    allocate_trollies,
    enrich_and_extract,
    load_status,
    parse_tote_quantity,
)


def _row(shipment: str, cons: str, ambient: str = "", chilled: str = "", freezer: str = "") -> dict:
    return {
        "Shipment": shipment,
        "Consignment": cons,
        "Completed Totes - Ambient": ambient,
        "Completed Totes - Chilled": chilled,
        "Completed Totes - Freezer": freezer,
    }


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("5/30", 30),
        ("12", 12),
        (" 7 ", 7),
        ("0/0", 0),
        ("", 0),
        (None, 0),
        ("abc", 0),
        ("3/x", 0),
        ("-4", 0),
        (18, 18),
        ("30.0", 30),
        (30.0, 30),
        ("5/30.0", 30),
        ("12.7", 12),
        ("1_0", 0),
        ("1e3", 0),
        ("+5", 0),
    ],
)
def test_parse_tote_quantity(value, expected):
    assert parse_tote_quantity(value) == expected


def test_rows_are_aggregated_per_consignment_and_type():
    rows = [
        _row("S1", "C1", ambient="0/10", chilled="2/4", freezer="1"),
        _row("S1", "C1", ambient="3/5", freezer="0/6"),
        _row("S1", "C2", chilled="8"),
    ]

    result = enrich_and_extract(rows)

    assert [(s.shipment, s.consignment, s.ambient_totes, s.chill_totes) for s in result.summaries] == [
        ("S1", "C1", 15, 11),
        ("S1", "C2", 0, 8),
    ]
    sections = result.sections_by_shipment["S1"]
    assert [(s.consignment, s.type, s.totes) for s in sections] == [
        ("C1", "ambient", 15),
        ("C1", "chill", 11),
        ("C2", "chill", 8),
    ]
    assert [s.section_id for s in sections] == ["C1_amb_0", "C1_chi_0", "C2_chi_2"]


def test_zero_tote_sections_are_never_materialized():
    rows = [_row("S1", "C1", ambient="0/0", chilled="n/a"), _row("S1", "C2", ambient="4")]

    result = enrich_and_extract(rows)

    assert len(result.summaries) == 2
    sections = [s for group in result.sections_by_shipment.values() for s in group]
    assert all(s.totes > 0 for s in sections)
    assert [(s.consignment, s.type) for s in sections] == [("C2", "ambient")]


def test_same_consignment_in_two_shipments_stays_separate():
    rows = [_row("S1", "C1", ambient="5"), _row("S2", "C1", ambient="7")]

    result = enrich_and_extract(rows)

    assert {summary.id for summary in result.summaries} == {"S1::C1", "S2::C1"}
    assert result.sections_by_shipment["S1"][0].totes == 5
    assert result.sections_by_shipment["S2"][0].totes == 7
    assert result.section_count == 2


def test_missing_columns_degrade_to_zero():
    result = enrich_and_extract([{"Shipment": "S1", "Consignment": "C1"}])

    assert result.summaries[0].ambient_totes == 0
    assert result.summaries[0].chill_totes == 0
    assert result.sections_by_shipment == {"S1": []}


@pytest.mark.parametrize(
    ("count", "expected"),
    [(1, 2), (9, 2), (10, 2), (12, 2), (20, 1), (40, 0)],
)
def test_allocate_trollies_scales_beyond_threshold(count, expected):
    assert allocate_trollies(count, per_section=2, threshold=9) == expected


def test_summaries_carry_trolley_allocation():
    rows = [_row("S1", f"C{idx}", ambient="3") for idx in range(20)] + [_row("S2", "D1", ambient="3")]

    result = enrich_and_extract(rows, trollies_per_section=2, consignment_threshold=9)

    by_shipment = {s.shipment: s for s in result.summaries}
    assert by_shipment["S1"].ambient_trollies == 1
    assert by_shipment["S1"].chill_trollies == 1
    assert by_shipment["S2"].ambient_trollies == 2


@pytest.mark.parametrize(("totes", "expected"), [(0, "green"), (19, "green"), (20, "orange"), (29, "orange"), (30, "red"), (40, "red")])
def test_load_status(totes, expected):
    assert load_status(totes, (20, 30)) == expected
