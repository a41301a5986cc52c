# (c) Copyright Datacraft, 2026
"""Tests for duplicate detection and canonical ordering."""
from sharereports.core.features.reports import (
    DiffGate,
    Report,
    canonical_sort,
    is_duplicate,
    make_row,
)
from sharereports.core.types import ReportKind

ACCESS = ReportKind.USER_ACCESS


def access_row(masterid, doc_id, **extra):
    return make_row(ACCESS, {
        "trading partner masterid": masterid,
        "trading partner name": masterid.upper(),
        "document id": doc_id,
        **extra,
    })


def test_order_does_not_matter():
    rows = [access_row("m-b", "d1"), access_row("m-a", "d2"), access_row("m-a", "d1")]

    assert is_duplicate(rows, list(reversed(rows)), ACCESS)


def test_one_field_difference_is_not_duplicate():
    prev = [access_row("m-a", "d1"), access_row("m-b", "")]
    nxt = [access_row("m-a", "d1", **{"coi holder": "Someone Else"}), access_row("m-b", "")]

    assert not is_duplicate(prev, nxt, ACCESS)


def test_different_lengths():
    assert not is_duplicate([access_row("m-a", "d1")], [], ACCESS)


def test_rows_equal_on_key_still_compared_fully():
    prev = [access_row("m-a", "d1", **{"upload date": "01/01/2026"}),
            access_row("m-a", "d1", **{"upload date": "02/01/2026"})]
    nxt = list(reversed(prev))

    assert is_duplicate(prev, nxt, ACCESS)


def test_canonical_sort_user_access():
    rows = [access_row("m-b", "d1"), access_row("m-a", "d2"), access_row("m-a", "d1")]

    ordered = canonical_sort(ACCESS, rows)

    assert [(r["trading partner masterid"], r["document id"]) for r in ordered] == [
        ("m-a", "d1"), ("m-a", "d2"), ("m-b", "d1"),
    ]


def test_canonical_sort_document_shares():
    kind = ReportKind.DOCUMENT_SHARES
    rows = [
        make_row(kind, {"document id": "d2", "trading partner masterid": "m-a"}),
        make_row(kind, {"document id": "d1", "trading partner masterid": "m-b"}),
        make_row(kind, {"document id": "d1", "trading partner masterid": ""}),
    ]

    ordered = canonical_sort(kind, rows)

    assert [(r["document id"], r["trading partner masterid"]) for r in ordered] == [
        ("d1", ""), ("d1", "m-b"), ("d2", "m-a"),
    ]


def test_canonical_sort_event_log_by_time():
    kind = ReportKind.EVENT_LOG
    rows = [
        make_row(kind, {"event time": "awaiting approval", "trading partner masterid": "m-a"}),
        make_row(kind, {"event time": "10/17/2026 14:05", "trading partner masterid": "m-b"}),
        make_row(kind, {"event time": "10/17/2026 09:00", "trading partner masterid": "m-c"}),
        make_row(kind, {"event time": "09/30/2026 23:59", "trading partner masterid": "m-d"}),
    ]

    ordered = canonical_sort(kind, rows)

    assert [r["trading partner masterid"] for r in ordered] == ["m-d", "m-c", "m-b", "m-a"]


def test_gate_suppresses_empty_report():
    assert DiffGate().admit(Report(kind=ACCESS, rows=[]), None) is None
    assert DiffGate().admit(Report(kind=ACCESS, rows=[]), [access_row("m-a", "d1")]) is None


def test_gate_suppresses_duplicate():
    rows = [access_row("m-a", "d1"), access_row("m-b", "")]

    assert DiffGate().admit(Report(kind=ACCESS, rows=rows), list(reversed(rows))) is None


def test_gate_publishes_without_previous():
    rows = [access_row("m-b", ""), access_row("m-a", "d1")]

    admitted = DiffGate().admit(Report(kind=ACCESS, rows=rows, statistics={"totalShares": 1}), None)

    assert admitted is not None
    assert [r["trading partner masterid"] for r in admitted.rows] == ["m-a", "m-b"]
    assert admitted.statistics == {"totalShares": 1}


def test_gate_publishes_changed_report():
    prev = [access_row("m-a", "d1")]
    rows = [access_row("m-a", "d1"), access_row("m-a", "d2")]

    assert DiffGate().admit(Report(kind=ACCESS, rows=rows), prev) is not None
