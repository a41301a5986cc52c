# (c) Copyright Datacraft, 2026
"""Tests for document detail extraction."""
import pytest

from sharereports.core.client import FetchedDocument, MalformedResourceError
from sharereports.core.features.shares.details import copy_source_of, extract_document
from sharereports.core.types import DocType


def coi_body():
    return {
        "_id": "resources/c1",
        "certificate": {"file_name": "coi.pdf"},
        "holder": {"name": "Holder Inc"},
        "producer": {"name": "Producer LLC"},
        "insured": {"name": "Insured Farms"},
        "policies": {
            "gl": {"expire_date": "2026-06-30T00:00:00Z"},
            "auto": {"expire_date": "2026-03-15"},
            "umbrella": {"expire_date": "2027-01-01"},
        },
    }


def test_coi_uses_earliest_policy_expiration():
    fetched = FetchedDocument(
        id="resources/c1",
        body=coi_body(),
        meta={"stats": {"created": 1_760_000_000}},
    )

    document = extract_document(fetched, DocType.COI)

    assert document.coi_expiration == "03/15/2026"
    assert document.name == "coi.pdf"
    assert document.holder == "Holder Inc"
    assert document.upload_date == "10/09/2025"
    assert document.copy_source_id is None
    assert document.audit_score == ""


def test_audit_details():
    fetched = FetchedDocument(
        id="resources/a1",
        body={
            "scheme": {"name": "SQF"},
            "organization": {"name": "Good Foods"},
            "certificate_validity_period": {"end": "3/1/2027"},
            "score": {"final": {"value": 92, "units": "%"}},
        },
        meta={"stats": {"created": 1_760_000_000}, "copy": {"src": {"_ref": "resources/a0"}}},
    )

    document = extract_document(fetched, DocType.AUDIT)

    assert document.name == "SQF Audit - Good Foods"
    assert document.audit_expiration == "03/01/2027"
    assert document.audit_score == "92 %"
    assert document.copy_source_id == "resources/a0"
    assert document.canonical_id == "resources/a0"
    assert document.holder == ""


def test_missing_fields_raise_malformed():
    body = coi_body()
    del body["policies"]
    fetched = FetchedDocument(id="resources/c1", body=body, meta={"stats": {"created": 1}})

    with pytest.raises(MalformedResourceError):
        extract_document(fetched, DocType.COI)


def test_missing_meta_raises_malformed():
    fetched = FetchedDocument(id="resources/c1", body=coi_body(), meta={})

    with pytest.raises(MalformedResourceError):
        extract_document(fetched, DocType.COI)


@pytest.mark.parametrize("created", [10**20, "not a time", None, {"seconds": 1}])
def test_unusable_upload_time_raises_malformed(created):
    fetched = FetchedDocument(id="resources/c1", body=coi_body(), meta={"stats": {"created": created}})

    with pytest.raises(MalformedResourceError):
        extract_document(fetched, DocType.COI)


def test_non_object_fields_raise_malformed():
    body = coi_body()
    body["policies"] = ["not-a-policy"]
    fetched = FetchedDocument(id="resources/c1", body=body, meta={"stats": {"created": 1}})

    with pytest.raises(MalformedResourceError):
        extract_document(fetched, DocType.COI)


def test_copy_source_absent():
    assert copy_source_of({}) is None
    assert copy_source_of({"copy": {"src": {}}}) is None
