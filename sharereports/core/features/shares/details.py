# (c) Copyright Datacraft, 2026
"""Extraction of report fields from fetched document bodies."""
from typing import Any

from sharereports.core.client import FetchedDocument, MalformedResourceError
from sharereports.core.types import DocType
from sharereports.core.utils.dates import REPORT_DATE, parse_date, parse_timestamp

from .models import Document


def _dig(data: dict[str, Any], *keys: str) -> Any:
	value: Any = data
	for key in keys:
		if not isinstance(value, dict) or key not in value:
			raise KeyError(".".join(keys))
		value = value[key]
	return value


def copy_source_of(meta: dict[str, Any]) -> str | None:
	"""Id of the document this one was copied from, if any."""
	try:
		return _dig(meta, "copy", "src", "_ref") or None
	except KeyError:
		return None


def _upload_date(meta: dict[str, Any]) -> str:
	return parse_timestamp(_dig(meta, "stats", "created")).strftime(REPORT_DATE)


def coi_details(fetched: FetchedDocument) -> Document:
	body, meta = fetched.body, fetched.meta
	policies = _dig(body, "policies")
	if isinstance(policies, dict):
		policies = list(policies.values())
	expirations = [parse_date(p["expire_date"]) for p in policies]
	if not expirations:
		raise ValueError("no policies")
	earliest = min(expirations)

	return Document(
		id=fetched.id,
		doctype=DocType.COI,
		name=_dig(body, "certificate", "file_name"),
		upload_date=_upload_date(meta),
		copy_source_id=copy_source_of(meta),
		holder=_dig(body, "holder", "name"),
		producer=_dig(body, "producer", "name"),
		insured=_dig(body, "insured", "name"),
		coi_expiration=earliest.strftime(REPORT_DATE),
		expires_on=earliest,
	)


def audit_details(fetched: FetchedDocument) -> Document:
	body, meta = fetched.body, fetched.meta
	organization = _dig(body, "organization", "name")
	expiration = parse_date(_dig(body, "certificate_validity_period", "end"))
	score = _dig(body, "score", "final")

	return Document(
		id=fetched.id,
		doctype=DocType.AUDIT,
		name=f"{_dig(body, 'scheme', 'name')} Audit - {organization}",
		upload_date=_upload_date(meta),
		copy_source_id=copy_source_of(meta),
		audit_organization=organization,
		audit_expiration=expiration.strftime(REPORT_DATE),
		audit_score=f"{score['value']} {score['units']}",
		expires_on=expiration,
	)


_EXTRACTORS = {
	DocType.COI: coi_details,
	DocType.AUDIT: audit_details,
}


def extract_document(fetched: FetchedDocument, doctype: DocType) -> Document:
	"""Build a ``Document`` for the given type.

	Raises:
		MalformedResourceError: Expected fields are missing or unparsable
	"""
	try:
		return _EXTRACTORS[doctype](fetched)
	except (KeyError, TypeError, ValueError, AttributeError, OverflowError, OSError) as e:
		raise MalformedResourceError(
			fetched.id, f"cannot read {doctype.value} details ({e})"
		) from e
