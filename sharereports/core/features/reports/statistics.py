# (c) Copyright Datacraft, 2026
"""Summary statistics attached to each published report."""
from datetime import date

from sharereports.core.types import ReportKind
from sharereports.core.utils.dates import parse_date

from .schema import Row


def _expiration(row: Row) -> date | None:
	value = row.get("coi expiration date") or row.get("audit expiration date")
	if not value:
		return None
	try:
		return parse_date(value)
	except ValueError:
		return None


def user_access_statistics(rows: list[Row]) -> dict[str, int]:
	partners: set[str] = set()
	without_documents = 0
	shares = 0
	for row in rows:
		partners.add(row["trading partner masterid"])
		if row["document id"]:
			shares += 1
		else:
			without_documents += 1
	return {
		"numTradingPartners": len(partners),
		"numTPWODocs": without_documents,
		"totalShares": shares,
	}


def document_share_statistics(rows: list[Row], today: date) -> dict[str, int]:
	seen: set[str] = set()
	not_shared = 0
	expired = 0
	for row in rows:
		if row["document id"] in seen:
			continue
		seen.add(row["document id"])
		if not row["trading partner masterid"]:
			not_shared += 1
		expires = _expiration(row)
		if expires is not None and expires < today:
			expired += 1
	return {
		"numDocsToShare": len(seen),
		"numDocsNotShared": not_shared,
		"numExpiredDocuments": expired,
	}


def event_log_statistics(rows: list[Row]) -> dict[str, int]:
	return {
		"numDocuments": len({row["document id"] for row in rows}),
		"numShares": sum(1 for row in rows if row["event type"] == "share"),
		"numEmails": sum(1 for row in rows if row["event type"] == "email"),
	}


def compute_statistics(kind: ReportKind, rows: list[Row], today: date) -> dict[str, int]:
	if kind == ReportKind.USER_ACCESS:
		return user_access_statistics(rows)
	if kind == ReportKind.DOCUMENT_SHARES:
		return document_share_statistics(rows, today)
	return event_log_statistics(rows)
