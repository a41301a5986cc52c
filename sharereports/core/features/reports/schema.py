# (c) Copyright Datacraft, 2026
"""Column schemas of the three reports."""
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping

from sharereports.core.types import ReportKind
from sharereports.core.utils.dates import DAY_KEY

Row = dict[str, str]

USER_ACCESS_COLUMNS = (
	"trading partner name",
	"trading partner masterid",
	"document type",
	"document id",
	"document name",
	"upload date",
	"coi holder",
	"coi producer",
	"coi insured",
	"coi expiration date",
	"audit organization name",
	"audit expiration date",
	"audit score",
)

DOCUMENT_SHARES_COLUMNS = (
	"document name",
	"document id",
	"document type",
	"trading partner name",
	"trading partner masterid",
	"upload date",
	"coi holder",
	"coi producer",
	"coi insured",
	"coi expiration date",
	"audit organization name",
	"audit expiration date",
	"audit score",
)

EVENT_LOG_COLUMNS = (
	"share status",
	"document id",
	"document name",
	"document type",
	"upload date",
	"coi expiration date",
	"coi holder",
	"coi producer",
	"coi insured",
	"audit organization name",
	"audit expiration date",
	"audit score",
	"trading partner masterid",
	"trading partner name",
	"recipient email address",
	"event time",
	"event type",
)

COLUMNS: dict[ReportKind, tuple[str, ...]] = {
	ReportKind.USER_ACCESS: USER_ACCESS_COLUMNS,
	ReportKind.DOCUMENT_SHARES: DOCUMENT_SHARES_COLUMNS,
	ReportKind.EVENT_LOG: EVENT_LOG_COLUMNS,
}

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def make_row(kind: ReportKind, *parts: Mapping[str, Any]) -> Row:
	"""Project ``parts`` onto the report's columns; absent values are ''."""
	merged: dict[str, Any] = {}
	for part in parts:
		merged.update(part)
	return {
		column: "" if merged.get(column) is None else str(merged[column])
		for column in COLUMNS[kind]
	}


def artifact_name(kind: ReportKind, day: date) -> str:
	return f"{day.strftime(DAY_KEY)}_{kind.value}.xlsx"


@dataclass
class Report:
	"""A synthesized report ready for the diff gate and publication."""
	kind: ReportKind
	rows: list[Row]
	statistics: dict[str, int] = field(default_factory=dict)

	@property
	def columns(self) -> tuple[str, ...]:
		return COLUMNS[self.kind]

	def __len__(self) -> int:
		return len(self.rows)


@dataclass
class Artifact:
	"""An encoded report."""
	kind: ReportKind
	filename: str
	content: bytes
	statistics: dict[str, int] = field(default_factory=dict)
