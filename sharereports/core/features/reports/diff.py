# (c) Copyright Datacraft, 2026
"""
Day-over-day duplicate detection.

Crawl order is not deterministic, so rows are put in a fixed per-report
order before two snapshots are compared.
"""
import logging
from datetime import datetime
from typing import Callable, Sequence

from sharereports.core.types import ReportKind
from sharereports.core.utils.dates import parse_event_time

from .schema import COLUMNS, Report, Row

logger = logging.getLogger(__name__)


def _full(kind: ReportKind, row: Row) -> tuple[str, ...]:
	return tuple(row.get(column, "") for column in COLUMNS[kind])


def _event_time_key(value: str) -> tuple:
	parsed = parse_event_time(value)
	if parsed is None:
		return (1, datetime.min, value)
	return (0, parsed, "")


def canonical_key(kind: ReportKind) -> Callable[[Row], tuple]:
	"""Sort key of a report; the whole row breaks remaining ties."""
	if kind == ReportKind.USER_ACCESS:
		return lambda row: (
			row.get("trading partner masterid", ""),
			row.get("document id", ""),
			_full(kind, row),
		)
	if kind == ReportKind.DOCUMENT_SHARES:
		return lambda row: (
			row.get("document id", ""),
			row.get("trading partner masterid", ""),
			_full(kind, row),
		)
	return lambda row: (
		_event_time_key(row.get("event time", "")),
		row.get("trading partner masterid", ""),
		_full(kind, row),
	)


def canonical_sort(kind: ReportKind, rows: Sequence[Row]) -> list[Row]:
	return sorted(rows, key=canonical_key(kind))


def is_duplicate(prev_rows: Sequence[Row], next_rows: Sequence[Row], kind: ReportKind) -> bool:
	"""True when both snapshots hold the same rows, in any order."""
	if len(prev_rows) != len(next_rows):
		return False
	key = canonical_key(kind)
	prev_sorted = sorted(prev_rows, key=key)
	next_sorted = sorted(next_rows, key=key)
	return all(
		_full(kind, first) == _full(kind, second)
		for first, second in zip(prev_sorted, next_sorted)
	)


class DiffGate:
	"""Decides whether a freshly synthesized report gets published."""

	def admit(self, report: Report, previous: Sequence[Row] | None) -> Report | None:
		"""
		Return the report in canonical order, or ``None`` to suppress it.

		Args:
			report: The new report
			previous: Rows of the last published report, or ``None`` when
				there is none to compare against
		"""
		if not report.rows:
			logger.info(f"Generated {report.kind.value} report is empty")
			return None
		if previous is not None and is_duplicate(previous, report.rows, report.kind):
			logger.info(f"Generated {report.kind.value} report matches previous")
			return None
		return Report(
			kind=report.kind,
			rows=canonical_sort(report.kind, report.rows),
			statistics=report.statistics,
		)
