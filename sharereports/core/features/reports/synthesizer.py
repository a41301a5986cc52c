# (c) Copyright Datacraft, 2026
"""
Report synthesis.

Expands the share graph and the event list into flat rows. Absence of
access is kept visible: an unshared document still gets a row with empty
partner columns, and a partner without documents gets one with empty
document columns.
"""
import logging
from datetime import date
from typing import Iterable

from sharereports.core.features.history.models import ShareEvent
from sharereports.core.features.shares.models import ShareGraph
from sharereports.core.types import ReportKind

from .schema import Report, Row, make_row
from .statistics import compute_statistics

logger = logging.getLogger(__name__)


def user_access_rows(graph: ShareGraph) -> list[Row]:
	rows: list[Row] = []
	for partner in graph.partners.values():
		if not partner.documents:
			rows.append(make_row(ReportKind.USER_ACCESS, partner.columns()))
			continue
		for document in partner.documents.values():
			rows.append(make_row(ReportKind.USER_ACCESS, partner.columns(), document.columns()))
	return rows


def document_share_rows(graph: ShareGraph) -> list[Row]:
	rows: list[Row] = []
	for shared in graph.documents.values():
		document = shared.document.columns()
		if not shared.shares:
			rows.append(make_row(ReportKind.DOCUMENT_SHARES, document))
			continue
		for partner in shared.shares.values():
			rows.append(make_row(ReportKind.DOCUMENT_SHARES, document, partner.columns()))
	return rows


def event_log_rows(events: Iterable[ShareEvent]) -> list[Row]:
	return [
		make_row(
			ReportKind.EVENT_LOG,
			event.document.columns(),
			event.partner.columns(),
			{
				"share status": event.status.value,
				"recipient email address": event.recipient,
				"event time": event.event_time,
				"event type": event.event_type,
			},
		)
		for event in events
	]


class ReportSynthesizer:
	"""Builds the three reports with their summary statistics."""

	def __init__(self, today: date | None = None):
		self.today = today or date.today()

	def _report(self, kind: ReportKind, rows: list[Row]) -> Report:
		logger.debug(f"Generating {kind.value} report ({len(rows)} rows)")
		return Report(
			kind=kind,
			rows=rows,
			statistics=compute_statistics(kind, rows, self.today),
		)

	def user_access(self, graph: ShareGraph) -> Report:
		return self._report(ReportKind.USER_ACCESS, user_access_rows(graph))

	def document_shares(self, graph: ShareGraph) -> Report:
		return self._report(ReportKind.DOCUMENT_SHARES, document_share_rows(graph))

	def event_log(self, events: Iterable[ShareEvent]) -> Report:
		return self._report(ReportKind.EVENT_LOG, event_log_rows(events))
