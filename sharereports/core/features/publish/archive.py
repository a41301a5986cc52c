# (c) Copyright Datacraft, 2026
"""
Remote report archive.

Each report kind owns a resource under the trellis-reports service with a
``day-index`` mapping ``YYYY-MM-DD`` to the artifact published that day and
a ``_meta`` record holding its statistics.
"""
import logging
from datetime import date

from sharereports.core.client import (
	DocumentClient,
	NotFoundError,
	PublishError,
	ResilientFetcher,
	TransientFetchError,
	child_keys,
)
from sharereports.core.features.reports.schema import (
	XLSX_CONTENT_TYPE,
	Artifact,
	Row,
	make_row,
)
from sharereports.core.features.reports.workbook import decode_rows
from sharereports.core.types import ReportKind
from sharereports.core.utils.dates import format_day, parse_day

logger = logging.getLogger(__name__)

SERVICES = "/bookmarks/services"
REPORTS = f"{SERVICES}/trellis-reports"


def report_path(kind: ReportKind) -> str:
	return f"{REPORTS}/{kind.resource_name}"


def day_index_path(kind: ReportKind) -> str:
	return f"{report_path(kind)}/day-index"


def _link(resource_id: str) -> dict:
	return {"_id": resource_id, "_rev": 0}


def latest_day(keys: list[str]) -> str | None:
	days = []
	for key in keys:
		try:
			days.append(parse_day(key))
		except ValueError:
			continue
	if not days:
		return None
	return format_day(max(days))


class ReportArchive:
	"""Reads and writes the day-indexed report history."""

	def __init__(self, client: DocumentClient, fetcher: ResilientFetcher):
		self.client = client
		self.fetcher = fetcher

	async def load_previous(self, kind: ReportKind) -> list[Row] | None:
		"""Rows of the most recently published report, or ``None``."""
		index = day_index_path(kind)
		try:
			listing = await self.fetcher.fetch_listing(index)
			day = latest_day(child_keys(listing))
			if day is None:
				logger.info(f"No previous {kind.value} report")
				return None
			content = await self.fetcher.fetch_bytes(f"{index}/{day}")
		except NotFoundError:
			logger.info(f"No previous {kind.value} report")
			return None
		except TransientFetchError as e:
			logger.error(f"Failed to get previous {kind.value} report: {e}")
			return None

		try:
			rows = decode_rows(content)
		except Exception as e:
			logger.error(f"Failed to read previous {kind.value} report from {day}: {e}")
			return None
		logger.debug(f"Previous {kind.value} report from {day} has {len(rows)} rows")
		return [make_row(kind, row) for row in rows]

	async def _create(self, data: dict, what: str) -> str:
		try:
			response = await self.client.post("/resources", data=data)
		except (NotFoundError, TransientFetchError) as e:
			raise PublishError(f"Failed to create {what}", e) from e
		if not response.content_location:
			raise PublishError(f"{what}: no content location provided")
		logger.debug(f"{what} posted to {response.content_location}")
		return response.content_location

	async def _put(self, path: str, data: dict) -> None:
		try:
			await self.client.put(path, data)
		except (NotFoundError, TransientFetchError) as e:
			raise PublishError(f"Failed to update {path}", e) from e

	async def _exists(self, path: str) -> bool:
		try:
			await self.fetcher.fetch(path)
		except NotFoundError:
			return False
		except TransientFetchError as e:
			raise PublishError(f"Cannot check {path}", e) from e
		return True

	async def ensure_endpoints(self) -> None:
		"""
		Create the report hierarchy where it is missing.

		Safe to run every time; existing resources are left alone.

		Raises:
			PublishError: The hierarchy could not be checked or created
		"""
		if not await self._exists(REPORTS):
			loc = await self._create({}, "trellis-reports")
			await self._put(SERVICES, {"trellis-reports": _link(loc)})

		for kind in ReportKind:
			if await self._exists(report_path(kind)):
				continue
			loc = await self._create({"day-index": {}}, kind.resource_name)
			await self._put(REPORTS, {kind.resource_name: _link(loc)})

	async def upload(self, artifact: Artifact, day: date) -> str:
		"""Store the artifact and link it under ``day``; returns its resource id."""
		try:
			response = await self.client.post(
				"/resources",
				content=artifact.content,
				content_type=XLSX_CONTENT_TYPE,
			)
		except (NotFoundError, TransientFetchError) as e:
			raise PublishError(f"Failed to post {artifact.kind.value} report", e) from e
		loc = response.content_location
		if not loc:
			raise PublishError(f"{artifact.kind.value} report: no content location provided")
		logger.debug(f"{artifact.kind.value} report uploaded to {loc}")

		index = day_index_path(artifact.kind)
		key = format_day(day)
		await self._put(index, {key: _link(loc)})
		await self._put(f"{index}/{key}/_meta", {"statistics": artifact.statistics})
		return loc
