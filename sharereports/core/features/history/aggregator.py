# (c) Copyright Datacraft, 2026
"""
History aggregation for the event log.

Share jobs are filed by an upstream workflow into day-indexed success and
failure queues once they finish, or sit in the waiting queue until approved.
This module reads one of those views and normalizes every job into a
``ShareEvent``.
"""
import logging
from datetime import date
from typing import Iterable

from sharereports.core.client import (
	MalformedResourceError,
	NotFoundError,
	ResilientFetcher,
	TransientFetchError,
	child_keys,
)
from sharereports.core.features.shares.crawler import partner_from_profile
from sharereports.core.features.shares.details import extract_document
from sharereports.core.types import DocType, JobQueue, ShareStatus
from sharereports.core.utils.concurrency import bounded_gather
from sharereports.core.utils.dates import EVENT_TIME, format_day, parse_day, parse_timestamp

from .models import AWAITING_APPROVAL, ShareEvent

logger = logging.getLogger(__name__)

JOBS = "/bookmarks/services/trellis-shares"
FINISHED = (ShareStatus.SUCCESS, ShareStatus.FAILURE)


def queue_path(status: ShareStatus) -> str:
	if status == ShareStatus.PENDING:
		return f"{JOBS}/jobs"
	return f"{JOBS}/jobs-{status.value}"


def partner_path(chroot: str) -> str:
	"""Partner resource owning a job's chroot (two segments up)."""
	return "/".join(chroot.rstrip("/").split("/")[:-2])


def select_window(
	active_days: Iterable[str],
	today: date,
	dates: Iterable[str] | None = None,
) -> list[str]:
	"""
	Pick the days to report on.

	Explicit dates are normalized to ``YYYY-MM-DD`` and kept when they have
	activity. Otherwise the most recent active day before ``today`` is used.
	"""
	active = set(active_days)
	requested = [format_day(parse_day(d)) for d in (dates or [])]
	if requested:
		return sorted(d for d in dict.fromkeys(requested) if d in active)

	past = [d for d in active if _is_day(d) and parse_day(d) < today]
	if not past:
		return []
	return [max(past)]


def _is_day(value: str) -> bool:
	try:
		parse_day(value)
	except ValueError:
		return False
	return True


def event_time(job: dict, status: ShareStatus) -> str:
	"""Earliest time the job entered ``status``."""
	if status == ShareStatus.PENDING:
		return AWAITING_APPROVAL
	updates = job.get("updates") or {}
	if isinstance(updates, dict):
		updates = list(updates.values())
	try:
		times = [
			parse_timestamp(u["time"])
			for u in updates
			if isinstance(u, dict) and u.get("status") == status.value and u.get("time") is not None
		]
	except (TypeError, ValueError, OverflowError, OSError) as e:
		raise MalformedResourceError(job.get("_id", "?"), f"bad update time ({e})") from e
	if not times:
		raise MalformedResourceError(job.get("_id", "?"), f"no {status.value} update")
	return min(times).strftime(EVENT_TIME)


class HistoryAggregator:
	"""Collects share events for a reporting window."""

	def __init__(
		self,
		fetcher: ResilientFetcher,
		concurrency: int = 10,
		today: date | None = None,
	):
		self.fetcher = fetcher
		self.concurrency = concurrency
		self.today = today or date.today()

	async def collect(
		self,
		queue: JobQueue = JobQueue.COMPLETE,
		dates: list[str] | None = None,
	) -> list[ShareEvent]:
		logger.debug("Get share history")
		if queue == JobQueue.WAITING:
			return await self._collect_queue(queue_path(ShareStatus.PENDING), ShareStatus.PENDING)

		window = select_window(await self.active_days(), self.today, dates)
		if not window:
			logger.info("No share activity in the reporting window")
			return []
		logger.debug(f"Dates for activities to be retrieved: {window}")

		per_day = await bounded_gather(window, self._collect_day, self.concurrency)
		return [event for events in per_day for event in events]

	async def active_days(self) -> set[str]:
		"""Union of the day keys of the finished-job queues."""
		days: set[str] = set()
		for status in FINISHED:
			path = queue_path(status)
			try:
				listing = (await self.fetcher.fetch(path)).data
			except NotFoundError:
				logger.debug(f"{path} does not exist yet")
				continue
			except TransientFetchError as e:
				logger.error(f"Failed to get trellis shares: {e}")
				continue
			days.update(child_keys(listing.get("day-index")))
		return days

	async def _collect_day(self, day: str) -> list[ShareEvent]:
		logger.info(f"Getting trellis shares for {day}")
		events: list[ShareEvent] = []
		for status in FINISHED:
			events.extend(
				await self._collect_queue(f"{queue_path(status)}/day-index/{day}", status)
			)
		logger.debug(f"{len(events)} completed tasks for {day}")
		return events

	async def _collect_queue(self, path: str, status: ShareStatus) -> list[ShareEvent]:
		try:
			job_ids = await self.fetcher.fetch_children(path)
		except NotFoundError:
			return []
		except TransientFetchError as e:
			logger.error(f"Failed to get shares at {path}: {e}")
			return []

		events = await bounded_gather(
			job_ids,
			lambda sid: self.load_event(f"{path}/{sid}", sid, status),
			self.concurrency,
		)
		return [e for e in events if e is not None]

	async def load_event(self, path: str, sid: str, status: ShareStatus) -> ShareEvent | None:
		"""Resolve one job; ``None`` (and a log line) when any part is missing."""
		logger.debug(f"Getting data for share id: {sid}")
		try:
			job = (await self.fetcher.fetch(path)).data
			config = job.get("config")
			if not isinstance(config, dict):
				raise MalformedResourceError(sid, "job has no config")
			doctype = DocType.from_job(config.get("doctype"))
			if doctype is None:
				raise MalformedResourceError(sid, f"unknown doctype {config.get('doctype')!r}")
			src, chroot = config.get("src"), config.get("chroot")
			if not isinstance(src, str) or not isinstance(chroot, str) or not src or not chroot:
				raise MalformedResourceError(sid, "job has no source or chroot")

			fetched = await self.fetcher.fetch_document(src)
			document = extract_document(fetched, doctype)

			owner = partner_path(chroot)
			profile = (await self.fetcher.fetch(owner)).data
			partner = partner_from_profile(owner.rsplit("/", 1)[-1], profile)

			return ShareEvent(
				job_id=sid,
				status=status,
				document=document,
				partner=partner,
				recipient=partner.emails.get(doctype, ""),
				event_time=event_time(job, status),
			)
		except NotFoundError as e:
			logger.warning(f"Dropping share {sid}: {e}")
		except TransientFetchError as e:
			logger.error(f"Failed to fetch share {sid}: {e}")
		except MalformedResourceError as e:
			logger.warning(f"Dropping share {sid}: {e}")
		return None
