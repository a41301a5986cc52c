# (c) Copyright Datacraft, 2026
"""Report run: crawl, synthesize, diff and publish."""
import asyncio
import logging
import os
from dataclasses import dataclass, field
from datetime import date
from logging.config import dictConfig
from pathlib import Path

import yaml

from sharereports.core.client import (
	DocumentClient,
	ResilientFetcher,
	RetryPolicy,
	TrellisClient,
)
from sharereports.core.config import Settings
from sharereports.core.features.history import HistoryAggregator
from sharereports.core.features.publish import PublishResult, ReportArchive, ReportPublisher
from sharereports.core.features.reports import (
	DiffGate,
	Report,
	ReportSynthesizer,
	encode_report,
)
from sharereports.core.features.shares import ShareCrawler, ShareGraph
from sharereports.core.types import JobQueue, ReportKind

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
	"""Load a YAML dictConfig if one is configured, else a basic console setup."""
	logging_config_path = settings.log_config or Path(
		os.environ.get("SR_LOGGING_CFG", "/etc/sharereports/logging.yaml")
	)

	if logging_config_path.exists() and logging_config_path.is_file():
		with open(logging_config_path, "r") as stream:
			config = yaml.safe_load(stream)
		dictConfig(config)
		return

	logging.basicConfig(
		level=settings.log_level.upper(),
		format="%(asctime)s %(levelname)s %(name)s: %(message)s",
	)


@dataclass
class RunOptions:
	queue: JobQueue = JobQueue.COMPLETE
	state: bool = True
	output_dir: Path | None = None
	dates: list[str] = field(default_factory=list)


class ReportRun:
	"""One run of the report generator against a connected client."""

	def __init__(
		self,
		settings: Settings,
		client: DocumentClient,
		options: RunOptions | None = None,
		today: date | None = None,
	):
		self.settings = settings
		self.client = client
		self.options = options or RunOptions()
		self.today = today or date.today()
		self.fetcher = ResilientFetcher(
			client,
			RetryPolicy(max_attempts=settings.max_attempts),
			max_in_flight=settings.concurrency,
		)
		self.archive = ReportArchive(client, self.fetcher)
		self.crawler = ShareCrawler(self.fetcher, settings.concurrency)
		self.history = HistoryAggregator(self.fetcher, settings.concurrency, today=self.today)
		self.synthesizer = ReportSynthesizer(today=self.today)
		self.gate = DiffGate()

	@property
	def kinds(self) -> list[ReportKind]:
		if self.options.state:
			return [ReportKind.USER_ACCESS, ReportKind.DOCUMENT_SHARES, ReportKind.EVENT_LOG]
		return [ReportKind.EVENT_LOG]

	async def _graph(self) -> ShareGraph | None:
		if not self.options.state:
			return None
		logger.debug("Getting share state")
		return await self.crawler.crawl()

	async def generate(self) -> list[Report]:
		"""Build every requested report and drop the ones not worth publishing."""
		kinds = self.kinds
		graph, events, *previous = await asyncio.gather(
			self._graph(),
			self.history.collect(self.options.queue, self.options.dates),
			*(self.archive.load_previous(kind) for kind in kinds),
		)
		previous_by_kind = dict(zip(kinds, previous))

		reports = []
		if graph is not None:
			reports.append(self.synthesizer.user_access(graph))
			reports.append(self.synthesizer.document_shares(graph))
		reports.append(self.synthesizer.event_log(events))

		admitted = []
		for report in reports:
			kept = self.gate.admit(report, previous_by_kind.get(report.kind))
			if kept is not None:
				admitted.append(kept)
		return admitted

	async def execute(self) -> PublishResult:
		reports = await self.generate()
		artifacts = [encode_report(report, self.today) for report in reports]
		publisher = ReportPublisher(
			self.archive,
			output_dir=self.options.output_dir,
			fallback_dir=self.settings.fallback_dir,
			today=self.today,
		)
		result = await publisher.publish(artifacts)
		logger.info(
			f"Published {len(result.published)} of {len(self.kinds)} reports"
		)
		return result


async def run(settings: Settings, options: RunOptions) -> PublishResult:
	"""Connect, run once, and close the client.

	Raises:
		ConnectionFailedError: The store could not be reached
	"""
	async with TrellisClient.from_settings(settings) as client:
		await client.connect()
		return await ReportRun(settings, client, options).execute()
