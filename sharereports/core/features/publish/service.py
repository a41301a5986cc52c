# (c) Copyright Datacraft, 2026
"""Publication of report artifacts."""
import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from sharereports.core.client import PublishError
from sharereports.core.features.reports.schema import Artifact
from sharereports.core.types import ReportKind

from .archive import ReportArchive
from .local import LocalWriter

logger = logging.getLogger(__name__)


@dataclass
class PublishResult:
	uploaded: dict[ReportKind, str] = field(default_factory=dict)
	written: dict[ReportKind, Path] = field(default_factory=dict)

	@property
	def published(self) -> set[ReportKind]:
		return set(self.uploaded) | set(self.written)


class ReportPublisher:
	"""Uploads artifacts to the archive, or writes them to disk.

	With ``output_dir`` set everything goes to disk. Otherwise artifacts are
	uploaded, and whatever cannot be uploaded lands in ``fallback_dir``.
	"""

	def __init__(
		self,
		archive: ReportArchive | None,
		output_dir: Path | None = None,
		fallback_dir: Path = Path("."),
		today: date | None = None,
	):
		self.archive = archive
		self.output_dir = output_dir
		self.fallback_dir = fallback_dir
		self.today = today or date.today()

	async def publish(self, artifacts: list[Artifact]) -> PublishResult:
		result = PublishResult()
		if not artifacts:
			logger.info("No reports to publish")
			return result

		if self.output_dir is not None or self.archive is None:
			target = self.output_dir if self.output_dir is not None else self.fallback_dir
			result.written = await LocalWriter(target).write_all(artifacts)
			return result

		try:
			await self.archive.ensure_endpoints()
		except PublishError as e:
			logger.error(f"Failed to ensure day index exists: {e}")
			logger.error("Saving reports to disk")
			result.written = await LocalWriter(self.fallback_dir).write_all(artifacts)
			return result

		fallback = LocalWriter(self.fallback_dir)
		for artifact in artifacts:
			try:
				result.uploaded[artifact.kind] = await self.archive.upload(artifact, self.today)
				logger.info(f"{artifact.kind.value} report published")
			except PublishError as e:
				logger.error(f"Failed to upload {artifact.kind.value} report: {e}")
				path = await fallback.write(artifact)
				if path is not None:
					result.written[artifact.kind] = path
		return result
