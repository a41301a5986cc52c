# (c) Copyright Datacraft, 2026
"""Local filesystem output of report artifacts."""
import logging
from pathlib import Path

import aiofiles

from sharereports.core.features.reports.schema import Artifact

logger = logging.getLogger(__name__)


class LocalWriter:
	"""Writes artifacts into a directory; one failed write never blocks the rest."""

	def __init__(self, base_path: str | Path):
		self.base_path = Path(base_path)

	async def write(self, artifact: Artifact) -> Path | None:
		path = self.base_path / artifact.filename
		logger.debug(f"Writing {artifact.kind.value} report to {path}")
		try:
			path.parent.mkdir(parents=True, exist_ok=True)
			async with aiofiles.open(path, "wb") as f:
				await f.write(artifact.content)
		except OSError as e:
			logger.error(f"Failed to write {artifact.kind.value} report to {path}: {e}")
			return None
		logger.info(f"{artifact.kind.value} report written to {path}")
		return path

	async def write_all(self, artifacts: list[Artifact]) -> dict:
		written = {}
		for artifact in artifacts:
			path = await self.write(artifact)
			if path is not None:
				written[artifact.kind] = path
		return written
