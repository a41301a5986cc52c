# (c) Copyright Datacraft, 2026
"""Command line entry point."""
import asyncio
import logging
import sys
from datetime import datetime
from pathlib import Path

import click

from sharereports.app import RunOptions, configure_logging, run
from sharereports.core.client import ConnectionFailedError
from sharereports.core.config import get_settings
from sharereports.core.types import JobQueue

logger = logging.getLogger(__name__)


def _validate_dates(ctx, param, value):
	for day in value:
		try:
			datetime.strptime(day, "%Y-%m-%d")
		except ValueError:
			raise click.BadParameter(f"{day!r} is not a YYYY-MM-DD date")
	return list(value)


@click.command()
@click.option(
	"--queue",
	"-q",
	type=click.Choice([q.value for q in JobQueue]),
	default=JobQueue.COMPLETE.value,
	show_default=True,
	help="Share job queue to report on",
)
@click.option(
	"--state",
	"-s",
	type=click.BOOL,
	default=True,
	show_default=True,
	help="Whether or not to generate the current state reports",
)
@click.option("--domain", "-d", default=None, help="Domain without https")
@click.option("--token", "-t", default=None, help="Bearer token")
@click.option(
	"--file",
	"-f",
	"output_dir",
	type=click.Path(file_okay=False, path_type=Path),
	default=None,
	help="Directory to save reports in; if none specified they are uploaded to <domain>",
)
@click.option(
	"--date",
	"dates",
	multiple=True,
	callback=_validate_dates,
	help="Day (YYYY-MM-DD) to report share events for; repeatable",
)
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
def app(queue, state, domain, token, output_dir, dates, verbose):
	"""Generate trading partner share reports."""
	settings = get_settings().with_overrides(
		domain=domain,
		token=token,
		log_level="DEBUG" if verbose else None,
	)
	configure_logging(settings)
	if domain:
		logger.debug(f"Using command-line domain, final domain is: {settings.base_url}")

	options = RunOptions(
		queue=JobQueue(queue),
		state=state,
		output_dir=output_dir,
		dates=dates,
	)

	try:
		asyncio.run(run(settings, options))
	except ConnectionFailedError as e:
		logger.error(f"Failed to open connection: {e}")
		sys.exit(1)


def main():
	"""Run the CLI application."""
	app()


if __name__ == "__main__":
	main()
