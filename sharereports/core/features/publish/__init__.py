# (c) Copyright Datacraft, 2026
"""Report publication."""
from .archive import ReportArchive, day_index_path, latest_day
from .local import LocalWriter
from .service import PublishResult, ReportPublisher

__all__ = [
	'LocalWriter',
	'PublishResult',
	'ReportArchive',
	'ReportPublisher',
	'day_index_path',
	'latest_day',
]
