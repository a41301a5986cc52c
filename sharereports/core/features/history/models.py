# (c) Copyright Datacraft, 2026
from dataclasses import dataclass

from sharereports.core.features.shares.models import Document, Partner
from sharereports.core.types import ShareStatus

AWAITING_APPROVAL = "awaiting approval"


@dataclass(frozen=True)
class ShareEvent:
	"""One document pushed (or waiting to be pushed) to one partner."""
	job_id: str
	status: ShareStatus
	document: Document
	partner: Partner
	recipient: str
	event_time: str
	event_type: str = "share"
