# (c) Copyright Datacraft, 2026
"""Shared enumerations."""
from enum import Enum


class DocType(str, Enum):
	COI = "coi"
	AUDIT = "audit"

	@property
	def collection(self) -> str:
		"""Name of the bookmark collection holding this document type."""
		return _COLLECTIONS[self]

	@property
	def email_key(self) -> str:
		"""Partner profile key holding the notification addresses."""
		return _EMAIL_KEYS[self]

	@classmethod
	def from_job(cls, value: str | None) -> "DocType | None":
		"""Map a share job's configured doctype to a document type."""
		if not isinstance(value, str):
			return None
		return _JOB_DOCTYPES.get(value.lower())


_COLLECTIONS = {
	DocType.COI: "cois",
	DocType.AUDIT: "fsqa-audits",
}

_EMAIL_KEYS = {
	DocType.COI: "coi-emails",
	DocType.AUDIT: "fsqa-emails",
}

# share jobs have used both spellings for audits
_JOB_DOCTYPES = {
	"cois": DocType.COI,
	"coi": DocType.COI,
	"fsqa-audits": DocType.AUDIT,
	"audit": DocType.AUDIT,
	"audits": DocType.AUDIT,
}


class ShareStatus(str, Enum):
	PENDING = "pending"
	SUCCESS = "success"
	FAILURE = "failure"


class JobQueue(str, Enum):
	"""Which share job queue the event log reports on."""
	WAITING = "waiting"
	COMPLETE = "complete"


class ReportKind(str, Enum):
	USER_ACCESS = "user_access"
	DOCUMENT_SHARES = "document_shares"
	EVENT_LOG = "event_log"

	@property
	def resource_name(self) -> str:
		"""Child of the trellis-reports service document holding the day-index."""
		return _RESOURCE_NAMES[self]


_RESOURCE_NAMES = {
	ReportKind.USER_ACCESS: "current-tradingpartnershares",
	ReportKind.DOCUMENT_SHARES: "current-shareabledocs",
	ReportKind.EVENT_LOG: "event-log",
}
