# (c) Copyright Datacraft, 2026
"""In-memory share graph."""
from dataclasses import dataclass, field
from datetime import date

from sharereports.core.types import DocType


@dataclass(frozen=True)
class Document:
	"""A certificate of insurance or an audit, reduced to its report fields."""
	id: str
	doctype: DocType
	name: str
	upload_date: str
	copy_source_id: str | None = None
	# COI fields
	holder: str = ""
	producer: str = ""
	insured: str = ""
	coi_expiration: str = ""
	# Audit fields
	audit_organization: str = ""
	audit_expiration: str = ""
	audit_score: str = ""
	expires_on: date | None = None

	@property
	def canonical_id(self) -> str:
		return canonical_id(self)

	def columns(self) -> dict[str, str]:
		"""Document attributes keyed by report column name."""
		return {
			"document type": self.doctype.value,
			"document id": self.id,
			"document name": self.name,
			"upload date": self.upload_date,
			"coi holder": self.holder,
			"coi producer": self.producer,
			"coi insured": self.insured,
			"coi expiration date": self.coi_expiration,
			"audit organization name": self.audit_organization,
			"audit expiration date": self.audit_expiration,
			"audit score": self.audit_score,
		}


def canonical_id(document: Document) -> str:
	"""Join key between partner holdings and document share sets.

	A copy and its source resolve to the same id.
	"""
	return document.copy_source_id or document.id


@dataclass
class Partner:
	"""A trading partner and the documents in its private bookmarks."""
	pid: str
	masterid: str
	name: str
	emails: dict[DocType, str] = field(default_factory=dict)
	# keyed by canonical id
	documents: dict[str, Document] = field(default_factory=dict)
	# lookup by both the held document's own id and its canonical id
	holdings: dict[str, Document] = field(default_factory=dict)

	def hold(self, document: Document) -> None:
		"""Record a document from the partner's private bookmarks; first one wins."""
		self.documents.setdefault(canonical_id(document), document)
		self.holdings.setdefault(document.id, document)
		self.holdings.setdefault(canonical_id(document), document)

	def held(self, doc_id: str) -> Document | None:
		return self.holdings.get(doc_id)

	def holds(self, doc_id: str) -> bool:
		return doc_id in self.holdings

	def columns(self) -> dict[str, str]:
		return {
			"trading partner name": self.name,
			"trading partner masterid": self.masterid,
		}


@dataclass
class SharedDocument:
	"""A global document annotated with the partners that can see it."""
	document: Document
	shares: dict[str, Partner] = field(default_factory=dict)


@dataclass
class ShareGraph:
	partners: dict[str, Partner] = field(default_factory=dict)
	documents: dict[str, SharedDocument] = field(default_factory=dict)
