# (c) Copyright Datacraft, 2026
"""Share resolution between partner holdings and global documents."""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from .models import Document, Partner, SharedDocument, canonical_id

logger = logging.getLogger(__name__)


class ShareSource(str, Enum):
	DIRECT = "direct"  # partner holds this very document
	COPY = "copy"  # partner holds another copy of the same source


@dataclass(frozen=True)
class ShareResult:
	"""Result of a share check."""
	shared: bool
	source: ShareSource | None = None


class ShareResolver:
	"""Decide which partners can see a document.

	Partners index their holdings by both the held document's id and its
	canonical id, so a partner holding a copy and a partner holding its
	source both match, as does a partner holding the document a global copy
	was made from.
	"""

	def check(self, partner: Partner, document: Document) -> ShareResult:
		held = partner.held(canonical_id(document)) or partner.held(document.id)
		if held is None:
			return ShareResult(shared=False)
		if held.id == document.id:
			return ShareResult(shared=True, source=ShareSource.DIRECT)
		return ShareResult(shared=True, source=ShareSource.COPY)

	def resolve(
		self,
		document: Document,
		partners: Iterable[Partner],
	) -> SharedDocument:
		shared = SharedDocument(document=document)
		for partner in partners:
			result = self.check(partner, document)
			if result.shared:
				logger.debug(
					f"{document.doctype.value} {document.id} shared with "
					f"{partner.pid} ({result.source.value})"
				)
				shared.shares[partner.pid] = partner
		return shared
