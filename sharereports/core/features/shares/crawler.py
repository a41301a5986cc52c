# (c) Copyright Datacraft, 2026
"""
Partner/document crawler.

Walks the trading partner list and the global document collections and
builds the share graph. Documents do not record who can see them, so the
partners' private bookmark trees are crawled first and every global document
is then matched against them.
"""
import logging

from sharereports.core.client import (
	MalformedResourceError,
	NotFoundError,
	ResilientFetcher,
	TransientFetchError,
)
from sharereports.core.types import DocType
from sharereports.core.utils.concurrency import bounded_gather

from .details import extract_document
from .models import Document, Partner, ShareGraph
from .resolver import ShareResolver

logger = logging.getLogger(__name__)

ROOT = "/bookmarks/trellisfw"
PARTNERS = f"{ROOT}/trading-partners"


def partner_collection_path(pid: str, doctype: DocType) -> str:
	return f"{PARTNERS}/{pid}/user/bookmarks/trellisfw/{doctype.collection}"


def collection_path(doctype: DocType) -> str:
	return f"{ROOT}/{doctype.collection}"


def partner_from_profile(pid: str, profile: dict) -> Partner:
	emails = {}
	for doctype in DocType:
		value = profile.get(doctype.email_key)
		if isinstance(value, (list, tuple)):
			value = ", ".join(str(v) for v in value)
		emails[doctype] = value or ""
	return Partner(
		pid=pid,
		masterid=str(profile.get("masterid") or ""),
		name=str(profile.get("name") or ""),
		emails=emails,
	)


class ShareCrawler:
	"""Builds the share graph for the current moment."""

	def __init__(
		self,
		fetcher: ResilientFetcher,
		concurrency: int = 10,
		resolver: ShareResolver | None = None,
	):
		self.fetcher = fetcher
		self.concurrency = concurrency
		self.resolver = resolver or ShareResolver()

	async def crawl(self) -> ShareGraph:
		graph = ShareGraph()

		logger.debug("Getting trading partner list")
		try:
			pids = await self.fetcher.fetch_children(PARTNERS)
		except NotFoundError:
			logger.info("No trading partners found")
			pids = []
		except TransientFetchError as e:
			logger.error(f"Failed to get list of trading partners: {e}")
			pids = []

		await bounded_gather(
			pids,
			lambda pid: self._crawl_partner(graph, pid),
			self.concurrency,
		)
		logger.info(f"Crawled {len(graph.partners)} trading partners")

		for doctype in DocType:
			await self._crawl_collection(graph, doctype)
		logger.info(f"Crawled {len(graph.documents)} documents")

		return graph

	async def load_document(self, path: str, doctype: DocType) -> Document | None:
		"""Fetch and extract one document; ``None`` when it can't be used."""
		try:
			fetched = await self.fetcher.fetch_document(path)
			return extract_document(fetched, doctype)
		except NotFoundError:
			logger.debug(f"Document {path} not found")
		except TransientFetchError as e:
			logger.error(f"Failed to fetch {doctype.value} {path}: {e}")
		except MalformedResourceError as e:
			logger.warning(f"Skipping malformed {doctype.value}: {e}")
		return None

	async def _crawl_partner(self, graph: ShareGraph, pid: str) -> None:
		logger.info(f"Getting documents for trading partner {pid}")
		try:
			profile = (await self.fetcher.fetch(f"{PARTNERS}/{pid}")).data
		except NotFoundError:
			logger.info(f"Trading partner {pid} not found")
			return
		except TransientFetchError as e:
			logger.error(f"Failed to get trading partner {pid}: {e}")
			return

		partner = partner_from_profile(pid, profile)
		graph.partners[pid] = partner

		for doctype in DocType:
			for document in await self._partner_documents(pid, doctype):
				partner.hold(document)

	async def _partner_documents(self, pid: str, doctype: DocType) -> list[Document]:
		base = partner_collection_path(pid, doctype)
		try:
			keys = await self.fetcher.fetch_children(base)
		except NotFoundError:
			logger.debug(f"Trading partner {pid} has no {doctype.collection}")
			return []
		except TransientFetchError as e:
			logger.error(f"Failed to get list of {doctype.collection} for partner {pid}: {e}")
			return []

		documents = await bounded_gather(
			keys,
			lambda key: self.load_document(f"{base}/{key}", doctype),
			self.concurrency,
		)
		return [d for d in documents if d is not None]

	async def _crawl_collection(self, graph: ShareGraph, doctype: DocType) -> None:
		path = collection_path(doctype)
		logger.debug(f"Getting {doctype.collection} list")
		try:
			keys = await self.fetcher.fetch_children(path)
		except NotFoundError:
			logger.info(f"No {doctype.collection} collection yet")
			return
		except TransientFetchError as e:
			logger.error(f"Failed to get list of {doctype.collection}: {e}")
			return

		async def share(key: str) -> None:
			document = await self.load_document(f"{path}/{key}", doctype)
			if document is None:
				return
			graph.documents[document.id] = self.resolver.resolve(
				document, graph.partners.values()
			)

		await bounded_gather(keys, share, self.concurrency)
