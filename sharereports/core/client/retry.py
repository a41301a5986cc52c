# (c) Copyright Datacraft, 2026
"""
Resilient fetching on top of a document client.

The store is eventually consistent and drops connections now and then, so
every read goes through a retry policy. A missing resource is never retried.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from .base import (
	DocumentClient,
	NotFoundError,
	Response,
	TransientFetchError,
	child_keys,
)

logger = logging.getLogger(__name__)


def _default_is_retryable(exc: Exception) -> bool:
	return not isinstance(exc, NotFoundError)


@dataclass(frozen=True)
class RetryPolicy:
	"""How often a failed read is attempted, and which errors qualify."""
	max_attempts: int = 5
	is_retryable: Callable[[Exception], bool] = field(default=_default_is_retryable)


@dataclass
class FetchedDocument:
	"""A document body together with its metadata envelope."""
	id: str
	body: dict[str, Any]
	meta: dict[str, Any]


class ResilientFetcher:
	"""Bounded-retry, bounded-concurrency reads against the document store."""

	def __init__(
		self,
		client: DocumentClient,
		policy: RetryPolicy | None = None,
		max_in_flight: int = 10,
	):
		self.client = client
		self.policy = policy or RetryPolicy()
		self._slots = asyncio.Semaphore(max_in_flight)

	async def _attempt(self, call: Callable, path: str):
		last_error: Exception | None = None
		for attempt in range(1, self.policy.max_attempts + 1):
			try:
				async with self._slots:
					return await call(path)
			except Exception as e:
				if not self.policy.is_retryable(e):
					logger.debug(f"Not retrying {path}: {e}")
					raise
				last_error = e
				logger.debug(f"{path} attempt {attempt} failed ({e}), retrying...")

		if isinstance(last_error, TransientFetchError):
			raise last_error
		raise TransientFetchError(path, last_error)

	async def fetch(self, path: str) -> Response:
		"""Fetch a JSON resource.

		A resource returned without an ``_id`` is an empty placeholder and
		is reported as not found.

		Raises:
			NotFoundError: The resource doesn't exist
			TransientFetchError: All attempts failed
		"""
		response = await self._attempt(self.client.get, path)
		if not isinstance(response.data, dict) or "_id" not in response.data:
			raise NotFoundError(path)
		return response

	async def fetch_bytes(self, path: str) -> bytes:
		return await self._attempt(self.client.get_bytes, path)

	async def fetch_children(self, path: str) -> list[str]:
		"""List the child keys of a listing resource."""
		response = await self.fetch(path)
		return child_keys(response.data)

	async def fetch_listing(self, path: str) -> dict[str, Any]:
		"""Fetch an object nested inside a resource, such as a ``day-index``.

		Nested objects carry no ``_id`` of their own, so only a missing or
		non-object value counts as not found.

		Raises:
			NotFoundError: Nothing is stored at ``path``
			TransientFetchError: All attempts failed
		"""
		response = await self._attempt(self.client.get, path)
		if not isinstance(response.data, dict):
			raise NotFoundError(path)
		return response.data

	async def fetch_document(self, path: str) -> FetchedDocument:
		"""Fetch a document body plus its ``_meta`` envelope."""
		body = (await self.fetch(path)).data
		meta_ref = body.get("_meta")
		meta: dict[str, Any] = {}
		if isinstance(meta_ref, dict) and meta_ref.get("_id"):
			meta = (await self.fetch(meta_ref["_id"])).data
		return FetchedDocument(id=body["_id"], body=body, meta=meta)
