# (c) Copyright Datacraft, 2026
"""Abstract remote document client interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

# Keys the store adds to every resource; never part of the listed children.
INTERNAL_KEYS = frozenset({"_id", "_rev", "_type", "_meta"})


@dataclass
class Response:
	"""Result of a client request."""
	data: Any = None
	headers: dict[str, str] = field(default_factory=dict)
	status: int = 200

	@property
	def content_location(self) -> str | None:
		"""Resource id from a content-location header, without the leading slash."""
		loc = self.headers.get("content-location")
		if not loc:
			return None
		return loc.lstrip("/")


class DocumentClient(ABC):
	"""Abstract base class for clients of the document graph."""

	@abstractmethod
	async def get(self, path: str) -> Response:
		"""Fetch a JSON resource.

		Args:
			path: Tree address, e.g. ``/bookmarks/trellisfw/cois``

		Returns:
			Response with the decoded body

		Raises:
			NotFoundError: If the resource doesn't exist
			TransientFetchError: On any other failure
		"""
		...

	@abstractmethod
	async def get_bytes(self, path: str) -> bytes:
		"""Fetch a binary resource.

		Raises:
			NotFoundError: If the resource doesn't exist
			TransientFetchError: On any other failure
		"""
		...

	@abstractmethod
	async def post(
		self,
		path: str,
		data: Any = None,
		content: bytes | None = None,
		content_type: str | None = None,
	) -> Response:
		"""Create a resource; the new id is in ``content-location``."""
		...

	@abstractmethod
	async def put(self, path: str, data: Any) -> Response:
		"""Merge ``data`` into the resource at ``path``."""
		...

	async def close(self) -> None:
		"""Release transport resources."""

	async def __aenter__(self):
		return self

	async def __aexit__(self, exc_type, exc_val, exc_tb):
		await self.close()


def child_keys(resource: dict[str, Any] | None) -> list[str]:
	"""List the child links of a listing resource.

	Storage-internal keys and ``*-index`` lookup tables are never returned.
	"""
	if not isinstance(resource, dict):
		return []
	return [
		key for key in resource
		if key not in INTERNAL_KEYS and not key.endswith("-index")
	]


class NotFoundError(Exception):
	"""Raised when the requested resource doesn't exist."""

	def __init__(self, path: str):
		self.path = path
		super().__init__(f"Resource not found: {path}")


class TransientFetchError(Exception):
	"""Network or protocol failure that may succeed when retried."""

	def __init__(self, path: str, cause: Exception | None = None):
		self.path = path
		self.cause = cause
		super().__init__(f"Failed to fetch {path}: {cause}")


class MalformedResourceError(Exception):
	"""A fetched resource is missing fields the reports need."""

	def __init__(self, resource_id: str, message: str):
		self.resource_id = resource_id
		super().__init__(f"{resource_id}: {message}")


class PublishError(Exception):
	"""Uploading or linking a report artifact failed."""

	def __init__(self, message: str, cause: Exception | None = None):
		self.cause = cause
		super().__init__(message)


class ConnectionFailedError(Exception):
	"""The document store could not be reached at startup."""
