# (c) Copyright Datacraft, 2026
"""HTTP client for the trading-partner document store."""
import logging
from typing import Any

import httpx

from sharereports.core.config import Settings

from .base import (
	ConnectionFailedError,
	DocumentClient,
	NotFoundError,
	Response,
	TransientFetchError,
)

logger = logging.getLogger(__name__)


class TrellisClient(DocumentClient):
	"""Async document store client using bearer token authentication."""

	def __init__(
		self,
		base_url: str,
		token: str,
		timeout: float = 30.0,
		verify: bool = True,
		transport: httpx.AsyncBaseTransport | None = None,
	):
		"""
		Initialize the client.

		Args:
			base_url: Store URL, e.g. ``https://example.org``
			token: Bearer token
			timeout: Request timeout in seconds
			verify: Verify TLS certificates
			transport: Optional transport, used by tests
		"""
		self.base_url = base_url.rstrip('/')
		self._client = httpx.AsyncClient(
			base_url=self.base_url,
			headers={'Authorization': f"Bearer {token}"},
			timeout=timeout,
			verify=verify,
			transport=transport,
		)

	@classmethod
	def from_settings(cls, settings: Settings) -> "TrellisClient":
		return cls(
			base_url=settings.base_url,
			token=settings.token,
			timeout=settings.timeout,
			verify=settings.tls_verify,
		)

	async def close(self):
		"""Close HTTP client."""
		await self._client.aclose()

	async def connect(self) -> None:
		"""Check once that the store answers; failure here aborts the run."""
		try:
			response = await self._client.get('/bookmarks')
			response.raise_for_status()
		except httpx.HTTPError as e:
			raise ConnectionFailedError(f"Cannot reach {self.base_url}: {e}") from e
		logger.info(f"Connected to {self.base_url}")

	async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
		logger.debug(f"{method} {path}")
		try:
			response = await self._client.request(method, _normalize(path), **kwargs)
		except httpx.HTTPError as e:
			raise TransientFetchError(path, e) from e

		if response.status_code == 404:
			raise NotFoundError(path)
		try:
			response.raise_for_status()
		except httpx.HTTPStatusError as e:
			raise TransientFetchError(path, e) from e
		return response

	async def get(self, path: str) -> Response:
		response = await self._request('GET', path)
		try:
			data = response.json()
		except ValueError as e:
			raise TransientFetchError(path, e) from e
		return Response(
			data=data,
			headers=dict(response.headers),
			status=response.status_code,
		)

	async def get_bytes(self, path: str) -> bytes:
		response = await self._request('GET', path)
		return response.content

	async def post(
		self,
		path: str,
		data: Any = None,
		content: bytes | None = None,
		content_type: str | None = None,
	) -> Response:
		kwargs: dict[str, Any] = {}
		if content is not None:
			kwargs['content'] = content
			kwargs['headers'] = {'Content-Type': content_type or 'application/octet-stream'}
		else:
			kwargs['json'] = data if data is not None else {}
		response = await self._request('POST', path, **kwargs)
		return Response(headers=dict(response.headers), status=response.status_code)

	async def put(self, path: str, data: Any) -> Response:
		response = await self._request('PUT', path, json=data)
		return Response(headers=dict(response.headers), status=response.status_code)


def _normalize(path: str) -> str:
	# _meta references come back without a leading slash
	if path.startswith('http://') or path.startswith('https://'):
		return path
	return '/' + path.lstrip('/')
