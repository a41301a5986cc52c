# (c) Copyright Datacraft, 2026
"""Remote document store access."""
from .base import (
	ConnectionFailedError,
	DocumentClient,
	MalformedResourceError,
	NotFoundError,
	PublishError,
	Response,
	TransientFetchError,
	child_keys,
)
from .retry import FetchedDocument, ResilientFetcher, RetryPolicy
from .trellis import TrellisClient

__all__ = [
	'ConnectionFailedError',
	'DocumentClient',
	'FetchedDocument',
	'MalformedResourceError',
	'NotFoundError',
	'PublishError',
	'ResilientFetcher',
	'Response',
	'RetryPolicy',
	'TransientFetchError',
	'TrellisClient',
	'child_keys',
]
