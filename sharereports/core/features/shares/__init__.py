# (c) Copyright Datacraft, 2026
"""Share graph crawling and resolution."""
from .crawler import ShareCrawler
from .models import Document, Partner, ShareGraph, SharedDocument, canonical_id
from .resolver import ShareResolver, ShareResult, ShareSource

__all__ = [
	'Document',
	'Partner',
	'ShareCrawler',
	'ShareGraph',
	'ShareResolver',
	'ShareResult',
	'ShareSource',
	'SharedDocument',
	'canonical_id',
]
