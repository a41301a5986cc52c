# (c) Copyright Datacraft, 2026
"""Share job history."""
from .aggregator import HistoryAggregator, select_window
from .models import AWAITING_APPROVAL, ShareEvent

__all__ = [
	'AWAITING_APPROVAL',
	'HistoryAggregator',
	'ShareEvent',
	'select_window',
]
