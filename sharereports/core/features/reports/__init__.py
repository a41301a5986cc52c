# (c) Copyright Datacraft, 2026
"""Report synthesis, duplicate detection and encoding."""
from .diff import DiffGate, canonical_sort, is_duplicate
from .schema import COLUMNS, Artifact, Report, Row, artifact_name, make_row
from .synthesizer import ReportSynthesizer
from .workbook import decode_rows, encode_report

__all__ = [
	'COLUMNS',
	'Artifact',
	'DiffGate',
	'Report',
	'ReportSynthesizer',
	'Row',
	'artifact_name',
	'canonical_sort',
	'decode_rows',
	'encode_report',
	'is_duplicate',
	'make_row',
]
