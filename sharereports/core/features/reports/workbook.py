# (c) Copyright Datacraft, 2026
"""Spreadsheet encoding of reports."""
from datetime import date
from io import BytesIO

from openpyxl import Workbook, load_workbook
from openpyxl.utils import get_column_letter

from .schema import Artifact, Report, Row, artifact_name


def encode_report(report: Report, day: date) -> Artifact:
	"""Write the report as a single-sheet xlsx workbook."""
	filename = artifact_name(report.kind, day)
	wb = Workbook()
	ws = wb.active
	ws.title = report.kind.value
	wb.properties.title = filename

	ws.append(list(report.columns))
	for row in report.rows:
		ws.append([row.get(column, "") for column in report.columns])

	for idx, column in enumerate(report.columns, start=1):
		width = max([len(column)] + [len(row.get(column, "")) for row in report.rows[:200]])
		ws.column_dimensions[get_column_letter(idx)].width = min(width + 2, 60)

	buffer = BytesIO()
	wb.save(buffer)
	return Artifact(
		kind=report.kind,
		filename=filename,
		content=buffer.getvalue(),
		statistics=dict(report.statistics),
	)


def decode_rows(content: bytes) -> list[Row]:
	"""Read the first sheet back into rows keyed by the header row."""
	wb = load_workbook(BytesIO(content), read_only=True, data_only=True)
	try:
		ws = wb.worksheets[0]
		rows = ws.iter_rows(values_only=True)
		header = next(rows, None)
		if header is None:
			return []
		columns = ["" if h is None else str(h) for h in header]
		result = []
		for values in rows:
			if values is None or all(v is None for v in values):
				continue
			row = {}
			for idx, column in enumerate(columns):
				if not column:
					continue
				value = values[idx] if idx < len(values) else None
				row[column] = "" if value is None else str(value)
			result.append(row)
		return result
	finally:
		wb.close()
