# (c) Copyright Datacraft, 2026
"""Date formats used in the reports."""
from datetime import date, datetime, timezone

REPORT_DATE = "%m/%d/%Y"
EVENT_TIME = "%m/%d/%Y %H:%M"
DAY_KEY = "%Y-%m-%d"


def format_day(day: date) -> str:
	return day.strftime(DAY_KEY)


def parse_day(value: str) -> date:
	return datetime.strptime(value, DAY_KEY).date()


def parse_timestamp(value) -> datetime:
	"""Parse a unix timestamp or an ISO 8601 string into an aware datetime."""
	if isinstance(value, (int, float)):
		return datetime.fromtimestamp(value, tz=timezone.utc)
	text = str(value).strip()
	if text.replace(".", "", 1).isdigit():
		return datetime.fromtimestamp(float(text), tz=timezone.utc)
	parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
	if parsed.tzinfo is None:
		parsed = parsed.replace(tzinfo=timezone.utc)
	return parsed


def parse_date(value: str) -> date:
	"""Parse a report date (MM/DD/YYYY) or an ISO date."""
	text = str(value).strip()
	try:
		return datetime.strptime(text, REPORT_DATE).date()
	except ValueError:
		return parse_timestamp(text).date()


def parse_event_time(value: str) -> datetime | None:
	"""Parse an event log time; ``None`` for markers like 'awaiting approval'."""
	try:
		return datetime.strptime(value, EVENT_TIME)
	except (TypeError, ValueError):
		return None
