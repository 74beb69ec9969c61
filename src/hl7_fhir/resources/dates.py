"""ISO-8601 date helpers used for search values and extension values."""

from __future__ import annotations

from datetime import date, datetime


def to_iso_timestamp(value: datetime) -> str:
    """Format a datetime as ``yyyy-MM-ddTHH:mm:ss+HH:MM``.

    Naive datetimes are interpreted as local time.
    """
    if value.tzinfo is None:
        value = value.astimezone()
    return value.isoformat(timespec="seconds")


def to_iso_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def parse_timestamp(value: str) -> datetime:
    """Parse a FHIR dateTime/instant string.

    Partial dateTimes (``2013`` or ``2013-06``) resolve to the first day of
    the period. A trailing ``Z`` is accepted as UTC.
    """
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    if len(text) == 4:
        return datetime(int(text), 1, 1)
    if len(text) == 7:
        return datetime(int(text[:4]), int(text[5:7]), 1)
    return datetime.fromisoformat(text)


def parse_date(value: str) -> date:
    text = value.strip()
    if len(text) == 4:
        return date(int(text), 1, 1)
    if len(text) == 7:
        return date(int(text[:4]), int(text[5:7]), 1)
    return date.fromisoformat(text[:10])
