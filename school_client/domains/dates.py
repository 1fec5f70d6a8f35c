"""Parsing for the ISO date/datetime strings the API returns."""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Any


def parse_datetime(value: Any) -> datetime | None:
    """Parse an ISO string ("2024-03-05", "2024-03-05T10:00:00Z", ...); None if unparseable."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        try:
            parsed = datetime.strptime(text[:10], "%Y-%m-%d")
        except ValueError:
            return None
    # compare everything as naive local wall time
    return parsed.replace(tzinfo=None)


def parse_date(value: Any) -> date | None:
    dt = parse_datetime(value)
    return dt.date() if dt else None


def sort_key(value: Any) -> datetime:
    """Sort key that puts missing dates first in ascending order."""
    return parse_datetime(value) or datetime.min


def display_date(value: Any, fmt: str = "%d %b %Y") -> str:
    d = parse_datetime(value)
    return d.strftime(fmt) if d else ""
