"""
Academic calendar: month grid and per-day event grouping.

Events come from GET /calendar as a mapping of "YYYY-MM-DD" to a list of event dicts
({id, name, type, time, description, event_date}).
"""

from __future__ import annotations

import calendar as _cal
from datetime import date
from typing import Any

DEFAULT_EVENT_TYPE = "Meeting"

# type -> (display name, colour)
EVENT_TYPES: dict[str, tuple[str, str]] = {
    "Meeting": ("Meeting", "#0077B6"),
    "Event": ("Event", "#FF9F1C"),
    "Festival": ("Festival", "#9B59B6"),
    "Holiday (General)": ("Holiday", "#E63946"),
    "Exam": ("Exam", "#2A9D8F"),
    "Other": ("Other", "#6C757D"),
}

WEEKDAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def format_date_key(d: date) -> str:
    return d.strftime("%Y-%m-%d")


def event_display_name(event_type: str | None) -> str:
    return EVENT_TYPES.get(event_type or DEFAULT_EVENT_TYPE, (event_type or DEFAULT_EVENT_TYPE, ""))[0]


def event_color(event_type: str | None) -> str:
    return EVENT_TYPES.get(event_type or DEFAULT_EVENT_TYPE, EVENT_TYPES["Other"])[1]


def shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    """Move `offset` months forward (negative goes back)."""
    idx = year * 12 + (month - 1) + offset
    return idx // 12, idx % 12 + 1


def month_grid(year: int, month: int) -> list[int | None]:
    """
    Day cells for a Sunday-first month view.

    Returns:
        One None per weekday before the 1st, then 1..days_in_month.
    """
    first_weekday, days = _cal.monthrange(year, month)
    # monthrange is Monday=0; shift to Sunday=0
    leading = (first_weekday + 1) % 7
    return [None] * leading + list(range(1, days + 1))


def events_on(events_by_date: dict[str, list[dict[str, Any]]], d: date) -> list[dict[str, Any]]:
    return list(events_by_date.get(format_date_key(d)) or [])


def month_items(
    events_by_date: dict[str, list[dict[str, Any]]], year: int, month: int
) -> list[dict[str, Any]]:
    """
    Flatten the month's events for the list under the grid.

    Each item gets `day` and `formatted_date` ("Mar 05"); items are ordered by day,
    keeping server order within a day.
    """
    prefix = f"{year:04d}-{month:02d}-"
    items: list[dict[str, Any]] = []
    for key in sorted(k for k in events_by_date if k.startswith(prefix)):
        try:
            day = int(key[len(prefix):])
        except ValueError:
            continue
        label = date(year, month, day).strftime("%b %d")
        for event in events_by_date.get(key) or []:
            items.append({**event, "day": day, "date_key": key, "formatted_date": label})
    items.sort(key=lambda e: e["day"])
    return items


def day_cells(
    events_by_date: dict[str, list[dict[str, Any]]],
    year: int,
    month: int,
    today: date | None = None,
) -> list[dict[str, Any] | None]:
    """Month grid decorated for rendering: events, today flag, Sunday flag, dot colour."""
    today = today or date.today()
    cells: list[dict[str, Any] | None] = []
    for i, day in enumerate(month_grid(year, month)):
        if day is None:
            cells.append(None)
            continue
        d = date(year, month, day)
        events = events_on(events_by_date, d)
        cells.append(
            {
                "day": day,
                "date_key": format_date_key(d),
                "events": events,
                "is_today": d == today,
                "is_sunday": i % 7 == 0,
                "color": event_color(events[0].get("type")) if events else None,
            }
        )
    return cells


def event_payload(details: dict[str, Any], date_key: str, admin_id: Any) -> dict[str, Any]:
    """Body for POST /calendar and PUT /calendar/{id}."""
    return {
        "name": (details.get("name") or "").strip(),
        "time": details.get("time") or "",
        "description": details.get("description") or "",
        "type": details.get("type") or DEFAULT_EVENT_TYPE,
        "event_date": date_key,
        "adminId": admin_id,
    }
