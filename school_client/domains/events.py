"""School events."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from school_client.domains.dates import sort_key
from school_client.errors import ValidationError

ALL_TARGETS = "All"


def sort_events(events: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Newest first."""
    return sorted(events, key=lambda e: sort_key(e.get("event_datetime")), reverse=True)


def format_event_datetime(when: datetime) -> str:
    """Server wants local wall time, "YYYY-MM-DD HH:MM:00"."""
    return when.strftime("%Y-%m-%d %H:%M:00")


def validate_event(title: Any) -> str:
    """Return the stripped title; raise ValidationError when blank."""
    title = (title or "").strip()
    if not title:
        raise ValidationError("Event Title is mandatory.")
    return title


def event_payload(form: dict[str, Any], when: datetime, user_id: Any) -> dict[str, Any]:
    title = validate_event(form.get("title"))
    return {
        "title": title,
        "category": form.get("category") or "",
        "event_datetime": format_event_datetime(when),
        "location": form.get("location") or "",
        "description": form.get("description") or "",
        "target_class": form.get("target_class") or ALL_TARGETS,
        "userId": user_id,
    }


def target_options(classes: list[str]) -> list[str]:
    return [ALL_TARGETS, *[c for c in classes if c != ALL_TARGETS]]
