"""Online classes: per-role visibility, live/recorded split, form validation."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from school_client.domains.dates import parse_datetime, sort_key
from school_client.domains.roles import ADMIN, STUDENT, TEACHER, role_of
from school_client.errors import ValidationError

LIVE = "live"
RECORDED = "recorded"
ALL_CLASSES = "All"


def visible_classes(classes: list[dict[str, Any]], user: dict[str, Any] | None) -> list[dict[str, Any]]:
    """
    Admins see everything; teachers see classes they teach or created; students
    see their class and school-wide ("All") classes. Other roles see nothing.
    """
    role = role_of(user)
    if role == ADMIN:
        return list(classes)
    uid = str((user or {}).get("id"))
    if role == TEACHER:
        return [c for c in classes if str(c.get("teacher_id")) == uid or str(c.get("created_by")) == uid]
    if role == STUDENT:
        own = (user or {}).get("class_group")
        return [c for c in classes if c.get("class_group") in (own, ALL_CLASSES)]
    return []


def split_classes(classes: list[dict[str, Any]]) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    """(live soonest first, recorded newest first)."""
    live = sorted((c for c in classes if c.get("class_type") == LIVE), key=lambda c: sort_key(c.get("class_datetime")))
    recorded = sorted(
        (c for c in classes if c.get("class_type") == RECORDED),
        key=lambda c: sort_key(c.get("class_datetime")),
        reverse=True,
    )
    return live, recorded


def is_upcoming(item: dict[str, Any], now: datetime | None = None) -> bool:
    when = parse_datetime(item.get("class_datetime"))
    return when is not None and when >= (now or datetime.now())


def validate_online_class(form: dict[str, Any], class_type: str, has_video: bool, editing: bool) -> None:
    """
    Raises:
        ValidationError: Missing title/class/subject, missing meet link for live
            classes, or missing topic/video for new recorded classes.
    """
    if not form.get("title") or not form.get("class_group") or not form.get("subject"):
        raise ValidationError("Title, Class, and Subject are required.")
    if editing:
        return
    if class_type == LIVE and not form.get("meet_link"):
        raise ValidationError("Meeting Link is required.")
    if class_type == RECORDED and (not has_video or not form.get("topic")):
        raise ValidationError("Topic and a video file are required.")


def class_fields(form: dict[str, Any], class_datetime: datetime) -> dict[str, Any]:
    return {
        "title": form.get("title"),
        "class_group": form.get("class_group"),
        "subject": form.get("subject"),
        "teacher_id": form.get("teacher_id"),
        "class_datetime": class_datetime.isoformat(),
        "description": form.get("description") or "",
    }
