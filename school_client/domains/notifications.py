"""Notification filtering, icon categories and in-app link routing."""

from __future__ import annotations

from typing import Any

FILTER_ALL = "all"
FILTER_UNREAD = "unread"
FILTER_READ = "read"
FILTERS = (FILTER_ALL, FILTER_UNREAD, FILTER_READ)

# (keywords, category, icon), first match wins
_ICON_RULES: list[tuple[tuple[str, ...], str, str]] = [
    (("homework", "assignment"), "homework", "📚"),
    (("submit", "submission"), "submission", "📤"),
    (("event",), "event", "🎉"),
    (("calendar",), "calendar", "📅"),
    (("timetable", "schedule"), "timetable", "🗓️"),
    (("exam",), "exam", "📝"),
    (("report",), "report", "📈"),
    (("syllabus",), "syllabus", "📖"),
    (("gallery",), "gallery", "🖼️"),
]
DEFAULT_CATEGORY = ("default", "🔔")


def is_read(notification: dict[str, Any]) -> bool:
    return bool(notification.get("is_read"))


def unread_count(items: list[dict[str, Any]] | None) -> int:
    return sum(1 for n in items or [] if not is_read(n))


def filter_notifications(items: list[dict[str, Any]], status: str = FILTER_ALL) -> list[dict[str, Any]]:
    """Keep unread, read, or all notifications."""
    if status == FILTER_UNREAD:
        return [n for n in items if not is_read(n)]
    if status == FILTER_READ:
        return [n for n in items if is_read(n)]
    return list(items)


def icon_category(title: str | None) -> tuple[str, str]:
    """Return (category, icon) from keywords in the title."""
    t = (title or "").lower()
    for keywords, category, icon in _ICON_RULES:
        if any(k in t for k in keywords):
            return category, icon
    return DEFAULT_CATEGORY


def resolve_link(link: str | None) -> tuple[str, dict[str, Any]] | None:
    """
    Map a notification link to (screen, params).

    Known shapes: calendar, gallery/<album title>, homework/<id>, submissions/<id>,
    helpdesk/ticket/<id>. Anything else returns None.
    """
    if not link:
        return None
    parts = [p for p in link.strip().strip("/").split("/") if p]
    if not parts:
        return None
    head = parts[0].lower()
    if head == "calendar":
        return "calendar", {}
    if head == "gallery" and len(parts) > 1:
        return "album_detail", {"title": "/".join(parts[1:])}
    if head == "homework" and len(parts) > 1:
        return "homework", {"homework_id": parts[1]}
    if head == "submissions" and len(parts) > 1:
        return "homework_submissions", {"assignment_id": parts[1]}
    if head == "helpdesk" and len(parts) > 2 and parts[1].lower() == "ticket":
        return "helpdesk_ticket", {"ticket_id": parts[2]}
    return None


def with_read_flag(
    items: list[dict[str, Any]], notification_id: Any, read: bool = True
) -> list[dict[str, Any]]:
    """Copy of `items` with one notification's is_read set."""
    return [
        {**n, "is_read": read} if n.get("id") == notification_id else n
        for n in items
    ]
