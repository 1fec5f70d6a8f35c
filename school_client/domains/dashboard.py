"""Quick-access tiles shown on each role's dashboard, and the tile search."""

from __future__ import annotations

from typing import Any

from school_client.domains.roles import ADMIN, OTHERS, STUDENT, TEACHER


def _tile(tile_id: str, title: str, module: str | None, icon: str) -> dict[str, Any]:
    return {"id": tile_id, "title": title, "module": module, "icon": icon}


# module None: screen served by the web portal only.
QUICK_ACCESS: dict[str, list[dict[str, Any]]] = {
    ADMIN: [
        _tile("qa1", "LM", "users", "👥"),
        _tile("qa2", "Time Table", None, "🗓️"),
        _tile("qa3", "Attendance", "attendance", "✅"),
        _tile("qa4", "Homework", "homework", "📚"),
        _tile("qa5", "Gallery", None, "🖼️"),
        _tile("qa6", "About Us", None, "🏫"),
        _tile("qa7", "Calendar", "calendar", "📅"),
        _tile("qa8", "Exams", "exams", "📝"),
        _tile("qa9", "Events", "events", "🎉"),
        _tile("qa10", "Syllabus", "syllabus", "📖"),
        _tile("qa11", "Textbooks", "resources", "📘"),
        _tile("qa12", "Library", "library", "🏛️"),
        _tile("qa13", "Food Menu", "food_menu", "🍱"),
        _tile("qa14", "Kitchen", "kitchen", "🍳"),
        _tile("qa15", "Dictionary", "dictionary", "🔤"),
        _tile("qa16", "Online class", "online_classes", "💻"),
        _tile("qa17", "Student Feedback", "feedback", "💬"),
    ],
    TEACHER: [
        _tile("qa1", "Timetable", None, "🗓️"),
        _tile("qa2", "Attendance", "attendance", "✅"),
        _tile("qa3", "Home Work", "homework", "📚"),
        _tile("qa4", "Gallery", None, "🖼️"),
        _tile("qa5", "About Us", None, "🏫"),
        _tile("qa6", "Exams", "exams", "📝"),
        _tile("qa7", "PTM", None, "🤝"),
        _tile("qa8", "Online class", "online_classes", "💻"),
        _tile("qa9", "Food Menu", "food_menu", "🍱"),
        _tile("qa10", "Health Info", None, "🩺"),
        _tile("qa11", "Group chat", None, "💬"),
        _tile("qa12", "Events", "events", "🎉"),
        _tile("qa13", "Exam Schedules", None, "🗒️"),
        _tile("qa14", "Digital Labs", None, "🔬"),
        _tile("qa15", "Progress Reports", "feedback", "📈"),
        _tile("qa16", "Study Materials", "library", "📂"),
        _tile("qa17", "Syllabus Tracking", "syllabus", "📖"),
        _tile("qa18", "Textbooks", "resources", "📘"),
        _tile("qa19", "Create Ad", None, "📣"),
        _tile("qa20", "Calendar", "calendar", "📅"),
        _tile("qa21", "Dictionary", "dictionary", "🔤"),
    ],
    STUDENT: [
        _tile("qa1", "Timetable", None, "🗓️"),
        _tile("qa2", "Attendance", "attendance", "✅"),
        _tile("qa3", "Home Work", "homework", "📚"),
        _tile("qa4", "Gallery", None, "🖼️"),
        _tile("qa5", "About Us", None, "🏫"),
        _tile("qa6", "Exams", "exams", "📝"),
        _tile("qa7", "My Performance", "performance", "🏆"),
        _tile("qa8", "Syllabus", "syllabus", "📖"),
        _tile("qa9", "Online class", "online_classes", "💻"),
        _tile("qa10", "Events", "events", "🎉"),
        _tile("qa11", "Library", "library", "🏛️"),
        _tile("qa12", "Textbooks", "resources", "📘"),
        _tile("qa13", "Food Menu", "food_menu", "🍱"),
        _tile("qa14", "Dictionary", "dictionary", "🔤"),
        _tile("qa15", "Calendar", "calendar", "📅"),
    ],
    OTHERS: [
        _tile("qa1", "Gallery", None, "🖼️"),
        _tile("qa2", "About Us", None, "🏫"),
        _tile("qa3", "Lunch Menu", "food_menu", "🍱"),
        _tile("qa4", "Kitchen", "kitchen", "🍳"),
        _tile("qa5", "Calendar", "calendar", "📅"),
    ],
}


def quick_access(role: str) -> list[dict[str, Any]]:
    """Tiles for a role; unknown roles get none."""
    return list(QUICK_ACCESS.get((role or "").lower(), []))


def filter_items(items: list[dict[str, Any]], query: str) -> list[dict[str, Any]]:
    """Case-insensitive substring match on tile title; blank query keeps everything."""
    q = (query or "").strip().lower()
    if not q:
        return list(items)
    return [item for item in items if q in str(item.get("title", "")).lower()]


def display_name(profile: dict[str, Any] | None, user: dict[str, Any] | None) -> str:
    """Header name: profile full name, then user full name, then username."""
    for source in (profile, user):
        if source and source.get("full_name"):
            return str(source["full_name"])
    return str((user or {}).get("username") or "")
