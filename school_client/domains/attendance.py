"""
Attendance views: period query parameters, percentages, per-student bands and the
live marking sheet.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any

from school_client.errors import ValidationError

VIEW_OVERALL = "overall"
VIEW_DAILY = "daily"
VIEW_MONTHLY = "monthly"
VIEW_YEARLY = "yearly"
VIEW_CUSTOM = "custom"
VIEW_MODES = (VIEW_OVERALL, VIEW_DAILY, VIEW_MONTHLY, VIEW_YEARLY, VIEW_CUSTOM)

CLASS_GROUPS = ["LKG", "UKG", *[f"Class {n}" for n in range(1, 11)]]

PRESENT = "Present"
ABSENT = "Absent"
STATUSES = (PRESENT, ABSENT)

BAND_GOOD = "good"
BAND_WARNING = "warning"
BAND_POOR = "poor"

DEFAULT_RANGE_DAYS = 30


def default_range(today: date | None = None) -> tuple[date, date]:
    """Custom-range defaults: the last 30 days up to today."""
    today = today or date.today()
    return today - timedelta(days=DEFAULT_RANGE_DAYS), today


def period_params(
    view_mode: str,
    selected_date: date | None = None,
    from_date: date | None = None,
    to_date: date | None = None,
) -> dict[str, Any]:
    """
    Query parameters for a history/summary request.

    Raises:
        ValueError: Unknown view mode.
        ValidationError: A custom range ends before it starts.
    """
    if view_mode not in VIEW_MODES:
        raise ValueError(f"Unknown view mode: {view_mode}")
    selected_date = selected_date or date.today()
    params: dict[str, Any] = {"viewMode": view_mode}
    if view_mode == VIEW_DAILY:
        params["date"] = selected_date.strftime("%Y-%m-%d")
    elif view_mode == VIEW_MONTHLY:
        params["date"] = selected_date.strftime("%Y-%m")
    elif view_mode == VIEW_YEARLY:
        params["targetYear"] = selected_date.year
    elif view_mode == VIEW_CUSTOM:
        start, end = default_range()
        start = from_date or start
        end = to_date or end
        if end < start:
            raise ValidationError("End date must be on or after the start date.")
        params["startDate"] = start.strftime("%Y-%m-%d")
        params["endDate"] = end.strftime("%Y-%m-%d")
    return params


def _days(value: Any) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


def attendance_percentage(summary: dict[str, Any] | None) -> str:
    """present/total as a one-decimal string; "0.0" when there are no days."""
    summary = summary or {}
    total = _days(summary.get("total_days"))
    if total <= 0:
        return "0.0"
    return f"{_days(summary.get('present_days')) / total * 100:.1f}"


def student_percentage(row: dict[str, Any]) -> float:
    total = _days(row.get("total_days"))
    if total <= 0:
        return 0.0
    return _days(row.get("present_days")) / total * 100


def percentage_band(percentage: float) -> str:
    if percentage >= 75:
        return BAND_GOOD
    if percentage >= 50:
        return BAND_WARNING
    return BAND_POOR


def search_students(rows: list[dict[str, Any]], query: str) -> list[dict[str, Any]]:
    """Case-insensitive name filter."""
    q = (query or "").strip().lower()
    if not q:
        return list(rows)
    return [r for r in rows if q in str(r.get("full_name") or "").lower()]


def unique_classes(assignments: list[dict[str, Any]]) -> list[str]:
    """Distinct class groups in first-seen order."""
    seen: list[str] = []
    for a in assignments:
        cg = a.get("class_group")
        if cg and cg not in seen:
            seen.append(cg)
    return seen


def subjects_for_class(assignments: list[dict[str, Any]], class_group: str | None) -> list[str]:
    return [a["subject_name"] for a in assignments if a.get("class_group") == class_group and a.get("subject_name")]


def default_sheet(rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Students without a recorded status start as Present."""
    return [{**r, "status": r.get("status") or PRESENT} for r in rows]


def set_status(rows: list[dict[str, Any]], student_id: Any, status: str) -> list[dict[str, Any]]:
    if status not in STATUSES:
        raise ValueError(f"Unknown attendance status: {status}")
    return [{**r, "status": status} if r.get("id") == student_id else r for r in rows]


def sheet_payload(
    rows: list[dict[str, Any]],
    class_group: str,
    subject_name: str,
    period_number: Any,
    on_date: str,
    teacher_id: Any,
) -> dict[str, Any]:
    """Body for POST /attendance."""
    return {
        "class_group": class_group,
        "subject_name": subject_name,
        "period_number": period_number,
        "date": on_date,
        "teacher_id": teacher_id,
        "attendanceData": [{"student_id": r.get("id"), "status": r.get("status")} for r in rows],
    }


def sheet_counts(rows: list[dict[str, Any]]) -> dict[str, int]:
    present = sum(1 for r in rows if r.get("status") == PRESENT)
    return {"present": present, "absent": len(rows) - present, "total": len(rows)}
