"""Student behaviour feedback rows."""

from __future__ import annotations

from typing import Any

from school_client.domains.roles import can_edit_feedback

BEHAVIOR_STATUSES = ("Good", "Average", "Poor")
EDITABLE_FIELDS = ("behavior_status", "remarks")


def normalize_rows(rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Missing status becomes None and missing remarks become ''."""
    return [
        {**r, "behavior_status": r.get("behavior_status") or None, "remarks": r.get("remarks") or ""}
        for r in rows
    ]


def update_row(
    rows: list[dict[str, Any]],
    student_id: Any,
    field: str,
    value: Any,
    user: dict[str, Any] | None,
) -> tuple[list[dict[str, Any]], bool]:
    """
    Apply one edit. Only teachers edit; for anyone else rows come back unchanged.

    Returns:
        (rows, changed) where changed tells the caller to flag unsaved changes.
    """
    if not can_edit_feedback(user) or field not in EDITABLE_FIELDS:
        return rows, False
    if field == "behavior_status" and value is not None and value not in BEHAVIOR_STATUSES:
        raise ValueError(f"Unknown behaviour status: {value}")
    updated = [{**r, field: value} if r.get("student_id") == student_id else r for r in rows]
    return updated, True


def feedback_payload(teacher_id: Any, class_group: str, rows: list[dict[str, Any]]) -> dict[str, Any]:
    """Body for POST /feedback."""
    return {
        "teacher_id": teacher_id,
        "class_group": class_group,
        "feedback_data": [
            {
                "student_id": r.get("student_id"),
                "behavior_status": r.get("behavior_status"),
                "remarks": r.get("remarks"),
            }
            for r in rows
        ],
    }


def first_id(items: list[dict[str, Any]]) -> Any:
    """Auto-select helper: id of the first option or None."""
    return items[0].get("id") if items else None
