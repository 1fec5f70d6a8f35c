"""
Syllabus progress: status tallies for the student overview, exam-type lesson
filters and the admin lesson editor's validation.
"""

from __future__ import annotations

from typing import Any

from school_client.errors import ValidationError

COMPLETED = "Completed"
MISSED = "Missed"
PENDING = "Pending"
LESSON_STATUSES = (COMPLETED, MISSED, PENDING)

OVERALL = "Overall"
EXAM_FILTERS = (OVERALL, "AT1", "UT1", "AT2", "UT2", "SA1", "AT3", "UT3", "AT4", "UT4", "SA2")


def _blank() -> dict[str, int]:
    return {"Done": 0, "Missed": 0, "Pending": 0, "Total": 0}


def _tally(summary: dict[str, Any], status: str | None, count: Any) -> None:
    try:
        n = int(count or 0)
    except (TypeError, ValueError):
        n = 0
    if status == COMPLETED:
        summary["Done"] = n
    elif status == MISSED:
        summary["Missed"] = n
    elif status == PENDING:
        summary["Pending"] = n
    summary["Total"] += n


def summarize_overview(
    total_stats: list[dict[str, Any]], subject_stats: list[dict[str, Any]]
) -> tuple[dict[str, int], list[dict[str, Any]]]:
    """
    Fold status counts into Done/Missed/Pending/Total.

    Returns:
        (overall summary, per-subject summaries in first-seen order).
    """
    overall = _blank()
    for row in total_stats or []:
        _tally(overall, row.get("status"), row.get("count"))

    subjects: dict[Any, dict[str, Any]] = {}
    for row in subject_stats or []:
        sid = row.get("syllabus_id")
        if sid not in subjects:
            subjects[sid] = {"id": sid, "name": row.get("subject_name"), **_blank()}
        _tally(subjects[sid], row.get("status"), row.get("count"))
    return overall, list(subjects.values())


def progress(summary: dict[str, Any]) -> float:
    """Fraction done in [0, 1]."""
    total = summary.get("Total") or 0
    return (summary.get("Done") or 0) / total if total else 0.0


def filter_lessons(lessons: list[dict[str, Any]], exam_type: str = OVERALL) -> list[dict[str, Any]]:
    """exam_type may be a comma-separated list like "AT1, SA1"."""
    if exam_type == OVERALL:
        return list(lessons)
    return [l for l in lessons if l.get("exam_type") and exam_type in l["exam_type"]]


def lesson_counts(lessons: list[dict[str, Any]]) -> dict[str, int]:
    stats = {"completed": 0, "missed": 0, "left": 0}
    for l in lessons:
        if l.get("status") == COMPLETED:
            stats["completed"] += 1
        elif l.get("status") == MISSED:
            stats["missed"] += 1
        else:
            stats["left"] += 1
    return stats


def validate_lessons(
    class_group: str | None, subject: str | None, teacher_id: Any, lessons: list[dict[str, Any]]
) -> list[dict[str, str]]:
    """
    Check the admin syllabus form and keep only complete lessons.

    Raises:
        ValidationError: Selection missing, a named lesson has no date, or no
            complete lesson remains.
    """
    if not class_group or not subject or not teacher_id:
        raise ValidationError("Please select a class, subject, and teacher.")
    if any((l.get("lessonName") or "").strip() and not (l.get("dueDate") or "").strip() for l in lessons):
        raise ValidationError("All lessons must have a due date.")
    valid = [
        {"lessonName": l["lessonName"].strip(), "dueDate": l["dueDate"].strip()}
        for l in lessons
        if (l.get("lessonName") or "").strip() and (l.get("dueDate") or "").strip()
    ]
    if not valid:
        raise ValidationError("Please add at least one lesson.")
    return valid


def editor_lessons(syllabus: dict[str, Any] | None) -> list[dict[str, str]]:
    """Server lessons -> editor rows; one blank row when there are none."""
    rows = [
        {"lessonName": l.get("lesson_name") or "", "dueDate": str(l.get("due_date") or "").split("T")[0]}
        for l in (syllabus or {}).get("lessons") or []
    ]
    return rows or [{"lessonName": "", "dueDate": ""}]


def filter_by_class(items: list[dict[str, Any]], class_group: str) -> list[dict[str, Any]]:
    if not class_group or class_group == "All":
        return list(items)
    return [i for i in items if i.get("class_group") == class_group]
