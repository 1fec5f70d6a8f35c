"""Homework assignments and submissions."""

from __future__ import annotations

from typing import Any

from school_client.domains.dates import sort_key
from school_client.errors import ValidationError

PENDING = "Pending"
SUBMITTED = "Submitted"
GRADED = "Graded"

HOMEWORK_TYPES = ("PDF", "Written")
DEFAULT_HOMEWORK_TYPE = "PDF"


def submission_status(item: dict[str, Any]) -> str:
    """Pending until a submission exists; then the server status (default Submitted)."""
    if not item.get("submission_id"):
        return PENDING
    status = item.get("status") or SUBMITTED
    return status if status in (SUBMITTED, GRADED) else SUBMITTED


def sort_student_assignments(items: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Pending first, then newest due date first."""
    by_due = sorted(items, key=lambda a: sort_key(a.get("due_date")), reverse=True)
    return sorted(by_due, key=lambda a: 0 if submission_status(a) == PENDING else 1)


def can_delete_submission(item: dict[str, Any]) -> bool:
    return bool(item.get("submission_id")) and submission_status(item) != GRADED


def validate_assignment(form: dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: Title, class, subject or due date missing.
    """
    required = ("title", "class_group", "subject", "due_date")
    if any(not str(form.get(k) or "").strip() for k in required):
        raise ValidationError("Title, Class, Subject, and Due Date are required.")


def assignment_fields(form: dict[str, Any], teacher_id: Any = None) -> dict[str, Any]:
    """Multipart text fields; teacher_id only on create."""
    fields = {
        "title": form.get("title", "").strip(),
        "description": form.get("description") or "",
        "due_date": form.get("due_date"),
        "class_group": form.get("class_group"),
        "subject": form.get("subject"),
        "homework_type": form.get("homework_type") or DEFAULT_HOMEWORK_TYPE,
    }
    if teacher_id is not None:
        fields["teacher_id"] = teacher_id
    return fields


def validate_written_answer(answer: str | None) -> str:
    text = (answer or "").strip()
    if not text:
        raise ValidationError("Your answer cannot be empty.")
    return text
