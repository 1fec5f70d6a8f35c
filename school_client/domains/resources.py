"""Textbook links per class and syllabus board."""

from __future__ import annotations

from typing import Any

from school_client.errors import ValidationError

BOARDS = ("state", "central")
BOARD_LABELS = {"state": "State Board", "central": "Central Board"}
ALL = "All"
TEXTBOOK = "textbook"
REQUIRED = ("class_group", "url", "syllabus_type", "subject_name")


def displayable_classes(classes: list[str]) -> list[str]:
    return [c for c in classes if str(c).startswith("Class") or c in ("LKG", "UKG")]


def filter_resources(items: list[dict[str, Any]], board: str, class_group: str = ALL) -> list[dict[str, Any]]:
    out = [i for i in items if i.get("syllabus_type") == board]
    if class_group and class_group != ALL:
        out = [i for i in out if i.get("class_group") == class_group]
    return out


def validate_resource(form: dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: Class, URL, board or subject missing, or an unknown board.
    """
    if any(not str(form.get(k) or "").strip() for k in REQUIRED):
        raise ValidationError("Required fields missing.")
    if form["syllabus_type"] not in BOARDS:
        raise ValidationError(f"Unknown board: {form['syllabus_type']}")


def resource_fields(form: dict[str, Any]) -> dict[str, Any]:
    validate_resource(form)
    fields = {k: str(form[k]).strip() for k in REQUIRED}
    fields["resource_type"] = TEXTBOOK
    return fields
