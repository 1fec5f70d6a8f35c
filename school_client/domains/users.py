"""
User management: category grouping, form validation and edit diffs.
"""

from __future__ import annotations

import json
import re
from typing import Any

from school_client.domains.roles import ADMIN, OTHERS, STUDENT, TEACHER
from school_client.errors import ValidationError

CLASS_CATEGORIES = [
    "Admins", "Teachers", "Others", "LKG", "UKG",
    *[f"Class {n}" for n in range(1, 11)],
]
STUDENT_CLASSES = CLASS_CATEGORIES[3:]

_SUBJECT_RE = re.compile(r"^[A-Za-z0-9\s]+$")
# fields never sent as diffs
_DIFF_SKIP = ("subjects_taught", "password")


def _roll(value: Any) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return 0


def _sort_key(user: dict[str, Any]) -> tuple[int, str]:
    return (_roll(user.get("roll_no")), str(user.get("full_name") or "").lower())


def _sorted(users: list[dict[str, Any]]) -> list[dict[str, Any]]:
    # numeric roll order when any roll number exists, else by name
    if any(_roll(u.get("roll_no")) > 0 for u in users):
        return sorted(users, key=_sort_key)
    return sorted(users, key=lambda u: str(u.get("full_name") or "").lower())


def search_users(users: list[dict[str, Any]], query: str) -> list[dict[str, Any]]:
    q = (query or "").strip().lower()
    if not q:
        return list(users)
    fields = ("full_name", "username", "roll_no", "admission_no")
    return [u for u in users if any(q in str(u.get(f) or "").lower() for f in fields)]


def group_users(users: list[dict[str, Any]], query: str = "") -> dict[str, list[dict[str, Any]]]:
    """Bucket users into CLASS_CATEGORIES after the search filter."""
    filtered = search_users(users, query)
    groups: dict[str, list[dict[str, Any]]] = {}
    for category in CLASS_CATEGORIES:
        if category == "Admins":
            members = [u for u in filtered if u.get("role") == ADMIN]
        elif category == "Others":
            members = [u for u in filtered if u.get("role") == OTHERS]
        elif category == "Teachers":
            members = [u for u in filtered if u.get("role") == TEACHER or u.get("class_group") == "Teachers"]
        else:
            members = [u for u in filtered if u.get("class_group") == category and u.get("role") not in (ADMIN, OTHERS, TEACHER)]
        groups[category] = _sorted(members)
    return groups


def validate_user_form(form: dict[str, Any], editing: bool) -> None:
    """
    Raises:
        ValidationError: First failing rule, checked in the order the form shows them.
    """
    if not form.get("username") or not form.get("full_name"):
        raise ValidationError("Username and Full Name are required.")
    if form.get("role") == STUDENT and (not form.get("roll_no") or not form.get("class_group")):
        raise ValidationError("Class and Roll Number are mandatory for students.")
    if not editing and not form.get("password"):
        raise ValidationError("Password cannot be empty for new users.")


def _same(a: Any, b: Any) -> bool:
    # loose compare so 5 and "5" count as unchanged
    if a is None or b is None:
        return (a in (None, "")) and (b in (None, ""))
    return str(a) == str(b)


def changed_fields(original: dict[str, Any], current: dict[str, Any]) -> dict[str, Any]:
    """Edit diff: changed scalar fields, a new password, and teacher subject lists."""
    changes = {
        k: v for k, v in current.items()
        if k not in _DIFF_SKIP and not _same(original.get(k), v)
    }
    if current.get("password") and current.get("password") != original.get("password"):
        changes["password"] = current["password"]
    if original.get("role") == TEACHER:
        before = json.dumps(original.get("subjects_taught") or [])
        after = json.dumps(current.get("subjects_taught") or [])
        if before != after:
            changes["subjects_taught"] = current.get("subjects_taught") or []
    return changes


def create_payload(form: dict[str, Any]) -> dict[str, Any]:
    payload = dict(form)
    if payload.get("role") != TEACHER:
        payload.pop("subjects_taught", None)
    return payload


def validate_subject_name(name: str) -> str:
    subject = (name or "").strip()
    if not subject or not _SUBJECT_RE.match(subject):
        raise ValidationError("Subject names should not contain special characters.")
    return subject


def add_subject(subjects: list[str] | None, name: str) -> list[str]:
    subject = validate_subject_name(name)
    current = list(subjects or [])
    return current if subject in current else [*current, subject]


def new_user_form() -> dict[str, Any]:
    return {
        "username": "", "password": "", "full_name": "", "role": STUDENT,
        "class_group": "LKG", "subjects_taught": [],
    }
