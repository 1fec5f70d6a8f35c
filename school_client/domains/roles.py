"""Roles and the per-role permission checks used to gate mutations."""

from __future__ import annotations

from typing import Any

from school_client.errors import PermissionDeniedError

ADMIN = "admin"
TEACHER = "teacher"
STUDENT = "student"
OTHERS = "others"
ROLES = (ADMIN, TEACHER, STUDENT, OTHERS)

ROLE_LABELS = {
    ADMIN: "Admin",
    TEACHER: "Teacher",
    STUDENT: "Student",
    OTHERS: "Others",
}


def role_of(user: dict[str, Any] | None) -> str:
    """Lower-cased role of a user dict ('' when signed out)."""
    if not user:
        return ""
    return str(user.get("role") or "").strip().lower()


def has_role(user: dict[str, Any] | None, *roles: str) -> bool:
    return role_of(user) in roles


def is_privileged(user: dict[str, Any] | None) -> bool:
    """Admins and teachers can create and manage content."""
    return has_role(user, ADMIN, TEACHER)


def can_manage_calendar(user: dict[str, Any] | None) -> bool:
    return has_role(user, ADMIN)


def can_manage_dictionary(user: dict[str, Any] | None) -> bool:
    return has_role(user, ADMIN, TEACHER)


def can_edit_food_menu(user: dict[str, Any] | None) -> bool:
    return has_role(user, ADMIN)


def is_library_admin(user: dict[str, Any] | None) -> bool:
    return has_role(user, ADMIN)


def can_edit_feedback(user: dict[str, Any] | None) -> bool:
    return has_role(user, TEACHER)


def require_role(user: dict[str, Any] | None, *roles: str, action: str = "do this") -> None:
    """
    Raise unless the user holds one of `roles`.

    Raises:
        PermissionDeniedError: When the role is not allowed.
    """
    if not has_role(user, *roles):
        allowed = " or ".join(ROLE_LABELS.get(r, r) for r in roles)
        raise PermissionDeniedError(f"Only {allowed} users can {action}.")
