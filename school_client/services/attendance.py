"""Attendance endpoints for the student, teacher and admin views."""

from __future__ import annotations

from datetime import date
from typing import Any

from school_client.domains.attendance import default_sheet, period_params, sheet_payload
from school_client.domains.roles import TEACHER, require_role
from school_client.errors import ValidationError
from school_client.services.base import BaseService, as_list
from school_client.utils.logger import get_logger

logger = get_logger(__name__)


def _as_dict(payload: Any) -> dict[str, Any]:
    return payload if isinstance(payload, dict) else {}


class AttendanceService(BaseService):
    def student_history(
        self,
        student_id: Any,
        view_mode: str,
        selected_date: date | None = None,
        from_date: date | None = None,
        to_date: date | None = None,
        as_admin: bool = False,
    ) -> dict[str, Any]:
        """GET a student's {summary, history}; admins use the admin endpoint."""
        base = "/attendance/student-history-admin" if as_admin else "/attendance/my-history"
        return _as_dict(
            self._api.get(
                f"{base}/{student_id}",
                params=period_params(view_mode, selected_date, from_date, to_date),
                error_message="Could not load attendance history.",
            )
        )

    def my_history(self, view_mode: str, **period: Any) -> dict[str, Any]:
        return self.student_history(self.user_id, view_mode, **period)

    def teacher_assignments(self, teacher_id: Any = None) -> list[dict[str, Any]]:
        return as_list(
            self._api.get(
                f"/teacher-assignments/{teacher_id or self.user_id}",
                error_message="Could not fetch assignments.",
            )
        )

    def teacher_summary(
        self,
        class_group: str,
        subject_name: str,
        view_mode: str,
        selected_date: date | None = None,
        from_date: date | None = None,
        to_date: date | None = None,
    ) -> dict[str, Any]:
        params = {
            "teacherId": self.user_id,
            "classGroup": class_group,
            "subjectName": subject_name,
            **period_params(view_mode, selected_date, from_date, to_date),
        }
        return _as_dict(
            self._api.get("/attendance/teacher-summary", params=params, error_message="Could not retrieve data.")
        )

    def admin_summary(
        self,
        class_group: str,
        view_mode: str,
        selected_date: date | None = None,
        from_date: date | None = None,
        to_date: date | None = None,
    ) -> dict[str, Any]:
        params = {"classGroup": class_group, **period_params(view_mode, selected_date, from_date, to_date)}
        return _as_dict(
            self._api.get("/attendance/admin-summary", params=params, error_message="Could not fetch summary.")
        )

    def load_sheet(
        self, class_group: str, on_date: str, period_number: Any, subject_name: str
    ) -> tuple[bool, list[dict[str, Any]]]:
        """
        Live marking: whether the period is already marked, and the student sheet.

        Returns:
            (is_marked, rows) with unmarked students defaulted to Present.
        """
        status = self._api.get(
            "/attendance/status",
            params={
                "class_group": class_group,
                "date": on_date,
                "period_number": period_number,
                "subject_name": subject_name,
            },
            error_message="Failed to load attendance data.",
        )
        sheet = self._api.get(
            "/attendance/sheet",
            params={"class_group": class_group, "date": on_date, "period_number": period_number},
            error_message="Failed to load attendance data.",
        )
        return bool(_as_dict(status).get("isMarked")), default_sheet(as_list(sheet))

    def submit_sheet(
        self,
        rows: list[dict[str, Any]],
        class_group: str,
        subject_name: str,
        period_number: Any,
        on_date: str,
    ) -> Any:
        require_role(self.user, TEACHER, action="mark attendance")
        if not rows:
            raise ValidationError("There are no students to mark.")
        body = sheet_payload(rows, class_group, subject_name, period_number, on_date, self.user_id)
        logger.info("Submitting attendance for %s, period %s on %s", class_group, period_number, on_date)
        return self._api.post("/attendance", json=body, error_message="Failed to save attendance.")
