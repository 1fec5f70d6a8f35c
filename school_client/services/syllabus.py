"""Syllabus endpoints for students, teachers and admins."""

from __future__ import annotations

from typing import Any

from school_client.domains.syllabus import LESSON_STATUSES, summarize_overview, validate_lessons
from school_client.domains.roles import ADMIN, TEACHER, require_role
from school_client.errors import ValidationError
from school_client.services.base import BaseService, as_list
from school_client.utils.logger import get_logger

logger = get_logger(__name__)


class SyllabusService(BaseService):
    # --- student ---

    def student_overview(self) -> tuple[dict[str, int], list[dict[str, Any]]]:
        data = self._api.get(f"/syllabus/student/overview/{self.user_id}", error_message="Failed to fetch progress.")
        data = data if isinstance(data, dict) else {}
        return summarize_overview(data.get("totalStats") or [], data.get("subjectStats") or [])

    def subject_details(self, syllabus_id: Any) -> list[dict[str, Any]]:
        return as_list(
            self._api.get(
                f"/syllabus/student/subject-details/{syllabus_id}/{self.user_id}",
                error_message="Failed to load details.",
            )
        )

    # --- teacher ---

    def teacher_assignments(self) -> list[dict[str, Any]]:
        return as_list(self._api.get(f"/teacher-assignments/{self.user_id}", error_message="Failed to load subjects."))

    def class_syllabus(self, class_group: str, subject_name: str) -> tuple[dict[str, Any], list[dict[str, Any]]]:
        """The syllabus for a class/subject and its per-lesson class progress."""
        syllabus = self._api.get(
            f"/syllabus/teacher/{class_group}/{subject_name}", error_message="Syllabus not found for this subject."
        )
        syllabus = syllabus if isinstance(syllabus, dict) else {}
        lessons = as_list(
            self._api.get(f"/syllabus/class-progress/{syllabus.get('id')}", error_message="Could not load class progress.")
        )
        return syllabus, lessons

    def update_lesson_status(self, class_group: str, lesson_id: Any, status: str) -> Any:
        require_role(self.user, TEACHER, action="update lesson status")
        if status not in LESSON_STATUSES:
            raise ValidationError(f"Unknown lesson status: {status}")
        return self._api.patch(
            "/syllabus/lesson-status",
            json={"class_group": class_group, "lesson_id": lesson_id, "status": status, "teacher_id": self.user_id},
            error_message="Update failed.",
        )

    # --- admin ---

    def all_syllabi(self) -> list[dict[str, Any]]:
        require_role(self.user, ADMIN, action="manage syllabi")
        return as_list(self._api.get("/syllabus/all", error_message="Failed to load syllabus history."))

    def all_classes(self) -> list[Any]:
        return as_list(self._api.get("/all-classes"))

    def subjects_for_class(self, class_group: str) -> list[Any]:
        return as_list(self._api.get(f"/subjects-for-class/{class_group}"))

    def teachers_for(self, class_group: str, subject_name: str) -> list[dict[str, Any]]:
        return as_list(self._api.get(f"/syllabus/teachers/{class_group}/{subject_name}"))

    def progress_for(self, syllabus_id: Any) -> list[dict[str, Any]]:
        return as_list(
            self._api.get(f"/syllabus/class-progress/{syllabus_id}", error_message="Could not load class progress.")
        )

    def save(
        self,
        class_group: str,
        subject_name: str,
        teacher_id: Any,
        lessons: list[dict[str, Any]],
        syllabus_id: Any = None,
    ) -> Any:
        """Create, or replace the lessons of an existing syllabus."""
        require_role(self.user, ADMIN, action="manage syllabi")
        valid = validate_lessons(class_group, subject_name, teacher_id, lessons)
        if syllabus_id is not None:
            return self._api.put(
                f"/syllabus/{syllabus_id}",
                json={"lessons": valid, "creator_id": teacher_id},
                error_message="Failed to save syllabus.",
            )
        logger.info("Creating syllabus %s / %s with %s lessons", class_group, subject_name, len(valid))
        return self._api.post(
            "/syllabus/create",
            json={"class_group": class_group, "subject_name": subject_name, "lessons": valid, "creator_id": teacher_id},
            error_message="Failed to save syllabus.",
        )

    def delete(self, syllabus_id: Any) -> Any:
        require_role(self.user, ADMIN, action="manage syllabi")
        return self._api.delete(f"/syllabus/{syllabus_id}", error_message="Could not delete the syllabus.")
