"""Homework endpoints: student submissions and teacher/admin assignment management."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from school_client.domains.homework import (
    assignment_fields,
    sort_student_assignments,
    validate_assignment,
    validate_written_answer,
)
from school_client.domains.roles import ADMIN, STUDENT, TEACHER, require_role
from school_client.infrastructure.api.client import Upload, file_part_from_path
from school_client.services.base import BaseService, as_list
from school_client.utils.logger import get_logger

logger = get_logger(__name__)


class HomeworkService(BaseService):
    # --- student ---

    def list_for_student(self) -> list[dict[str, Any]]:
        data = self._api.get(
            f"/homework/student/{self.user_id}/{self.class_group}",
            error_message="Failed to fetch assignments.",
        )
        return sort_student_assignments(as_list(data))

    def submit_file(self, assignment_id: Any, upload: Upload | str | Path) -> Any:
        """Multipart upload of the student's file (a prepared part or a local path) under `submission`."""
        require_role(self.user, STUDENT, action="submit homework")
        if isinstance(upload, (str, Path)):
            upload = file_part_from_path(upload)
        logger.info("Student %s submitting file for assignment %s", self.user_id, assignment_id)
        return self._api.post(
            f"/homework/submit/{assignment_id}",
            data={"student_id": self.user_id},
            files={"submission": upload},
            error_message="Could not submit file.",
        )

    def submit_written(self, assignment_id: Any, answer: str) -> Any:
        require_role(self.user, STUDENT, action="submit homework")
        text = validate_written_answer(answer)
        return self._api.post(
            "/homework/submit-written",
            json={"assignment_id": assignment_id, "student_id": self.user_id, "written_answer": text},
            error_message="Failed to submit your answer.",
        )

    def delete_submission(self, submission_id: Any) -> Any:
        return self._api.delete(
            f"/homework/submission/{submission_id}",
            json={"student_id": self.user_id},
            error_message="Could not delete submission.",
        )

    # --- teacher / admin ---

    def list_for_teacher(self) -> list[dict[str, Any]]:
        return as_list(
            self._api.get(f"/homework/teacher/{self.user_id}", error_message="Failed to fetch assignment history.")
        )

    def classes(self) -> list[Any]:
        return as_list(self._api.get("/student-classes"))

    def subjects_for_class(self, class_group: str) -> list[Any]:
        return as_list(self._api.get(f"/subjects-for-class/{class_group}"))

    def save_assignment(
        self,
        form: dict[str, Any],
        attachment: Upload | None = None,
        existing: dict[str, Any] | None = None,
    ) -> Any:
        """
        Create, or update `existing`. Without a new attachment an update keeps the old
        file via existing_attachment_path.

        Raises:
            ValidationError: Required fields missing.
        """
        require_role(self.user, TEACHER, ADMIN, action="manage homework")
        validate_assignment(form)
        fields = assignment_fields(form, teacher_id=None if existing else self.user_id)
        files = None
        if attachment is not None:
            files = {"attachment": attachment}
        elif existing and existing.get("attachment_path"):
            fields["existing_attachment_path"] = existing["attachment_path"]
        path = f"/homework/update/{existing['id']}" if existing else "/homework"
        logger.info("%s homework %r", "Updating" if existing else "Creating", fields["title"])
        return self._api.post(path, data=fields, files=files, error_message="An error occurred while saving.")

    def delete_assignment(self, assignment_id: Any) -> Any:
        require_role(self.user, TEACHER, ADMIN, action="manage homework")
        return self._api.delete(f"/homework/{assignment_id}", error_message="Failed to delete assignment.")

    def submissions(self, assignment_id: Any) -> list[dict[str, Any]]:
        return as_list(
            self._api.get(f"/homework/submissions/{assignment_id}", error_message="Failed to fetch student roster.")
        )

    def grade(self, submission_id: Any, grade: str, remarks: str = "") -> Any:
        require_role(self.user, TEACHER, ADMIN, action="grade homework")
        return self._api.put(
            f"/homework/grade/{submission_id}",
            json={"grade": grade, "remarks": remarks},
            error_message="An error occurred.",
        )
