"""Exam authoring/grading (teacher, admin) and exam taking (student)."""

from __future__ import annotations

from typing import Any

from school_client.domains.exams import (
    exam_payload,
    graded_answers_payload,
    normalize_questions,
    time_limit_seconds,
    validate_exam,
)
from school_client.domains.roles import ADMIN, STUDENT, TEACHER, require_role
from school_client.services.base import BaseService, as_list
from school_client.utils.logger import get_logger

logger = get_logger(__name__)


class ExamService(BaseService):
    # --- teacher / admin ---

    def list_for_teacher(self) -> list[dict[str, Any]]:
        return as_list(self._api.get(f"/exams/teacher/{self.user_id}", error_message="Failed to fetch exams."))

    def get(self, exam_id: Any) -> dict[str, Any]:
        data = self._api.get(f"/exams/{exam_id}", error_message="Failed to load data.")
        if isinstance(data, dict) and data.get("questions"):
            data = {**data, "questions": normalize_questions(data["questions"])}
        return data if isinstance(data, dict) else {}

    def save(self, details: dict[str, Any], questions: list[dict[str, Any]], exam_id: Any = None) -> Any:
        """
        Create or update an exam.

        Raises:
            ValidationError: Title, class or questions missing.
        """
        require_role(self.user, TEACHER, ADMIN, action="manage exams")
        validate_exam(details, questions)
        body = exam_payload(details, questions, self.user_id)
        if exam_id is not None:
            return self._api.put(f"/exams/{exam_id}", json=body, error_message="Failed to save exam.")
        logger.info("Creating exam %r for %s", details.get("title"), details.get("class_group"))
        return self._api.post("/exams", json=body, error_message="Failed to save exam.")

    def delete(self, exam_id: Any) -> Any:
        require_role(self.user, TEACHER, ADMIN, action="manage exams")
        return self._api.delete(f"/exams/{exam_id}", error_message="Failed to delete.")

    def submissions(self, exam_id: Any) -> list[dict[str, Any]]:
        return as_list(self._api.get(f"/exams/{exam_id}/submissions", error_message="Failed to fetch submissions."))

    def submission_detail(self, attempt_id: Any) -> list[dict[str, Any]]:
        data = self._api.get(f"/submissions/{attempt_id}", error_message="Could not fetch submission.")
        return normalize_questions(as_list(data))

    def grade(self, attempt_id: Any, grades: dict[Any, Any], feedback: str = "") -> Any:
        require_role(self.user, TEACHER, ADMIN, action="grade exams")
        return self._api.post(
            f"/submissions/{attempt_id}/grade",
            json={
                "gradedAnswers": graded_answers_payload(grades),
                "teacher_feedback": feedback,
                "teacher_id": self.user_id,
            },
            error_message="Failed to submit grades.",
        )

    # --- student ---

    def list_for_student(self) -> list[dict[str, Any]]:
        return as_list(
            self._api.get(f"/exams/student/{self.user_id}/{self.class_group}", error_message="Failed to fetch exams.")
        )

    def start(self, exam: dict[str, Any]) -> dict[str, Any]:
        """
        Open an attempt and load its questions.

        Returns:
            {"attempt_id", "questions", "time_limit_seconds"}.
        """
        require_role(self.user, STUDENT, action="take exams")
        exam_id = exam.get("exam_id")
        started = self._api.post(
            f"/exams/{exam_id}/start", json={"student_id": self.user_id}, error_message="Could not start exam."
        ) or {}
        questions = self._api.get(f"/exams/take/{exam_id}", error_message="Could not start exam.")
        return {
            "attempt_id": started.get("attempt_id"),
            "questions": normalize_questions(as_list(questions)),
            "time_limit_seconds": time_limit_seconds(exam),
        }

    def submit(self, attempt_id: Any, answers: dict[Any, Any]) -> Any:
        logger.info("Submitting attempt %s (%s answers)", attempt_id, len(answers))
        return self._api.post(
            f"/attempts/{attempt_id}/submit",
            json={"answers": answers, "student_id": self.user_id},
            error_message="Could not submit exam.",
        )

    def result(self, attempt_id: Any) -> Any:
        data = self._api.get(
            f"/attempts/{attempt_id}/result",
            params={"student_id": self.user_id},
            error_message="Could not fetch results.",
        )
        if isinstance(data, dict) and isinstance(data.get("details"), list):
            data = {**data, "details": normalize_questions(data["details"])}
        return data
