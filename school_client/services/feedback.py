"""Student feedback: class -> subject -> teacher -> students cascade, then save."""

from __future__ import annotations

from typing import Any

from school_client.domains.feedback import feedback_payload, normalize_rows
from school_client.domains.roles import ADMIN, TEACHER, require_role
from school_client.services.base import BaseService, as_list
from school_client.utils.logger import get_logger

logger = get_logger(__name__)


class FeedbackService(BaseService):
    def classes(self) -> list[Any]:
        """Admins see every class; teachers see the classes they teach."""
        if self.role == ADMIN:
            return as_list(self._api.get("/feedback/classes"))
        if self.role == TEACHER:
            return as_list(self._api.get(f"/teacher-classes/{self.user_id}"))
        return []

    def subjects(self, class_group: str) -> list[Any]:
        params: dict[str, Any] = {"class_group": class_group}
        if self.role == TEACHER:
            params["teacher_id"] = self.user_id
        return as_list(self._api.get("/feedback/subjects", params=params))

    def teachers(self, class_group: str, subject: str) -> list[dict[str, Any]]:
        """Teachers of a class/subject (admin view). Teachers only ever see themselves."""
        if self.role == TEACHER:
            return [{"id": self.user_id, "full_name": self.user.get("full_name")}]
        require_role(self.user, ADMIN, action="browse teachers")
        return as_list(
            self._api.get("/feedback/teachers", params={"class_group": class_group, "subject": subject})
        )

    def students(self, class_group: str, teacher_id: Any) -> list[dict[str, Any]]:
        rows = self._api.get(
            "/feedback/students",
            params={"class_group": class_group, "teacher_id": teacher_id},
            error_message="Failed to load student list.",
        )
        return normalize_rows(as_list(rows))

    def save(self, class_group: str, rows: list[dict[str, Any]], teacher_id: Any = None) -> Any:
        require_role(self.user, TEACHER, action="save feedback")
        body = feedback_payload(teacher_id or self.user_id, class_group, rows)
        logger.info("Saving feedback for %s students in %s", len(rows), class_group)
        return self._api.post("/feedback", json=body, error_message="Failed to save feedback.")
