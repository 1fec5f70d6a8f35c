"""Online class endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from school_client.domains.online_classes import (
    ALL_CLASSES,
    LIVE,
    RECORDED,
    class_fields,
    split_classes,
    validate_online_class,
    visible_classes,
)
from school_client.domains.roles import ADMIN, TEACHER, require_role
from school_client.errors import ValidationError
from school_client.infrastructure.api.client import Upload
from school_client.services.base import BaseService, as_list
from school_client.utils.logger import get_logger

logger = get_logger(__name__)


class OnlineClassService(BaseService):
    def fetch(self) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
        """Classes this user may see, split into (live, recorded)."""
        data = as_list(self._api.get("/online-classes", error_message="Could not load online classes."))
        return split_classes(visible_classes(data, self.user))

    def class_groups(self) -> list[Any]:
        return as_list(self._api.get("/student-classes"))

    def options(self, class_group: str) -> dict[str, list[Any]]:
        """Subjects and teachers for the form's class picker."""
        if class_group == ALL_CLASSES:
            subjects = self._api.get("/subjects/all-unique", error_message='Could not load details for "All" classes.')
            teachers = self._api.get("/all-teachers-and-admins", error_message='Could not load details for "All" classes.')
        else:
            subjects = self._api.get(f"/subjects-for-class/{class_group}", error_message="Could not load class details.")
            teachers = self._api.get(f"/teachers-for-class/{class_group}", error_message="Could not load class details.")
        return {"subjects": as_list(subjects), "teachers": as_list(teachers)}

    def save(
        self,
        form: dict[str, Any],
        class_type: str,
        class_datetime: datetime,
        video: Upload | None = None,
        class_id: Any = None,
    ) -> Any:
        """
        Schedule a live class, upload a recorded one, or update an existing class.
        """
        require_role(self.user, ADMIN, TEACHER, action="manage online classes")
        if class_type not in (LIVE, RECORDED):
            raise ValidationError(f"Unknown class type: {class_type}")
        editing = class_id is not None
        validate_online_class(form, class_type, has_video=video is not None, editing=editing)
        fields = class_fields(form, class_datetime)
        if editing:
            fields["topic"] = form.get("topic") or ""
            fields["meet_link"] = form.get("meet_link") or ""
            return self._api.put(f"/online-classes/{class_id}", data=fields, error_message="Failed to update.")

        fields["class_type"] = class_type
        files = None
        if class_type == LIVE:
            fields["meet_link"] = form["meet_link"]
        else:
            fields["topic"] = form["topic"]
            files = {"videoFile": video}
        logger.info("Creating %s class %r for %s", class_type, fields["title"], fields["class_group"])
        return self._api.post("/online-classes", data=fields, files=files, error_message="Failed to save.")

    def delete(self, class_id: Any) -> Any:
        require_role(self.user, ADMIN, TEACHER, action="manage online classes")
        return self._api.delete(f"/online-classes/{class_id}", error_message="Failed to delete.")
