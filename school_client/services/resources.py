"""Textbook resources: admin/teacher management and the student browser."""

from __future__ import annotations

from typing import Any

from school_client.domains.resources import TEXTBOOK, resource_fields
from school_client.domains.roles import ADMIN, TEACHER, require_role
from school_client.infrastructure.api.client import Upload
from school_client.services.base import BaseService, as_list


class ResourceService(BaseService):
    def textbooks(self) -> list[dict[str, Any]]:
        return as_list(self._api.get("/resources", params={"type": TEXTBOOK}, error_message="Failed to fetch data."))

    def all_classes(self) -> list[Any]:
        return as_list(self._api.get("/all-classes", error_message="Failed to fetch data."))

    def save(self, form: dict[str, Any], cover: Upload | None = None, resource_id: Any = None) -> Any:
        require_role(self.user, ADMIN, TEACHER, action="manage textbooks")
        fields = resource_fields(form)
        files = {"coverImage": cover} if cover else None
        if resource_id is not None:
            return self._api.put(f"/resources/{resource_id}", data=fields, files=files, error_message="Save failed.")
        return self._api.post("/resources", data=fields, files=files, error_message="Save failed.")

    def delete(self, resource_id: Any) -> Any:
        require_role(self.user, ADMIN, TEACHER, action="manage textbooks")
        return self._api.delete(f"/resources/{resource_id}", error_message="Could not delete.")

    # --- student ---

    def student_classes(self) -> list[Any]:
        return as_list(self._api.get("/resources/classes"))

    def for_class(self, class_group: str, board: str) -> list[dict[str, Any]]:
        data = self._api.get(
            f"/resources/textbook/class/{class_group}/{board}",
            error_message="Textbooks have not been published for this class and board yet.",
        )
        if isinstance(data, dict):
            return [data]
        return as_list(data)
