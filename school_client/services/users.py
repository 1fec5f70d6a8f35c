"""User administration and profile endpoints."""

from __future__ import annotations

from typing import Any

from school_client.domains.roles import ADMIN, require_role
from school_client.domains.users import changed_fields, create_payload, validate_user_form
from school_client.errors import ValidationError
from school_client.infrastructure.api.client import Upload
from school_client.services.base import BaseService, as_list
from school_client.utils.logger import get_logger

logger = get_logger(__name__)


class UserService(BaseService):
    def list_users(self) -> list[dict[str, Any]]:
        require_role(self.user, ADMIN, action="manage users")
        return as_list(self._api.get("/users", error_message="Failed to fetch users."))

    def create(self, form: dict[str, Any]) -> Any:
        require_role(self.user, ADMIN, action="manage users")
        validate_user_form(form, editing=False)
        logger.info("Creating %s user %s", form.get("role"), form.get("username"))
        return self._api.post("/users", json=create_payload(form), error_message="An error occurred.")

    def update(self, original: dict[str, Any], form: dict[str, Any]) -> Any:
        """
        PUT only the changed fields.

        Raises:
            ValidationError: Form invalid, or nothing changed ("No changes detected.").
        """
        require_role(self.user, ADMIN, action="manage users")
        validate_user_form(form, editing=True)
        changes = changed_fields(original, form)
        if not changes:
            raise ValidationError("No changes detected.")
        return self._api.put(f"/users/{original['id']}", json=changes, error_message="An error occurred.")

    def delete(self, user_id: Any) -> Any:
        require_role(self.user, ADMIN, action="manage users")
        return self._api.delete(f"/users/{user_id}", error_message="Failed to delete the user.")


class ProfileService(BaseService):
    def get(self, user_id: Any = None) -> dict[str, Any]:
        data = self._api.get(f"/profiles/{user_id or self.user_id}", error_message="Could not load profile.")
        return data if isinstance(data, dict) else {}

    def update(self, form: dict[str, Any], image: Upload | None = None) -> dict[str, Any]:
        """Multipart PUT of the non-null fields plus an optional new profileImage."""
        fields = {k: v for k, v in form.items() if v is not None and k != "profile_image_url"}
        data = self._api.put(
            f"/profiles/{self.user_id}",
            data=fields,
            files={"profileImage": image} if image else None,
            error_message="Failed to update profile.",
        )
        return data if isinstance(data, dict) else {**form}
