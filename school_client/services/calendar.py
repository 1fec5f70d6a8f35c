"""Academic calendar endpoints (read for everyone, write for admins)."""

from __future__ import annotations

from typing import Any

from school_client.domains.calendar import event_payload
from school_client.domains.roles import ADMIN, require_role
from school_client.errors import ValidationError
from school_client.services.base import BaseService
from school_client.utils.logger import get_logger

logger = get_logger(__name__)


class CalendarService(BaseService):
    def fetch_events(self) -> dict[str, list[dict[str, Any]]]:
        """GET /calendar -> {"YYYY-MM-DD": [event, ...]}."""
        data = self._api.get("/calendar", error_message="Failed to fetch calendar data.")
        return data if isinstance(data, dict) else {}

    def save_event(
        self, details: dict[str, Any], date_key: str, event_id: Any = None
    ) -> Any:
        """
        Create (no event_id) or update an event on `date_key`.

        Raises:
            PermissionDeniedError: Caller is not an admin.
            ValidationError: Title is blank.
        """
        require_role(self.user, ADMIN, action="manage calendar events")
        if not (details.get("name") or "").strip():
            raise ValidationError("Title is required.")
        body = event_payload(details, date_key, self.user_id)
        if event_id is not None:
            logger.info("Updating calendar event %s", event_id)
            return self._api.put(f"/calendar/{event_id}", json=body, error_message="Failed to save event.")
        logger.info("Creating calendar event on %s", date_key)
        return self._api.post("/calendar", json=body, error_message="Failed to save event.")

    def delete_event(self, event_id: Any) -> Any:
        require_role(self.user, ADMIN, action="manage calendar events")
        return self._api.delete(f"/calendar/{event_id}", error_message="Failed to delete event.")
