"""Events: admin authoring and the per-user event feed."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from school_client.domains.events import event_payload, sort_events, target_options
from school_client.domains.roles import ADMIN, require_role
from school_client.services.base import BaseService, as_list


class EventService(BaseService):
    def all_for_admin(self) -> list[dict[str, Any]]:
        require_role(self.user, ADMIN, action="manage events")
        return sort_events(as_list(self._api.get("/events/all-for-admin", error_message="Could not load events.")))

    def for_user(self) -> list[dict[str, Any]]:
        return as_list(
            self._api.get(f"/events/all-for-user/{self.user_id}", error_message="Could not load school events.")
        )

    def details(self, event_id: Any) -> dict[str, Any]:
        data = self._api.get(f"/events/details/{event_id}", error_message="Could not load event details.")
        return data if isinstance(data, dict) else {}

    def target_classes(self) -> list[str]:
        return target_options(as_list(self._api.get("/classes")))

    def save(self, form: dict[str, Any], when: datetime, event_id: Any = None) -> Any:
        require_role(self.user, ADMIN, action="manage events")
        body = event_payload(form, when, self.user_id)
        if event_id is not None:
            return self._api.put(f"/events/{event_id}", json=body, error_message="Could not save event.")
        return self._api.post("/events", json={**body, "created_by": self.user_id}, error_message="Could not save event.")

    def delete(self, event_id: Any) -> Any:
        require_role(self.user, ADMIN, action="manage events")
        return self._api.delete(f"/events/{event_id}", json={"userId": self.user_id}, error_message="Could not delete event.")
