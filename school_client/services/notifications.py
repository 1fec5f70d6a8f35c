"""Notifications list and optimistic read marking."""

from __future__ import annotations

from typing import Any

from school_client.domains.notifications import is_read, with_read_flag
from school_client.errors import ApiError
from school_client.services.base import BaseService, as_list
from school_client.utils.logger import get_logger

logger = get_logger(__name__)


class NotificationService(BaseService):
    def fetch(self) -> list[dict[str, Any]]:
        return as_list(self._api.get("/notifications", error_message="Could not load notifications."))

    def mark_read(self, items: list[dict[str, Any]], notification: dict[str, Any]) -> list[dict[str, Any]]:
        """
        Flip a notification to read and tell the server.

        The server call never raises: on failure the flag is rolled back in the
        returned list and the error is logged.
        """
        nid = notification.get("id")
        if is_read(notification):
            return items
        updated = with_read_flag(items, nid, True)
        try:
            self._api.put(f"/notifications/{nid}/read")
        except ApiError as e:
            logger.warning("Failed to mark notification %s as read: %s", nid, e)
            return with_read_flag(updated, nid, False)
        return updated
