"""Dashboard header data: profile and unread notification count."""

from __future__ import annotations

from typing import Any

from school_client.domains.dashboard import display_name, quick_access
from school_client.domains.notifications import unread_count
from school_client.errors import ApiError
from school_client.services.base import BaseService, as_list
from school_client.utils.logger import get_logger

logger = get_logger(__name__)


class DashboardService(BaseService):
    def load(self) -> dict[str, Any]:
        """
        Fetch what the dashboard header shows.

        A failed notification fetch only loses the badge; a failed profile fetch
        falls back to the login user.
        """
        profile: dict[str, Any] = {}
        try:
            data = self._api.get(f"/profiles/{self.user_id}", error_message="Could not load profile.")
            profile = data if isinstance(data, dict) else {}
        except ApiError as e:
            logger.warning("Profile fetch failed for user %s: %s", self.user_id, e)

        unread = 0
        try:
            unread = unread_count(as_list(self._api.get("/notifications")))
        except ApiError as e:
            logger.warning("Notification fetch failed: %s", e)

        return {
            "profile": profile,
            "name": display_name(profile, self.user),
            "image_url": self._api.media_url(profile.get("profile_image_url")),
            "unread_count": unread,
            "tiles": quick_access(self.role),
        }
