"""Common plumbing for screen services."""

from __future__ import annotations

from typing import Any

from school_client.domains.roles import role_of
from school_client.infrastructure.api.client import ApiClient


class BaseService:
    """Holds the shared ApiClient and the signed-in user dict."""

    def __init__(self, api: ApiClient, user: dict[str, Any] | None = None) -> None:
        self._api = api
        self.user: dict[str, Any] = user or {}

    @property
    def api(self) -> ApiClient:
        return self._api

    @property
    def user_id(self) -> Any:
        return self.user.get("id")

    @property
    def role(self) -> str:
        return role_of(self.user)

    @property
    def class_group(self) -> str | None:
        return self.user.get("class_group")


def as_list(payload: Any, key: str | None = None) -> list[dict[str, Any]]:
    """Coerce a list response (or `payload[key]`) to a list; anything else is empty."""
    if key and isinstance(payload, dict):
        payload = payload.get(key)
    return list(payload) if isinstance(payload, list) else []
