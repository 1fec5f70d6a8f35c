"""Kitchen endpoints: provisions, daily usage and permanent inventory."""

from __future__ import annotations

from datetime import date
from typing import Any

from school_client.domains.kitchen import (
    MODE_ADD_PERMANENT,
    MODE_ADD_PROVISION,
    MODE_EDIT_PERMANENT,
    changed_fields,
    item_form_fields,
    usage_quantity,
)
from school_client.infrastructure.api.client import Upload
from school_client.services.base import BaseService, as_list
from school_client.utils.logger import get_logger

logger = get_logger(__name__)


class KitchenService(BaseService):
    def load(self, on_date: date) -> dict[str, list[dict[str, Any]]]:
        """Provisions, usage for `on_date` and permanent inventory in one go."""
        day = on_date.strftime("%Y-%m-%d")
        err = "Could not fetch kitchen data."
        return {
            "provisions": as_list(self._api.get("/kitchen/inventory", error_message=err)),
            "usage": as_list(self._api.get("/kitchen/usage", params={"date": day}, error_message=err)),
            "permanent": as_list(self._api.get("/permanent-inventory", error_message=err)),
        }

    def add_provision(self, form: dict[str, Any], image: Upload | None = None) -> Any:
        fields = item_form_fields(form, MODE_ADD_PROVISION)
        logger.info("Adding provision %r", fields["itemName"])
        return self._api.post(
            "/kitchen/inventory",
            data=fields,
            files={"itemImage": image} if image else None,
            error_message="Failed to save.",
        )

    def add_permanent_item(self, form: dict[str, Any], image: Upload | None = None) -> Any:
        fields = item_form_fields(form, MODE_ADD_PERMANENT)
        return self._api.post(
            "/permanent-inventory",
            data=fields,
            files={"itemImage": image} if image else None,
            error_message="Failed to save.",
        )

    def update_permanent_item(
        self,
        item_id: Any,
        initial: dict[str, Any],
        current: dict[str, Any],
        image: Upload | None = None,
    ) -> bool:
        """
        Send only what changed. Returns False (no request) when nothing did.
        """
        fields = changed_fields(initial, current, MODE_EDIT_PERMANENT)
        if not fields and image is None:
            return False
        self._api.put(
            f"/permanent-inventory/{item_id}",
            data=fields,
            files={"itemImage": image} if image else None,
            error_message="Failed to save.",
        )
        return True

    def delete_permanent_item(self, item_id: Any) -> Any:
        return self._api.delete(f"/permanent-inventory/{item_id}", error_message="Failed to delete.")

    def log_usage(self, inventory_id: Any, quantity: Any, on_date: date) -> Any:
        qty = usage_quantity(quantity)
        return self._api.post(
            "/kitchen/usage",
            json={"inventoryId": inventory_id, "quantityUsed": qty, "usageDate": on_date.strftime("%Y-%m-%d")},
            error_message="Failed to log usage.",
        )
