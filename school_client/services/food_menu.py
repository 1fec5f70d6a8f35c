"""Food menu endpoints; edits are admin-only."""

from __future__ import annotations

from typing import Any

from school_client.domains.food_menu import LUNCH, clean_food_item, new_meal_payload
from school_client.domains.roles import ADMIN, require_role
from school_client.errors import ValidationError
from school_client.services.base import BaseService


class FoodMenuService(BaseService):
    def fetch(self) -> dict[str, list[dict[str, Any]]]:
        data = self._api.get("/food-menu", error_message="Failed to fetch the food menu.")
        return data if isinstance(data, dict) else {}

    def save_item(self, day: str, food_item: str, meal: dict[str, Any] | None, current_time: str) -> Any:
        """Update the day's lunch when it exists, otherwise create it at the current lunch time."""
        require_role(self.user, ADMIN, action="edit the food menu")
        item = clean_food_item(food_item)
        if meal and meal.get("id") is not None:
            return self._api.put(
                f"/food-menu/{meal['id']}",
                json={"food_item": item, "editorId": self.user_id},
                error_message="Failed to update the menu.",
            )
        return self._api.post(
            "/food-menu",
            json=new_meal_payload(day, item, self.user_id, current_time),
            error_message="Failed to add the menu item.",
        )

    def set_lunch_time(self, meal_time: str) -> Any:
        require_role(self.user, ADMIN, action="edit the food menu")
        meal_time = (meal_time or "").strip()
        if not meal_time:
            raise ValidationError("Lunch time cannot be empty.")
        return self._api.put(
            "/food-menu/time",
            json={"meal_type": LUNCH, "meal_time": meal_time, "editorId": self.user_id},
            error_message="Failed to update the lunch time.",
        )
