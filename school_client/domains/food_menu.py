"""Weekly lunch menu keyed by weekday."""

from __future__ import annotations

from typing import Any

from school_client.errors import ValidationError

ORDERED_DAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
LUNCH = "Lunch"
NOT_SET = "Not Set"


def meal_for(menu: dict[str, list[dict[str, Any]]], day: str, meal_type: str = LUNCH) -> dict[str, Any] | None:
    for meal in menu.get(day) or []:
        if meal.get("meal_type") == meal_type:
            return meal
    return None


def lunch_time(menu: dict[str, list[dict[str, Any]]]) -> str:
    """First lunch time found in weekday order, else "Not Set"."""
    for day in ORDERED_DAYS:
        meal = meal_for(menu, day)
        if meal and meal.get("meal_time"):
            return str(meal["meal_time"])
    return NOT_SET


def weekly_rows(menu: dict[str, list[dict[str, Any]]]) -> list[dict[str, Any]]:
    """One row per weekday: {day, meal (or None), food_item}."""
    rows = []
    for day in ORDERED_DAYS:
        meal = meal_for(menu, day)
        rows.append({"day": day, "meal": meal, "food_item": (meal or {}).get("food_item") or ""})
    return rows


def clean_food_item(text: str | None) -> str:
    item = (text or "").strip()
    if not item:
        raise ValidationError("Food item cannot be empty.")
    return item


def new_meal_payload(day: str, food_item: str, editor_id: Any, current_time: str) -> dict[str, Any]:
    if day not in ORDERED_DAYS:
        raise ValidationError(f"Unknown day: {day}")
    return {
        "food_item": food_item,
        "editorId": editor_id,
        "day_of_week": day,
        "meal_type": LUNCH,
        "meal_time": "" if current_time == NOT_SET else current_time,
    }
