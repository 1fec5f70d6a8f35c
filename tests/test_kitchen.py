"""
Tests for the kitchen and the weekly food menu.
"""

from __future__ import annotations

from datetime import date
from unittest.mock import MagicMock

import pytest

from school_client.domains.food_menu import NOT_SET, lunch_time, new_meal_payload, weekly_rows
from school_client.domains.kitchen import (
    MODE_ADD_PERMANENT,
    MODE_ADD_PROVISION,
    MODE_EDIT_PERMANENT,
    MODE_LOG_USAGE,
    changed_fields,
    initial_form,
    item_form_fields,
    quantity_label,
)
from school_client.errors import PermissionDeniedError, ValidationError
from school_client.infrastructure.api.client import ApiClient
from school_client.services.food_menu import FoodMenuService
from school_client.services.kitchen import KitchenService

ITEM = {"id": 3, "item_name": "Rice", "quantity_remaining": 12, "total_quantity": 40, "unit": "kg", "notes": ""}


def test_initial_form() -> None:
    assert initial_form(None, MODE_ADD_PROVISION) == {"itemName": "", "quantity": 1, "unit": "g", "notes": ""}
    assert initial_form(ITEM, MODE_LOG_USAGE)["quantity"] == 1
    assert initial_form(ITEM, MODE_EDIT_PERMANENT)["quantity"] == 12


def test_item_form_fields() -> None:
    fields = item_form_fields({"itemName": " Dal ", "quantity": "2.0", "unit": "kg"}, MODE_ADD_PERMANENT)
    assert fields == {"itemName": "Dal", "quantity": "2", "unit": "kg", "totalQuantity": "2"}
    with pytest.raises(ValidationError):
        item_form_fields({"itemName": "Dal", "quantity": 0}, MODE_ADD_PROVISION)
    with pytest.raises(ValidationError):
        item_form_fields({"itemName": "Dal", "quantity": 1, "unit": "tons"}, MODE_ADD_PROVISION)
    with pytest.raises(ValidationError):
        item_form_fields({"itemName": "  ", "quantity": 1}, MODE_ADD_PROVISION)


def test_changed_fields_for_permanent_items() -> None:
    initial = initial_form(ITEM, MODE_EDIT_PERMANENT)
    assert changed_fields(initial, dict(initial), MODE_EDIT_PERMANENT) == {}
    current = {**initial, "quantity": 15, "unit": "g", "notes": "top shelf"}
    assert changed_fields(initial, current, MODE_EDIT_PERMANENT) == {"totalQuantity": "15", "notes": "top shelf"}


def test_quantity_label() -> None:
    assert quantity_label(ITEM, "provisions") == ("Left", 12)
    assert quantity_label(ITEM, "permanent") == ("Qty", 40)
    assert quantity_label({"quantity_used": 2}, "usage") == ("Used", 2)


@pytest.fixture
def api() -> MagicMock:
    return MagicMock(spec=ApiClient)


def test_load_all_three_lists(api: MagicMock) -> None:
    api.get.side_effect = [[ITEM], [], [{"id": 9}]]
    out = KitchenService(api, {"id": 1, "role": "others"}).load(date(2024, 2, 1))
    assert out == {"provisions": [ITEM], "usage": [], "permanent": [{"id": 9}]}
    assert api.get.call_args_list[1].kwargs["params"] == {"date": "2024-02-01"}


def test_update_permanent_item_skips_when_unchanged(api: MagicMock) -> None:
    svc = KitchenService(api, {"id": 1})
    initial = initial_form(ITEM, MODE_EDIT_PERMANENT)
    assert svc.update_permanent_item(3, initial, dict(initial)) is False
    api.put.assert_not_called()
    assert svc.update_permanent_item(3, initial, {**initial, "itemName": "Basmati"}) is True
    assert api.put.call_args.kwargs["data"] == {"itemName": "Basmati"}


def test_log_usage(api: MagicMock) -> None:
    KitchenService(api, {"id": 1}).log_usage(3, "2.5", date(2024, 2, 1))
    assert api.post.call_args.kwargs["json"] == {"inventoryId": 3, "quantityUsed": 2.5, "usageDate": "2024-02-01"}


MENU = {
    "Tuesday": [{"id": 2, "meal_type": "Lunch", "food_item": "Khichdi", "meal_time": "12:30 PM"}],
    "Monday": [{"id": 1, "meal_type": "Snack", "food_item": "Fruit"}],
}


def test_weekly_rows_and_lunch_time() -> None:
    rows = weekly_rows(MENU)
    assert [r["day"] for r in rows][:2] == ["Monday", "Tuesday"]
    assert rows[0]["meal"] is None
    assert rows[1]["food_item"] == "Khichdi"
    assert lunch_time(MENU) == "12:30 PM"
    assert lunch_time({}) == NOT_SET


def test_new_meal_payload() -> None:
    body = new_meal_payload("Friday", "Pulao", 1, NOT_SET)
    assert body["meal_time"] == ""
    assert body["meal_type"] == "Lunch"
    with pytest.raises(ValidationError):
        new_meal_payload("Sunday", "Pulao", 1, NOT_SET)


def test_save_item_update_or_create(api: MagicMock) -> None:
    svc = FoodMenuService(api, {"id": 1, "role": "admin"})
    svc.save_item("Tuesday", " Rice ", MENU["Tuesday"][0], "12:30 PM")
    api.put.assert_called_once_with(
        "/food-menu/2", json={"food_item": "Rice", "editorId": 1}, error_message="Failed to update the menu."
    )
    svc.save_item("Wednesday", "Dal", None, "12:30 PM")
    assert api.post.call_args.kwargs["json"]["day_of_week"] == "Wednesday"
    with pytest.raises(ValidationError):
        svc.save_item("Wednesday", "  ", None, "12:30 PM")
    with pytest.raises(PermissionDeniedError):
        FoodMenuService(api, {"id": 2, "role": "teacher"}).set_lunch_time("1 PM")
