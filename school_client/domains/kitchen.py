"""Kitchen inventory forms: daily provisions, permanent items and usage."""

from __future__ import annotations

from typing import Any

from school_client.errors import ValidationError

UNITS = ("g", "kg", "l", "ml", "pcs", "pkt")
DEFAULT_UNIT = "g"

MODE_ADD_PROVISION = "addProvision"
MODE_ADD_PERMANENT = "addPermanentItem"
MODE_EDIT_PERMANENT = "editPermanentItem"
MODE_LOG_USAGE = "logUsage"

KIND_PROVISIONS = "provisions"
KIND_USAGE = "usage"
KIND_PERMANENT = "permanent"


def _quantity(value: Any) -> float:
    try:
        qty = float(value)
    except (TypeError, ValueError):
        raise ValidationError("Quantity must be a number.") from None
    if qty <= 0:
        raise ValidationError("Quantity must be greater than zero.")
    return qty


def _qty_text(qty: float) -> str:
    return str(int(qty)) if qty == int(qty) else str(qty)


def initial_form(item: dict[str, Any] | None, mode: str) -> dict[str, Any]:
    """Starting values for the item form; usage logging always starts at 1."""
    if not item:
        return {"itemName": "", "quantity": 1, "unit": DEFAULT_UNIT, "notes": ""}
    qty = 1 if mode == MODE_LOG_USAGE else (item.get("quantity_remaining") or item.get("total_quantity") or 1)
    return {
        "itemName": item.get("item_name") or "",
        "quantity": qty,
        "unit": item.get("unit") or DEFAULT_UNIT,
        "notes": item.get("notes") or "",
    }


def item_form_fields(form: dict[str, Any], mode: str) -> dict[str, Any]:
    """
    Multipart fields for a new provision or permanent item.

    Raises:
        ValidationError: Missing name, bad quantity or unknown unit.
    """
    name = str(form.get("itemName") or "").strip()
    if not name:
        raise ValidationError("Item name is required.")
    qty = _qty_text(_quantity(form.get("quantity")))
    unit = form.get("unit") or DEFAULT_UNIT
    if unit not in UNITS:
        raise ValidationError(f"Unit must be one of: {', '.join(UNITS)}.")
    fields: dict[str, Any] = {"itemName": name, "quantity": qty, "unit": unit}
    if form.get("notes"):
        fields["notes"] = form["notes"]
    if mode == MODE_ADD_PERMANENT:
        fields["totalQuantity"] = qty
    return fields


def changed_fields(initial: dict[str, Any], current: dict[str, Any], mode: str) -> dict[str, Any]:
    """
    Fields that differ from the initial form. Permanent items send quantity as
    totalQuantity and never change unit.
    """
    out: dict[str, Any] = {}
    if current.get("itemName") != initial.get("itemName"):
        out["itemName"] = current.get("itemName")
    if str(current.get("quantity")) != str(initial.get("quantity")):
        field = "totalQuantity" if mode == MODE_EDIT_PERMANENT else "quantity"
        out[field] = _qty_text(_quantity(current.get("quantity")))
    if mode != MODE_EDIT_PERMANENT and current.get("unit") != initial.get("unit"):
        out["unit"] = current.get("unit")
    if (current.get("notes") or "") != (initial.get("notes") or ""):
        out["notes"] = current.get("notes") or ""
    return out


def quantity_label(item: dict[str, Any], kind: str) -> tuple[str, Any]:
    """(label, value) shown on an inventory card."""
    if kind == KIND_USAGE:
        return "Used", item.get("quantity_used")
    if kind == KIND_PROVISIONS:
        return "Left", item.get("quantity_remaining")
    return "Qty", item.get("total_quantity")


def usage_quantity(value: Any) -> float:
    return _quantity(value)
