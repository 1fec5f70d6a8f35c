"""
Library rules: borrow eligibility, request tabs and status labels, history filters
and form validation for books, digital resources and borrow requests.
"""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Any

from school_client.domains.dates import parse_date, parse_datetime
from school_client.domains.roles import STUDENT
from school_client.errors import ValidationError

TAB_PENDING = "PENDING"
TAB_ISSUED = "ISSUED"
TAB_OVERDUE = "OVERDUE"
TAB_ALL = "ALL"
REQUEST_TABS = (TAB_PENDING, TAB_ISSUED, TAB_OVERDUE, TAB_ALL)

ACTION_APPROVE = "approved"
ACTION_REJECT = "rejected"
ACTION_RETURNED = "returned"

HISTORY_DEFAULT_LIMIT = 10

NO_COPIES_MESSAGE = "There are no copies left for this book. Please wait for a return."


def can_borrow(book: dict[str, Any]) -> bool:
    try:
        return int(book.get("available_copies") or 0) > 0
    except (TypeError, ValueError):
        return False


def ensure_can_borrow(book: dict[str, Any]) -> None:
    if not can_borrow(book):
        raise ValidationError(NO_COPIES_MESSAGE)


def is_overdue(return_date: Any, today: date | None = None) -> bool:
    """True when the expected return date is before today (midnight)."""
    d = parse_date(return_date)
    if d is None:
        return False
    return d < (today or date.today())


def request_status(item: dict[str, Any], today: date | None = None) -> str:
    """Display label for a borrow request."""
    status = item.get("status")
    if status == "approved":
        return "Overdue" if is_overdue(item.get("expected_return_date"), today) else "Issued"
    if status in ("pending", "returned", "rejected"):
        return str(status).capitalize()
    return str(status or "")


def _matches(item: dict[str, Any], query: str) -> bool:
    for field in ("book_title", "full_name", "roll_no"):
        if query in str(item.get(field) or "").lower():
            return True
    return query in str(item.get("mobile") or "")


def search_requests(items: list[dict[str, Any]], search: str) -> list[dict[str, Any]]:
    q = (search or "").strip().lower()
    if not q:
        return list(items)
    return [i for i in items if _matches(i, q)]


def filter_requests(
    items: list[dict[str, Any]], tab: str = TAB_ALL, search: str = "", today: date | None = None
) -> list[dict[str, Any]]:
    """Admin action centre: tab filter, then search on title, name, roll number, mobile."""
    if tab == TAB_PENDING:
        items = [i for i in items if i.get("status") == "pending"]
    elif tab == TAB_ISSUED:
        items = [i for i in items if i.get("status") == "approved" and not is_overdue(i.get("expected_return_date"), today)]
    elif tab == TAB_OVERDUE:
        items = [i for i in items if i.get("status") == "approved" and is_overdue(i.get("expected_return_date"), today)]
    return search_requests(items, search)


def filter_history(
    items: list[dict[str, Any]],
    search: str = "",
    start: date | None = None,
    end: date | None = None,
) -> list[dict[str, Any]]:
    """Return history filtered by search and actual return date; unfiltered shows the latest 10."""
    result = search_requests(items, search)
    if start:
        lo = datetime.combine(start, time.min)
        result = [i for i in result if (parse_datetime(i.get("actual_return_date")) or datetime.min) >= lo]
    if end:
        hi = datetime.combine(end, time(23, 59, 59))
        result = [i for i in result if (parse_datetime(i.get("actual_return_date")) or datetime.max) <= hi]
    if not (search or "").strip() and not start and not end:
        result = result[:HISTORY_DEFAULT_LIMIT]
    return result


def validate_book(form: dict[str, Any]) -> None:
    if any(not str(form.get(k) or "").strip() for k in ("title", "author", "book_no", "total_copies")):
        raise ValidationError("Please fill Title, Author, Book No, and Total Copies.")


def validate_digital_resource(form: dict[str, Any], has_file: bool, editing: bool) -> None:
    if not str(form.get("title") or "").strip() or not str(form.get("author") or "").strip():
        raise ValidationError("Title and Author are required.")
    if not editing and not has_file:
        raise ValidationError("Please select a document to upload.")


def validate_borrow_request(form: dict[str, Any]) -> None:
    """Checked in order; the first missing field is reported."""
    is_student = form.get("user_role") == STUDENT
    if not form.get("full_name"):
        raise ValidationError("Full Name is required.")
    if not form.get("roll_no"):
        raise ValidationError("Roll No is required." if is_student else "User ID is required.")
    if not form.get("mobile"):
        raise ValidationError("Mobile Number is required.")
    if is_student and not form.get("class_name"):
        raise ValidationError("Class is required for students.")


def borrow_form_defaults(user: dict[str, Any]) -> dict[str, Any]:
    """Prefill a borrow request from the signed-in user."""
    return {
        "full_name": user.get("full_name") or "",
        "roll_no": str(user.get("roll_no") or user.get("username") or ""),
        "class_name": user.get("class_group") or "",
        "mobile": user.get("mobile") or user.get("phone") or "",
        "email": user.get("email") or "",
        "user_role": user.get("role") or "",
    }
