"""Library endpoints: catalogue, digital library, borrow requests and history."""

from __future__ import annotations

from datetime import date
from typing import Any

from school_client.domains.library import (
    ACTION_APPROVE,
    ACTION_REJECT,
    ACTION_RETURNED,
    ensure_can_borrow,
    validate_book,
    validate_borrow_request,
    validate_digital_resource,
)
from school_client.domains.roles import ADMIN, require_role
from school_client.errors import ValidationError
from school_client.infrastructure.api.client import Upload
from school_client.services.base import BaseService, as_list
from school_client.utils.logger import get_logger

logger = get_logger(__name__)

BOOK_FIELDS = ("title", "author", "book_no", "publisher", "category", "rack_no", "total_copies", "available_copies")
DIGITAL_FIELDS = ("title", "author", "book_no", "category", "publisher")


class LibraryService(BaseService):
    # --- books ---

    def books(self, search: str = "") -> list[dict[str, Any]]:
        return as_list(self._api.get("/library/books", params={"search": search}, error_message="Could not load books."))

    def save_book(self, form: dict[str, Any], cover: Upload | None = None, book_id: Any = None) -> Any:
        require_role(self.user, ADMIN, action="manage books")
        validate_book(form)
        fields = {k: form.get(k) for k in BOOK_FIELDS if form.get(k) not in (None, "")}
        files = {"cover_image": cover} if cover else None
        if book_id is not None:
            return self._api.put(f"/library/books/{book_id}", data=fields, files=files, error_message="Update failed.")
        logger.info("Adding book %r", fields.get("title"))
        return self._api.post("/library/books", data=fields, files=files, error_message="Could not add book.")

    def delete_book(self, book_id: Any) -> Any:
        require_role(self.user, ADMIN, action="manage books")
        return self._api.delete(f"/library/books/{book_id}", error_message="Delete failed.")

    # --- digital library ---

    def digital_resources(self, search: str = "") -> list[dict[str, Any]]:
        return as_list(
            self._api.get("/library/digital", params={"search": search}, error_message="Could not load resources.")
        )

    def save_digital_resource(
        self,
        form: dict[str, Any],
        document: Upload | None = None,
        cover: Upload | None = None,
        resource_id: Any = None,
    ) -> Any:
        require_role(self.user, ADMIN, action="manage digital resources")
        validate_digital_resource(form, has_file=document is not None, editing=resource_id is not None)
        fields = {k: form.get(k) or "" for k in DIGITAL_FIELDS}
        files: dict[str, Upload] = {}
        if document:
            files["file"] = document
        if cover:
            files["cover_image"] = cover
        if resource_id is not None:
            return self._api.put(
                f"/library/digital/{resource_id}", data=fields, files=files, error_message="Operation failed."
            )
        return self._api.post("/library/digital", data=fields, files=files, error_message="Operation failed.")

    def delete_digital_resource(self, resource_id: Any) -> Any:
        require_role(self.user, ADMIN, action="manage digital resources")
        return self._api.delete(f"/library/digital/{resource_id}", error_message="Failed to delete.")

    # --- borrowing ---

    def request_borrow(
        self, book: dict[str, Any], form: dict[str, Any], borrow_date: date, return_date: date
    ) -> Any:
        """
        Raises:
            ValidationError: No copies left, a required field is missing, or the
                return date is before the borrow date.
        """
        ensure_can_borrow(book)
        validate_borrow_request(form)
        if return_date < borrow_date:
            raise ValidationError("Return date must be after the borrow date.")
        body = {
            **form,
            "book_id": book.get("id"),
            "borrow_date": borrow_date.strftime("%Y-%m-%d"),
            "return_date": return_date.strftime("%Y-%m-%d"),
        }
        logger.info("Borrow request for book %s by %s", book.get("id"), form.get("full_name"))
        return self._api.post("/library/request", json=body, error_message="Request failed")

    def my_history(self) -> list[dict[str, Any]]:
        return as_list(self._api.get("/library/student/history", error_message="Could not load your books."))

    # --- admin ---

    def requests(self) -> list[dict[str, Any]]:
        require_role(self.user, ADMIN, action="review library requests")
        return as_list(self._api.get("/library/admin/requests", error_message="Could not load requests."))

    def act_on_request(self, request_id: Any, action: str) -> Any:
        """approved/rejected go to the request-action endpoint; returned closes the loan."""
        require_role(self.user, ADMIN, action="review library requests")
        if action == ACTION_RETURNED:
            return self._api.put(f"/library/return/{request_id}", json={}, error_message="Action failed")
        if action not in (ACTION_APPROVE, ACTION_REJECT):
            raise ValidationError(f"Unknown action: {action}")
        return self._api.put(
            f"/library/admin/request-action/{request_id}", json={"action": action}, error_message="Action failed"
        )

    def history(self) -> list[dict[str, Any]]:
        require_role(self.user, ADMIN, action="view library history")
        return as_list(self._api.get("/library/admin/history", error_message="Could not load history."))
