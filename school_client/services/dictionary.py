"""Dictionary search and management."""

from __future__ import annotations

from typing import Any

from school_client.domains.dictionary import validate_word
from school_client.domains.roles import ADMIN, TEACHER, require_role
from school_client.services.base import BaseService, as_list


class DictionaryService(BaseService):
    def search(self, query: str) -> list[dict[str, Any]]:
        return as_list(
            self._api.get("/dictionary/search", params={"query": query}, error_message="Could not search the dictionary.")
        )

    def add_word(self, form: dict[str, Any]) -> Any:
        require_role(self.user, ADMIN, TEACHER, action="manage the dictionary")
        return self._api.post("/dictionary/add", json=validate_word(form), error_message="Could not add the word.")

    def edit_word(self, word_id: Any, form: dict[str, Any]) -> Any:
        require_role(self.user, ADMIN, TEACHER, action="manage the dictionary")
        return self._api.put(
            f"/dictionary/edit/{word_id}", json=validate_word(form), error_message="Could not update the word."
        )

    def delete_word(self, word_id: Any) -> Any:
        require_role(self.user, ADMIN, TEACHER, action="manage the dictionary")
        return self._api.delete(f"/dictionary/delete/{word_id}", error_message="Could not delete the word.")
