"""English-Telugu dictionary: alphabet index and entry validation."""

from __future__ import annotations

import string
from typing import Any

from school_client.errors import ValidationError

ALPHABET = tuple(string.ascii_uppercase)
DEFAULT_LETTER = "A"
WORD_FIELDS = ("word", "part_of_speech", "definition_en", "definition_te")
PARTS_OF_SPEECH = ("Noun", "Pronoun", "Verb", "Adjective", "Adverb", "Preposition", "Conjunction", "Interjection")


def search_term(query: str | None, active_letter: str = DEFAULT_LETTER) -> str:
    """Typed query wins; an empty box falls back to the selected letter."""
    q = (query or "").strip()
    return q if q else (active_letter or DEFAULT_LETTER)


def validate_word(form: dict[str, Any]) -> dict[str, str]:
    """
    Raises:
        ValidationError: Any of the four fields is blank.
    """
    cleaned = {k: str(form.get(k) or "").strip() for k in WORD_FIELDS}
    if not all(cleaned.values()):
        raise ValidationError("All fields are required.")
    return cleaned


def remove_entry(entries: list[dict[str, Any]], word_id: Any) -> list[dict[str, Any]]:
    return [e for e in entries if e.get("id") != word_id]
