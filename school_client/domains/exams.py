"""Online exams: question sanitising, validation, countdown and grading payloads."""

from __future__ import annotations

import json
from typing import Any

from school_client.errors import ValidationError
from school_client.utils.logger import get_logger

logger = get_logger(__name__)

MULTIPLE_CHOICE = "multiple_choice"
WRITTEN_ANSWER = "written_answer"
QUESTION_TYPES = (MULTIPLE_CHOICE, WRITTEN_ANSWER)
OPTION_KEYS = ("A", "B", "C", "D")


def blank_question() -> dict[str, Any]:
    return {
        "question_text": "",
        "question_type": MULTIPLE_CHOICE,
        "options": {k: "" for k in OPTION_KEYS},
        "correct_answer": "",
        "marks": "1",
    }


def filter_exams(exams: list[dict[str, Any]], query: str) -> list[dict[str, Any]]:
    """Case-insensitive match on title or class group."""
    q = (query or "").strip().lower()
    if not q:
        return list(exams)
    return [
        e for e in exams
        if q in str(e.get("title") or "").lower() or q in str(e.get("class_group") or "").lower()
    ]


def filter_submissions(items: list[dict[str, Any]], query: str) -> list[dict[str, Any]]:
    q = (query or "").strip().lower()
    if not q:
        return list(items)
    return [
        s for s in items
        if q in str(s.get("student_name") or "").lower() or q in str(s.get("roll_no") or "").lower()
    ]


def _marks(value: Any) -> int:
    try:
        return int(str(value).strip()) or 1
    except (TypeError, ValueError):
        return 1


def sanitize_questions(questions: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Integer marks (default 1); options and correct answer only for multiple choice."""
    out = []
    for q in questions:
        clean = {
            "question_text": q.get("question_text", ""),
            "question_type": q.get("question_type") or MULTIPLE_CHOICE,
            "marks": _marks(q.get("marks")),
        }
        if clean["question_type"] == MULTIPLE_CHOICE:
            clean["options"] = q.get("options")
            clean["correct_answer"] = q.get("correct_answer")
        out.append(clean)
    return out


def validate_exam(details: dict[str, Any], questions: list[dict[str, Any]]) -> None:
    if not details.get("title") or not details.get("class_group") or not questions:
        raise ValidationError("Title, Class, and Questions are required.")


def exam_payload(details: dict[str, Any], questions: list[dict[str, Any]], teacher_id: Any) -> dict[str, Any]:
    return {**details, "questions": sanitize_questions(questions), "teacher_id": teacher_id}


def parse_options(value: Any) -> Any:
    """Options may arrive JSON-encoded."""
    if isinstance(value, str):
        try:
            return json.loads(value)
        except ValueError:
            logger.warning("Unparseable question options: %r", value[:80])
            return None
    return value


def normalize_questions(items: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return [{**q, "options": parse_options(q.get("options"))} for q in items]


def time_limit_seconds(exam: dict[str, Any]) -> int | None:
    """Countdown length, or None for untimed exams."""
    try:
        mins = int(exam.get("time_limit_mins") or 0)
    except (TypeError, ValueError):
        return None
    return mins * 60 if mins > 0 else None


def format_countdown(seconds: int | float) -> str:
    """MM:SS; negative values show 00:00."""
    if seconds < 0:
        return "00:00"
    total = int(seconds)
    return f"{total // 60:02d}:{total % 60:02d}"


def initial_grades(details: list[dict[str, Any]]) -> dict[Any, Any]:
    return {d.get("question_id"): d.get("marks_awarded") or "" for d in details}


def graded_answers_payload(grades: dict[Any, Any]) -> list[dict[str, Any]]:
    """Blank marks are sent as 0."""
    return [{"question_id": qid, "marks_awarded": marks or 0} for qid, marks in grades.items()]


def correct_option_text(question: dict[str, Any]) -> str | None:
    options = question.get("options")
    if question.get("question_type") != MULTIPLE_CHOICE or not isinstance(options, dict):
        return None
    return options.get(question.get("correct_answer"))
