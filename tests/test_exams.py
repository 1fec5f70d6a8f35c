"""
Tests for exams: question sanitising, countdown, grading payload, start/submit flow.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from school_client.domains.exams import (
    WRITTEN_ANSWER,
    blank_question,
    correct_option_text,
    filter_exams,
    format_countdown,
    graded_answers_payload,
    parse_options,
    sanitize_questions,
    time_limit_seconds,
)
from school_client.errors import PermissionDeniedError, ValidationError
from school_client.infrastructure.api.client import ApiClient
from school_client.services.exams import ExamService

TEACHER = {"id": 2, "role": "teacher"}
STUDENT = {"id": 8, "role": "student", "class_group": "Class 6"}


def test_sanitize_questions() -> None:
    mc = {**blank_question(), "question_text": "2+2?", "marks": "x", "correct_answer": "B"}
    written = {"question_text": "Explain", "question_type": WRITTEN_ANSWER, "marks": " 5 ", "options": {"A": "junk"}}
    out = sanitize_questions([mc, written])
    assert out[0]["marks"] == 1
    assert out[0]["correct_answer"] == "B"
    assert out[1] == {"question_text": "Explain", "question_type": WRITTEN_ANSWER, "marks": 5}


def test_filter_exams() -> None:
    exams = [{"title": "Maths UT1", "class_group": "Class 6"}, {"title": "Science", "class_group": "Class 7"}]
    assert filter_exams(exams, "class 7") == [exams[1]]
    assert filter_exams(exams, "ut1") == [exams[0]]


def test_time_limit_and_countdown() -> None:
    assert time_limit_seconds({"time_limit_mins": 30}) == 1800
    assert time_limit_seconds({"time_limit_mins": 0}) is None
    assert time_limit_seconds({"time_limit_mins": "abc"}) is None
    assert format_countdown(125) == "02:05"
    assert format_countdown(-3) == "00:00"


def test_options_and_correct_text() -> None:
    assert parse_options('{"A": "1", "B": "4"}') == {"A": "1", "B": "4"}
    assert parse_options("not json") is None
    q = {"question_type": "multiple_choice", "options": {"A": "3", "B": "4"}, "correct_answer": "B"}
    assert correct_option_text(q) == "4"
    assert correct_option_text({**q, "question_type": WRITTEN_ANSWER}) is None


def test_graded_answers_blank_is_zero() -> None:
    assert graded_answers_payload({1: "3", 2: ""}) == [
        {"question_id": 1, "marks_awarded": "3"},
        {"question_id": 2, "marks_awarded": 0},
    ]


@pytest.fixture
def api() -> MagicMock:
    return MagicMock(spec=ApiClient)


def test_save_requires_title_class_questions(api: MagicMock) -> None:
    svc = ExamService(api, TEACHER)
    with pytest.raises(ValidationError, match="Title, Class, and Questions are required."):
        svc.save({"title": "UT1", "class_group": "Class 6"}, [])
    svc.save({"title": "UT1", "class_group": "Class 6"}, [blank_question()])
    body = api.post.call_args.kwargs["json"]
    assert body["teacher_id"] == 2
    assert len(body["questions"]) == 1
    svc.save({"title": "UT1", "class_group": "Class 6"}, [blank_question()], exam_id=4)
    assert api.put.call_args.args == ("/exams/4",)


def test_student_cannot_author(api: MagicMock) -> None:
    with pytest.raises(PermissionDeniedError):
        ExamService(api, STUDENT).delete(1)


def test_start_exam(api: MagicMock) -> None:
    api.post.return_value = {"attempt_id": 41}
    api.get.return_value = [{"question_id": 1, "options": '{"A": "x"}'}]
    out = ExamService(api, STUDENT).start({"exam_id": 3, "time_limit_mins": 10})
    assert out == {
        "attempt_id": 41,
        "questions": [{"question_id": 1, "options": {"A": "x"}}],
        "time_limit_seconds": 600,
    }
    assert api.post.call_args.args == ("/exams/3/start",)
    assert api.get.call_args.args == ("/exams/take/3",)


def test_grade_payload(api: MagicMock) -> None:
    ExamService(api, TEACHER).grade(41, {1: "2"}, feedback="Good")
    assert api.post.call_args.args == ("/submissions/41/grade",)
    assert api.post.call_args.kwargs["json"] == {
        "gradedAnswers": [{"question_id": 1, "marks_awarded": "2"}],
        "teacher_feedback": "Good",
        "teacher_id": 2,
    }
