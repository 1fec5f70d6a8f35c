"""
Tests for homework: status and ordering, validation, create/update multipart bodies.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from school_client.domains.homework import (
    can_delete_submission,
    sort_student_assignments,
    submission_status,
    validate_written_answer,
)
from school_client.errors import PermissionDeniedError, ValidationError
from school_client.infrastructure.api.client import ApiClient, file_part
from school_client.services.homework import HomeworkService

TEACHER = {"id": 20, "role": "teacher"}
STUDENT = {"id": 5, "role": "student", "class_group": "Class 4"}
FORM = {"title": " Fractions ", "class_group": "Class 4", "subject": "Maths", "due_date": "2024-08-01"}


def test_submission_status() -> None:
    assert submission_status({}) == "Pending"
    assert submission_status({"submission_id": 1}) == "Submitted"
    assert submission_status({"submission_id": 1, "status": "Graded"}) == "Graded"
    assert submission_status({"submission_id": 1, "status": "weird"}) == "Submitted"


def test_can_delete_submission() -> None:
    assert can_delete_submission({"submission_id": 1})
    assert not can_delete_submission({"submission_id": 1, "status": "Graded"})
    assert not can_delete_submission({})


def test_pending_first_then_newest_due() -> None:
    items = [
        {"id": 1, "submission_id": 9, "status": "Submitted", "due_date": "2024-09-01"},
        {"id": 2, "due_date": "2024-06-01"},
        {"id": 3, "due_date": "2024-07-01"},
        {"id": 4, "submission_id": 8, "status": "Graded", "due_date": "2024-05-01"},
    ]
    assert [i["id"] for i in sort_student_assignments(items)] == [3, 2, 1, 4]


def test_written_answer_required() -> None:
    assert validate_written_answer("  x ") == "x"
    with pytest.raises(ValidationError):
        validate_written_answer("   ")


@pytest.fixture
def api() -> MagicMock:
    return MagicMock(spec=ApiClient)


def test_create_assignment_with_attachment(api: MagicMock) -> None:
    upload = file_part("sheet.pdf", b"%PDF")
    HomeworkService(api, TEACHER).save_assignment(FORM, attachment=upload)
    args, kwargs = api.post.call_args
    assert args == ("/homework",)
    assert kwargs["data"]["title"] == "Fractions"
    assert kwargs["data"]["teacher_id"] == 20
    assert kwargs["data"]["homework_type"] == "PDF"
    assert kwargs["files"] == {"attachment": upload}


def test_update_keeps_existing_attachment(api: MagicMock) -> None:
    existing = {"id": 7, "attachment_path": "/uploads/old.pdf"}
    HomeworkService(api, TEACHER).save_assignment(FORM, existing=existing)
    args, kwargs = api.post.call_args
    assert args == ("/homework/update/7",)
    assert kwargs["data"]["existing_attachment_path"] == "/uploads/old.pdf"
    assert "teacher_id" not in kwargs["data"]
    assert kwargs["files"] is None


def test_save_assignment_rules(api: MagicMock) -> None:
    with pytest.raises(ValidationError, match="Title, Class, Subject, and Due Date are required."):
        HomeworkService(api, TEACHER).save_assignment({**FORM, "subject": ""})
    with pytest.raises(PermissionDeniedError):
        HomeworkService(api, STUDENT).save_assignment(FORM)
    api.post.assert_not_called()


def test_student_submissions(api: MagicMock) -> None:
    svc = HomeworkService(api, STUDENT)
    svc.submit_written(3, " my answer ")
    assert api.post.call_args.kwargs["json"] == {"assignment_id": 3, "student_id": 5, "written_answer": "my answer"}
    svc.submit_file(3, file_part("a.jpg", b""))
    assert api.post.call_args.args == ("/homework/submit/3",)
    assert api.post.call_args.kwargs["data"] == {"student_id": 5}
    svc.delete_submission(12)
    api.delete.assert_called_once_with(
        "/homework/submission/12", json={"student_id": 5}, error_message="Could not delete submission."
    )


def test_list_for_student_path(api: MagicMock) -> None:
    api.get.return_value = []
    HomeworkService(api, STUDENT).list_for_student()
    assert api.get.call_args.args == ("/homework/student/5/Class 4",)


def test_submit_file_from_local_path(api: MagicMock, tmp_path: Path) -> None:
    sheet = tmp_path / "worksheet.pdf"
    sheet.write_bytes(b"%PDF-1.4")
    HomeworkService(api, STUDENT).submit_file(3, sheet)
    assert api.post.call_args.kwargs["files"] == {"submission": ("worksheet.pdf", b"%PDF-1.4", "application/pdf")}
