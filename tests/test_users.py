"""
Tests for user management and profiles.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from school_client.domains.users import (
    add_subject,
    changed_fields,
    create_payload,
    group_users,
    validate_user_form,
)
from school_client.errors import PermissionDeniedError, ValidationError
from school_client.infrastructure.api.client import ApiClient, file_part
from school_client.services.users import ProfileService, UserService

ADMIN = {"id": 1, "role": "admin"}
USERS = [
    {"id": 1, "role": "admin", "full_name": "Root"},
    {"id": 2, "role": "teacher", "full_name": "Rao"},
    {"id": 3, "role": "others", "full_name": "Cook", "class_group": "Teachers"},
    {"id": 4, "role": "student", "full_name": "Zoya", "class_group": "Class 1", "roll_no": "10"},
    {"id": 5, "role": "student", "full_name": "Amit", "class_group": "Class 1", "roll_no": "2"},
    {"id": 6, "role": "student", "full_name": "Bina", "class_group": "LKG"},
]


def test_group_users() -> None:
    groups = group_users(USERS)
    assert [u["id"] for u in groups["Admins"]] == [1]
    assert [u["id"] for u in groups["Teachers"]] == [3, 2]
    assert [u["id"] for u in groups["Others"]] == [3]
    assert [u["id"] for u in groups["Class 1"]] == [5, 4]
    assert [u["id"] for u in groups["LKG"]] == [6]
    assert groups["Class 10"] == []
    assert [u["id"] for u in group_users(USERS, "zoy")["Class 1"]] == [4]


def test_validate_user_form() -> None:
    with pytest.raises(ValidationError, match="Username and Full Name are required."):
        validate_user_form({"username": "x"}, editing=False)
    with pytest.raises(ValidationError, match="Class and Roll Number are mandatory for students."):
        validate_user_form({"username": "x", "full_name": "X", "role": "student", "class_group": "LKG"}, editing=True)
    with pytest.raises(ValidationError, match="Password cannot be empty for new users."):
        validate_user_form({"username": "x", "full_name": "X", "role": "admin"}, editing=False)
    validate_user_form({"username": "x", "full_name": "X", "role": "admin"}, editing=True)


def test_changed_fields() -> None:
    original = {"id": 4, "username": "z", "roll_no": 10, "role": "teacher", "subjects_taught": ["Maths"], "phone": None}
    same = {**original, "roll_no": "10", "phone": ""}
    assert changed_fields(original, same) == {}
    edited = {**original, "full_name": "Zoya K", "password": "new", "subjects_taught": ["Maths", "EVS"]}
    assert changed_fields(original, edited) == {
        "full_name": "Zoya K",
        "password": "new",
        "subjects_taught": ["Maths", "EVS"],
    }


def test_subjects_and_create_payload() -> None:
    assert add_subject(["Maths"], " EVS ") == ["Maths", "EVS"]
    assert add_subject(["Maths"], "Maths") == ["Maths"]
    with pytest.raises(ValidationError):
        add_subject([], "C++")
    assert "subjects_taught" not in create_payload({"role": "student", "subjects_taught": ["x"]})
    assert create_payload({"role": "teacher", "subjects_taught": ["x"]})["subjects_taught"] == ["x"]


@pytest.fixture
def api() -> MagicMock:
    return MagicMock(spec=ApiClient)


def test_update_sends_diff_only(api: MagicMock) -> None:
    svc = UserService(api, ADMIN)
    original = {"id": 6, "username": "bina", "full_name": "Bina", "role": "admin"}
    with pytest.raises(ValidationError, match="No changes detected."):
        svc.update(original, dict(original))
    svc.update(original, {**original, "full_name": "Bina R"})
    api.put.assert_called_once_with("/users/6", json={"full_name": "Bina R"}, error_message="An error occurred.")


def test_user_management_is_admin_only(api: MagicMock) -> None:
    with pytest.raises(PermissionDeniedError):
        UserService(api, {"id": 2, "role": "teacher"}).list_users()


def test_profile_update_multipart(api: MagicMock) -> None:
    api.put.return_value = {"full_name": "New"}
    image = file_part("me.png", b"")
    out = ProfileService(api, {"id": 4}).update({"full_name": "New", "phone": None, "profile_image_url": "/x"}, image)
    assert out == {"full_name": "New"}
    args, kwargs = api.put.call_args
    assert args == ("/profiles/4",)
    assert kwargs["data"] == {"full_name": "New"}
    assert kwargs["files"] == {"profileImage": image}
