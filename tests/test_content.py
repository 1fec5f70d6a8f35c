"""
Tests for content screens: dictionary, online classes, events, textbooks.
"""

from __future__ import annotations

from datetime import datetime
from unittest.mock import MagicMock

import pytest

from school_client.domains.dictionary import remove_entry, search_term, validate_word
from school_client.domains.events import event_payload, sort_events, target_options, validate_event
from school_client.domains.online_classes import is_upcoming, split_classes, visible_classes
from school_client.domains.resources import displayable_classes, filter_resources, resource_fields, validate_resource
from school_client.errors import PermissionDeniedError, ValidationError
from school_client.infrastructure.api.client import ApiClient, file_part
from school_client.services.dictionary import DictionaryService
from school_client.services.events import EventService
from school_client.services.online_classes import OnlineClassService
from school_client.services.resources import ResourceService

WHEN = datetime(2024, 8, 15, 9, 30)


@pytest.fixture
def api() -> MagicMock:
    return MagicMock(spec=ApiClient)


# --- dictionary ---

def test_search_term_falls_back_to_letter() -> None:
    assert search_term("  apple ", "B") == "apple"
    assert search_term("", "B") == "B"
    assert search_term(None, "") == "A"


def test_validate_word() -> None:
    form = {"word": " cat ", "part_of_speech": "Noun", "definition_en": "A pet", "definition_te": "పిల్లి"}
    assert validate_word(form)["word"] == "cat"
    with pytest.raises(ValidationError, match="All fields are required."):
        validate_word({**form, "definition_te": " "})
    assert remove_entry([{"id": 1}, {"id": 2}], 1) == [{"id": 2}]


def test_dictionary_writes_need_staff(api: MagicMock) -> None:
    with pytest.raises(PermissionDeniedError):
        DictionaryService(api, {"id": 1, "role": "student"}).delete_word(3)
    DictionaryService(api, {"id": 1, "role": "teacher"}).delete_word(3)
    assert api.delete.call_args.args == ("/dictionary/delete/3",)


# --- online classes ---

CLASSES = [
    {"id": 1, "class_type": "live", "class_group": "Class 3", "teacher_id": 7, "class_datetime": "2024-08-20T10:00:00"},
    {"id": 2, "class_type": "live", "class_group": "All", "created_by": 9, "class_datetime": "2024-08-10T10:00:00"},
    {"id": 3, "class_type": "recorded", "class_group": "Class 4", "teacher_id": 7, "class_datetime": "2024-07-01T10:00:00"},
    {"id": 4, "class_type": "recorded", "class_group": "Class 3", "teacher_id": 8, "class_datetime": "2024-07-05T10:00:00"},
]


def test_visible_classes_per_role() -> None:
    assert len(visible_classes(CLASSES, {"role": "admin"})) == 4
    assert [c["id"] for c in visible_classes(CLASSES, {"id": 7, "role": "teacher"})] == [1, 3]
    assert [c["id"] for c in visible_classes(CLASSES, {"id": 9, "role": "teacher"})] == [2]
    assert [c["id"] for c in visible_classes(CLASSES, {"role": "student", "class_group": "Class 3"})] == [1, 2, 4]
    assert visible_classes(CLASSES, {"role": "others"}) == []


def test_split_classes_order() -> None:
    live, recorded = split_classes(CLASSES)
    assert [c["id"] for c in live] == [2, 1]
    assert [c["id"] for c in recorded] == [4, 3]
    assert is_upcoming(CLASSES[0], now=datetime(2024, 8, 15))
    assert not is_upcoming(CLASSES[1], now=datetime(2024, 8, 15))


def test_save_live_and_recorded(api: MagicMock) -> None:
    svc = OnlineClassService(api, {"id": 7, "role": "teacher"})
    base = {"title": "Fractions", "class_group": "Class 3", "subject": "Maths", "teacher_id": 7}
    with pytest.raises(ValidationError, match="Meeting Link is required."):
        svc.save(base, "live", WHEN)
    svc.save({**base, "meet_link": "https://meet.test/x"}, "live", WHEN)
    data = api.post.call_args.kwargs["data"]
    assert data["class_type"] == "live"
    assert data["meet_link"] == "https://meet.test/x"
    assert data["class_datetime"] == "2024-08-15T09:30:00"

    with pytest.raises(ValidationError, match="Topic and a video file are required."):
        svc.save({**base, "topic": "Halves"}, "recorded", WHEN)
    video = file_part("lesson.mp4", b"")
    svc.save({**base, "topic": "Halves"}, "recorded", WHEN, video=video)
    assert api.post.call_args.kwargs["files"] == {"videoFile": video}

    with pytest.raises(ValidationError, match="Title, Class, and Subject are required."):
        svc.save({**base, "subject": ""}, "live", WHEN, class_id=1)


def test_options_for_all_classes(api: MagicMock) -> None:
    api.get.side_effect = [["Maths"], [{"id": 1}]]
    out = OnlineClassService(api, {"id": 1, "role": "admin"}).options("All")
    assert out == {"subjects": ["Maths"], "teachers": [{"id": 1}]}
    assert api.get.call_args_list[0].args == ("/subjects/all-unique",)


# --- events ---

def test_event_payload_and_sort() -> None:
    body = event_payload({"title": " Sports Day "}, WHEN, 1)
    assert body["event_datetime"] == "2024-08-15 09:30:00"
    assert body["target_class"] == "All"
    with pytest.raises(ValidationError, match="Event Title is mandatory."):
        event_payload({"title": ""}, WHEN, 1)
    events = [{"id": 1, "event_datetime": "2024-01-01"}, {"id": 2, "event_datetime": "2024-06-01"}]
    assert [e["id"] for e in sort_events(events)] == [2, 1]
    assert target_options(["Class 1", "All"]) == ["All", "Class 1"]


def test_event_service(api: MagicMock) -> None:
    svc = EventService(api, {"id": 1, "role": "admin"})
    svc.save({"title": "Fair"}, WHEN)
    assert api.post.call_args.kwargs["json"]["created_by"] == 1
    svc.delete(5)
    assert api.delete.call_args.kwargs["json"] == {"userId": 1}
    with pytest.raises(PermissionDeniedError):
        EventService(api, {"id": 2, "role": "teacher"}).save({"title": "Fair"}, WHEN)


# --- textbooks ---

def test_resource_helpers() -> None:
    assert displayable_classes(["Class 1", "Teachers", "UKG", "Staff"]) == ["Class 1", "UKG"]
    items = [
        {"syllabus_type": "state", "class_group": "Class 1"},
        {"syllabus_type": "central", "class_group": "Class 1"},
        {"syllabus_type": "state", "class_group": "Class 2"},
    ]
    assert len(filter_resources(items, "state")) == 2
    assert filter_resources(items, "state", "Class 2") == [items[2]]
    with pytest.raises(ValidationError, match="Required fields missing."):
        resource_fields({"class_group": "Class 1", "url": "", "syllabus_type": "state", "subject_name": "EVS"})


def test_resource_for_class_wraps_single_object(api: MagicMock) -> None:
    api.get.return_value = {"id": 1, "url": "https://books.test/c1"}
    out = ResourceService(api, {"id": 5, "role": "student"}).for_class("Class 1", "state")
    assert out == [{"id": 1, "url": "https://books.test/c1"}]
    assert api.get.call_args.args == ("/resources/textbook/class/Class 1/state",)


def test_validators() -> None:
    assert validate_event("  Fair ") == "Fair"
    with pytest.raises(ValidationError):
        validate_event(None)
    with pytest.raises(ValidationError, match="Unknown board"):
        validate_resource({"class_group": "Class 1", "url": "u", "syllabus_type": "cbse", "subject_name": "EVS"})
