"""
Tests for notifications: filters, icons, link routing, optimistic mark-read.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from school_client.domains.notifications import (
    filter_notifications,
    icon_category,
    resolve_link,
    unread_count,
)
from school_client.errors import ApiError
from school_client.infrastructure.api.client import ApiClient
from school_client.services.notifications import NotificationService

ITEMS = [
    {"id": 1, "title": "New homework", "is_read": 0},
    {"id": 2, "title": "Exam results", "is_read": 1},
    {"id": 3, "title": "Hello"},
]


def test_filters() -> None:
    assert [n["id"] for n in filter_notifications(ITEMS, "unread")] == [1, 3]
    assert [n["id"] for n in filter_notifications(ITEMS, "read")] == [2]
    assert len(filter_notifications(ITEMS)) == 3
    assert unread_count(ITEMS) == 2
    assert unread_count(None) == 0


def test_icon_category() -> None:
    assert icon_category("New Homework posted") == ("homework", "📚")
    assert icon_category("Exam schedule") == ("timetable", "🗓️")
    assert icon_category(None)[0] == "default"


@pytest.mark.parametrize(
    "link,expected",
    [
        ("/calendar", ("calendar", {})),
        ("gallery/Annual Day", ("album_detail", {"title": "Annual Day"})),
        ("/homework/12", ("homework", {"homework_id": "12"})),
        ("/submissions/5", ("homework_submissions", {"assignment_id": "5"})),
        ("/helpdesk/ticket/77", ("helpdesk_ticket", {"ticket_id": "77"})),
        ("/homework", None),
        ("/unknown/1", None),
        ("", None),
        (None, None),
    ],
)
def test_resolve_link(link: str | None, expected: object) -> None:
    assert resolve_link(link) == expected


@pytest.fixture
def api() -> MagicMock:
    return MagicMock(spec=ApiClient)


def test_mark_read_success(api: MagicMock) -> None:
    out = NotificationService(api, {"id": 1}).mark_read(ITEMS, ITEMS[0])
    api.put.assert_called_once_with("/notifications/1/read")
    assert out[0]["is_read"] is True
    assert ITEMS[0]["is_read"] == 0


def test_mark_read_rolls_back_on_failure(api: MagicMock) -> None:
    api.put.side_effect = ApiError("nope")
    out = NotificationService(api, {"id": 1}).mark_read(ITEMS, ITEMS[0])
    assert out[0]["is_read"] is False
    assert unread_count(out) == 2


def test_mark_read_already_read_is_noop(api: MagicMock) -> None:
    out = NotificationService(api, {"id": 1}).mark_read(ITEMS, ITEMS[1])
    assert out is ITEMS
    api.put.assert_not_called()
