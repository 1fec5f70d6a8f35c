"""
Tests for the Streamlit action helpers and the notification screen, with `st` mocked.
"""

from __future__ import annotations

from datetime import date
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from school_client.domains.notifications import FILTER_ALL, FILTER_UNREAD
from school_client.errors import ApiError
from school_client.infrastructure.api.client import ApiClient
from school_client.services.calendar import CalendarService
from school_client.ui.academics import _render_event_form
from school_client.ui.administration import render_notifications
from school_client.ui.common import attempt, run_action, run_mutation


class SessionState(dict):
    """dict with attribute access, like st.session_state."""

    def __getattr__(self, key: str) -> Any:
        try:
            return self[key]
        except KeyError as e:
            raise AttributeError(key) from e

    def __setattr__(self, key: str, value: Any) -> None:
        self[key] = value


@pytest.fixture
def st() -> MagicMock:
    mock = MagicMock()
    mock.session_state = SessionState()
    mock.columns.side_effect = lambda spec: [MagicMock() for _ in spec]
    with patch("school_client.ui.common.st", mock), patch("school_client.ui.administration.st", mock), patch(
        "school_client.ui.academics.st", mock
    ):
        yield mock


def test_mutation_with_empty_body_still_invalidates(st: MagicMock) -> None:
    api = MagicMock(spec=ApiClient)
    api.delete.return_value = None
    st.session_state["calendar_events"] = {"2024-03-05": [{"id": 5}]}
    ok = run_mutation(
        lambda: CalendarService(api, {"id": 1, "role": "admin"}).delete_event(5),
        "Failed to delete event.", "Event deleted.", invalidates=("calendar_events",),
    )
    assert ok is True
    assert "calendar_events" not in st.session_state
    st.success.assert_called_once_with("Event deleted.")


def test_delete_event_returns_server_response() -> None:
    api = MagicMock(spec=ApiClient)
    api.delete.return_value = {"message": "Event deleted"}
    assert CalendarService(api, {"id": 1, "role": "admin"}).delete_event(5) == {"message": "Event deleted"}


def test_failed_mutation_keeps_cache_and_shows_error(st: MagicMock) -> None:
    st.session_state["calendar_events"] = {"2024-03-05": []}

    def fail() -> None:
        raise ApiError("Server says no")

    assert run_mutation(fail, "Failed.", "Done.", invalidates=("calendar_events",)) is False
    assert "calendar_events" in st.session_state
    st.error.assert_called_once_with("Server says no")
    st.success.assert_not_called()


def test_attempt_and_run_action(st: MagicMock) -> None:
    assert attempt(lambda: None) == (True, None)
    assert run_action(lambda: [1, 2]) == [1, 2]


def test_other_exceptions_propagate(st: MagicMock) -> None:
    def boom() -> None:
        raise KeyError("bug")

    with pytest.raises(KeyError):
        run_mutation(boom)


def _open_single(st: MagicMock, note: dict[str, Any], filter_value: str = FILTER_ALL) -> MagicMock:
    api = MagicMock(spec=ApiClient)
    st.session_state["notifications"] = [note]
    st.radio.return_value = filter_value
    render_notifications(api, {"id": 4, "role": "student"})
    return api


def test_opening_unlinked_notification_reruns(st: MagicMock) -> None:
    api = _open_single(st, {"id": 9, "title": "Fee reminder", "is_read": 0}, FILTER_UNREAD)
    api.put.assert_called_once_with("/notifications/9/read")
    assert st.session_state["notifications"][0]["is_read"]
    st.rerun.assert_called_once()
    assert "notes_notice" not in st.session_state


def test_opening_web_only_link_queues_notice(st: MagicMock) -> None:
    _open_single(st, {"id": 9, "title": "New photos", "is_read": 0, "link": "gallery/Annual Day"})
    st.rerun.assert_called_once()
    assert st.session_state["notes_notice"] == "This item is available on the web portal."


def test_event_form_updates_existing_event(st: MagicMock) -> None:
    st.date_input.return_value = date(2024, 3, 6)
    st.text_input.side_effect = lambda label, value="", **kwargs: value
    st.text_area.side_effect = lambda label, value="", **kwargs: value
    st.selectbox.side_effect = lambda label, options, index=0, **kwargs: options[index]
    st.form_submit_button.return_value = True
    st.session_state["calendar_events"] = {}
    svc = MagicMock(spec=CalendarService)
    event = {"id": 7, "date_key": "2024-03-05", "name": "PTM", "type": "Meeting", "time": "10:00 AM", "description": "Hall"}

    _render_event_form(svc, "cal_form_7", event, 7)

    svc.save_event.assert_called_once_with(
        {"name": "PTM", "type": "Meeting", "time": "10:00 AM", "description": "Hall"}, "2024-03-06", 7
    )
    assert "calendar_events" not in st.session_state
    st.date_input.assert_called_once_with("Date", value=date(2024, 3, 5))
