"""
Tests for ApiClient: URL building, auth header, error mapping, multipart fields, media URLs.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from school_client.errors import ApiError
from school_client.infrastructure.api.client import (
    NETWORK_ERROR_MESSAGE,
    ApiClient,
    file_part,
    form_fields,
)

REQUEST = "school_client.infrastructure.api.client.requests.request"


def _response(status: int = 200, body: object = None, text: str = "") -> MagicMock:
    resp = MagicMock(status_code=status)
    if body is None and not text:
        resp.content = b""
    else:
        resp.content = b"x"
    if body is not None:
        resp.json.return_value = body
    else:
        resp.json.side_effect = ValueError("not json")
        resp.text = text
    return resp


@pytest.fixture
def client() -> ApiClient:
    return ApiClient(base_url="http://school.test/api/", timeout=5, media_base_url="http://school.test")


@patch(REQUEST)
def test_get_joins_path_and_drops_none_params(mock_request: MagicMock, client: ApiClient) -> None:
    mock_request.return_value = _response(body=[{"id": 1}])
    out = client.get("/calendar", params={"a": 1, "b": None})
    assert out == [{"id": 1}]
    args, kwargs = mock_request.call_args
    assert args == ("GET", "http://school.test/api/calendar")
    assert kwargs["params"] == {"a": 1}
    assert kwargs["timeout"] == 5
    assert "Authorization" not in kwargs["headers"]


@patch(REQUEST)
def test_bearer_token_sent_after_set_token(mock_request: MagicMock, client: ApiClient) -> None:
    mock_request.return_value = _response(body={})
    client.set_token("abc")
    client.post("/x", json={"k": "v"})
    kwargs = mock_request.call_args.kwargs
    assert kwargs["headers"]["Authorization"] == "Bearer abc"
    assert kwargs["json"] == {"k": "v"}

    client.clear_token()
    client.get("/x")
    assert "Authorization" not in mock_request.call_args.kwargs["headers"]


@patch(REQUEST)
def test_empty_body_returns_none(mock_request: MagicMock, client: ApiClient) -> None:
    mock_request.return_value = _response(status=204)
    assert client.delete("/thing/1") is None


@patch(REQUEST)
def test_non_json_body_returns_text(mock_request: MagicMock, client: ApiClient) -> None:
    mock_request.return_value = _response(text="ok")
    assert client.get("/ping") == "ok"


@patch(REQUEST)
def test_server_message_preferred_on_error(mock_request: MagicMock, client: ApiClient) -> None:
    mock_request.return_value = _response(status=400, body={"message": "Title is required."})
    with pytest.raises(ApiError) as exc:
        client.post("/calendar", json={}, error_message="Failed to save event.")
    assert exc.value.message == "Title is required."
    assert exc.value.status_code == 400
    assert exc.value.payload == {"message": "Title is required."}


@patch(REQUEST)
def test_error_field_used_when_no_message(mock_request: MagicMock, client: ApiClient) -> None:
    mock_request.return_value = _response(status=500, body={"error": "boom"})
    with pytest.raises(ApiError, match="boom"):
        client.get("/x")


@patch(REQUEST)
def test_fallback_then_status_message(mock_request: MagicMock, client: ApiClient) -> None:
    mock_request.return_value = _response(status=404, body={})
    with pytest.raises(ApiError, match="Not here"):
        client.get("/x", error_message="Not here")
    with pytest.raises(ApiError, match="Request failed with status 404."):
        client.get("/x")


@patch(REQUEST)
def test_transport_failure_raises_api_error(mock_request: MagicMock, client: ApiClient) -> None:
    mock_request.side_effect = requests.ConnectionError("refused")
    with pytest.raises(ApiError) as exc:
        client.get("/x")
    assert exc.value.message == NETWORK_ERROR_MESSAGE
    assert exc.value.status_code is None
    assert isinstance(exc.value.original, requests.ConnectionError)


@patch(REQUEST)
def test_multipart_fields_are_stringified(mock_request: MagicMock, client: ApiClient) -> None:
    mock_request.return_value = _response(body={"ok": True})
    part = file_part("cover.png", b"\x89PNG")
    client.post("/library/books", data={"title": "Gita", "total_copies": 3, "skip": None}, files={"cover_image": part})
    kwargs = mock_request.call_args.kwargs
    assert kwargs["data"] == {"title": "Gita", "total_copies": "3"}
    assert kwargs["files"] == {"cover_image": ("cover.png", b"\x89PNG", "image/png")}
    assert kwargs["json"] is None


def test_form_fields_booleans() -> None:
    assert form_fields({"a": True, "b": False, "c": 1.5}) == {"a": "true", "b": "false", "c": "1.5"}


def test_file_part_unknown_type() -> None:
    assert file_part("blob", b"")[2] == "application/octet-stream"
    assert file_part("notes.pdf", b"", "application/x-custom")[2] == "application/x-custom"


def test_media_url(client: ApiClient) -> None:
    assert client.media_url(None) is None
    assert client.media_url("") is None
    assert client.media_url("/uploads/a.png") == "http://school.test/uploads/a.png"
    assert client.media_url("uploads/a.png") == "http://school.test/uploads/a.png"
    assert client.media_url("https://cdn.test/a.png") == "https://cdn.test/a.png"
    assert client.media_url("file:///tmp/a.png") == "file:///tmp/a.png"


@patch("school_client.infrastructure.api.client.api_timeout", return_value=12)
@patch("school_client.infrastructure.api.client.server_url", return_value="http://srv")
@patch("school_client.infrastructure.api.client.api_base_url", return_value="http://srv/api")
def test_defaults_from_config(_base: MagicMock, _server: MagicMock, _timeout: MagicMock) -> None:
    c = ApiClient()
    assert c.base_url == "http://srv/api"
    assert c.media_base_url == "http://srv"
    assert c.timeout == 12
