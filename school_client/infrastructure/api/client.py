"""
HTTP client for the school-management REST API.

Wraps `requests` with the base URL, bearer auth header and JSON/multipart bodies.
Failures raise ApiError carrying the server's `message` when it sent one. There is
no retry or backoff; the caller decides what to show.
"""

from __future__ import annotations

import mimetypes
from pathlib import Path
from typing import Any

import requests

from school_client.errors import ApiError
from school_client.utils.config import api_base_url, api_timeout, server_url
from school_client.utils.logger import get_logger

logger = get_logger(__name__)

NETWORK_ERROR_MESSAGE = "Could not reach the server. Check your connection."
PASSTHROUGH_SCHEMES = ("http://", "https://", "file:")

Upload = tuple[str, Any, str]


def file_part(filename: str, content: Any, content_type: str | None = None) -> Upload:
    """Build a `requests` multipart file tuple, guessing the MIME type from the name."""
    mime = content_type or mimetypes.guess_type(filename)[0] or "application/octet-stream"
    return (filename, content, mime)


def file_part_from_path(path: str | Path, content_type: str | None = None) -> Upload:
    """Read a local file into a multipart tuple."""
    p = Path(path)
    return file_part(p.name, p.read_bytes(), content_type)


def form_fields(values: dict[str, Any]) -> dict[str, str]:
    """Stringify multipart text fields, dropping None."""
    out: dict[str, str] = {}
    for key, value in values.items():
        if value is None:
            continue
        if isinstance(value, bool):
            out[key] = "true" if value else "false"
        else:
            out[key] = str(value)
    return out


def _clean_params(params: dict[str, Any] | None) -> dict[str, Any] | None:
    if not params:
        return None
    return {k: v for k, v in params.items() if v is not None}


def _decode(resp: requests.Response) -> Any:
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        return resp.text


def _server_message(payload: Any) -> str | None:
    if isinstance(payload, dict):
        msg = payload.get("message") or payload.get("error")
        if isinstance(msg, str) and msg.strip():
            return msg.strip()
    return None


class ApiClient:
    """
    Shared client for all services.

    Args:
        base_url: REST base (defaults to SCHOOL_SERVER_URL + SCHOOL_API_PATH).
        token: Bearer token; normally set after login via set_token.
        timeout: Seconds per request (defaults to SCHOOL_API_TIMEOUT).
        media_base_url: Origin used by media_url (defaults to SCHOOL_SERVER_URL).
    """

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: int | None = None,
        media_base_url: str | None = None,
    ) -> None:
        self.base_url = (base_url or api_base_url()).rstrip("/")
        self.media_base_url = (media_base_url or server_url()).rstrip("/")
        self.timeout = timeout if timeout is not None else api_timeout()
        self._token = token

    @property
    def token(self) -> str | None:
        return self._token

    def set_token(self, token: str | None) -> None:
        self._token = token or None

    def clear_token(self) -> None:
        self._token = None

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        data: dict[str, Any] | None = None,
        files: dict[str, Upload] | None = None,
        error_message: str | None = None,
    ) -> Any:
        """
        Send a request and return the decoded JSON body (None when empty).

        Args:
            method: HTTP verb.
            path: Path relative to the API base, e.g. "/calendar".
            params: Query parameters; None values are omitted.
            json: JSON body.
            data: Multipart/form text fields (use with files).
            files: Multipart file parts, field name -> (filename, content, mime).
            error_message: Text used when the server gives no message.

        Raises:
            ApiError: On transport failure or a non-2xx status.
        """
        method = method.upper()
        url = self._url(path)
        logger.debug("%s %s params=%s", method, url, params)
        try:
            resp = requests.request(
                method,
                url,
                params=_clean_params(params),
                json=json,
                data=form_fields(data) if data is not None else None,
                files=files or None,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise ApiError(error_message or NETWORK_ERROR_MESSAGE, original=e) from e

        payload = _decode(resp)
        if resp.status_code >= 400:
            message = (
                _server_message(payload)
                or error_message
                or f"Request failed with status {resp.status_code}."
            )
            logger.warning("%s %s -> %s: %s", method, path, resp.status_code, message)
            raise ApiError(message, status_code=resp.status_code, payload=payload)
        return payload

    def get(self, path: str, **kwargs: Any) -> Any:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> Any:
        return self.request("POST", path, **kwargs)

    def put(self, path: str, **kwargs: Any) -> Any:
        return self.request("PUT", path, **kwargs)

    def patch(self, path: str, **kwargs: Any) -> Any:
        return self.request("PATCH", path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> Any:
        return self.request("DELETE", path, **kwargs)

    def media_url(self, path: str | None) -> str | None:
        """Resolve a server-relative media path; absolute and file: URIs pass through."""
        if not path:
            return None
        if path.startswith(PASSTHROUGH_SCHEMES):
            return path
        sep = "" if path.startswith("/") else "/"
        return f"{self.media_base_url}{sep}{path}"
