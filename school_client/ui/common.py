"""
Shared Streamlit helpers: session-scoped client, error alerts and upload conversion.
"""

from __future__ import annotations

from typing import Any, Callable

import streamlit as st

from school_client.errors import SchoolClientError, error_message
from school_client.infrastructure.api.client import ApiClient, Upload, file_part
from school_client.services.auth import AuthSession
from school_client.utils.logger import get_logger

log = get_logger(__name__)


def get_session() -> AuthSession:
    """One ApiClient and AuthSession per browser session (tokens are per user)."""
    if "auth" not in st.session_state:
        st.session_state.auth = AuthSession(ApiClient())
    return st.session_state.auth


def get_api() -> ApiClient:
    return get_session().api


def attempt(
    action: Callable[[], Any],
    fallback: str = "Something went wrong.",
    success: str | None = None,
) -> tuple[bool, Any]:
    """
    Run a service call and return (ok, result).

    On failure a blocking error is shown and ok is False. A successful call may
    still return None (empty response body), so callers branch on ok.
    Only SchoolClientError is caught; anything else is a bug and propagates.
    """
    try:
        result = action()
    except SchoolClientError as e:
        st.error(error_message(e, fallback))
        return False, None
    if success:
        st.success(success)
    return True, result


def run_action(
    action: Callable[[], Any],
    fallback: str = "Something went wrong.",
    success: str | None = None,
) -> Any:
    """Run a loader; the result, or None after a failure was shown."""
    return attempt(action, fallback, success)[1]


def run_mutation(
    action: Callable[[], Any],
    fallback: str = "Something went wrong.",
    success: str | None = None,
    invalidates: tuple[str, ...] = (),
) -> bool:
    """Run a write; on success drop the cached `invalidates` keys so the screen refetches."""
    ok, _ = attempt(action, fallback, success)
    if ok:
        invalidate(*invalidates)
    return ok


def load(key: str, loader: Callable[[], Any], fallback: str, refresh: bool = False) -> Any:
    """Fetch once per session under `key`; failures leave the previous value in place."""
    if refresh or key not in st.session_state:
        try:
            st.session_state[key] = loader()
        except SchoolClientError as e:
            st.error(error_message(e, fallback))
            st.session_state.setdefault(key, None)
    return st.session_state[key]


def invalidate(*keys: str) -> None:
    for key in keys:
        st.session_state.pop(key, None)


def to_upload(uploaded: Any) -> Upload | None:
    """Streamlit UploadedFile -> multipart tuple."""
    if uploaded is None:
        return None
    return file_part(uploaded.name, uploaded.getvalue(), getattr(uploaded, "type", None))


def confirm_button(label: str, key: str) -> bool:
    """Two-click confirm for destructive actions."""
    flag = f"confirm_{key}"
    if st.session_state.get(flag):
        cols = st.columns(2)
        if cols[0].button("Confirm", key=f"{key}_yes", type="primary"):
            st.session_state[flag] = False
            return True
        if cols[1].button("Cancel", key=f"{key}_no"):
            st.session_state[flag] = False
            st.rerun()
        return False
    if st.button(label, key=key):
        st.session_state[flag] = True
        st.rerun()
    return False
