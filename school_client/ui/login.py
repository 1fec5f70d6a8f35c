"""Role picker and sign-in form."""

from __future__ import annotations

import streamlit as st

from school_client.domains.roles import ROLE_LABELS, ROLES
from school_client.errors import SchoolClientError, error_message
from school_client.services.auth import AuthSession
from school_client.utils.logger import get_logger

log = get_logger(__name__)


def render_login(session: AuthSession) -> None:
    st.subheader("Sign in")
    role = st.radio(
        "I am a",
        ROLES,
        format_func=lambda r: ROLE_LABELS[r],
        horizontal=True,
        key="login_role",
    )
    with st.form("login_form"):
        username = st.text_input("Username")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Login", use_container_width=True)

    if submitted:
        try:
            session.login(username, password, role)
        except SchoolClientError as e:
            st.error(error_message(e, "Login failed."))
            return
        st.session_state.screen = "home"
        st.rerun()
