"""
Account screens: user management (admin), notifications and the profile editor.
"""

from __future__ import annotations

from typing import Any

import streamlit as st

from school_client.domains import notifications as notes
from school_client.domains import users as usr
from school_client.domains.roles import ROLE_LABELS, ROLES, STUDENT, TEACHER
from school_client.errors import ValidationError
from school_client.infrastructure.api.client import ApiClient
from school_client.services.notifications import NotificationService
from school_client.services.users import ProfileService, UserService
from school_client.ui.common import attempt, confirm_button, get_session, invalidate, load, run_mutation, to_upload

# notification link target -> dashboard screen; anything missing is web-only
LINK_SCREENS = {
    "calendar": "calendar",
    "homework": "homework",
    "homework_submissions": "homework",
}

PROFILE_FIELDS = ("full_name", "email", "phone", "address", "dob", "gender")


# --- users ---

def _user_inputs(prefix: str, form: dict[str, Any], editing: bool) -> dict[str, Any]:
    out = dict(form)
    out["username"] = st.text_input("Username", value=form.get("username") or "", key=f"{prefix}_username")
    out["full_name"] = st.text_input("Full Name", value=form.get("full_name") or "", key=f"{prefix}_full_name")
    pw = st.text_input("New password" if editing else "Password", type="password", key=f"{prefix}_password")
    if pw:
        out["password"] = pw
    else:
        out.pop("password", None)
    role = form.get("role") or STUDENT
    out["role"] = st.selectbox(
        "Role", ROLES, index=ROLES.index(role) if role in ROLES else 0,
        format_func=lambda r: ROLE_LABELS[r], key=f"{prefix}_role",
    )
    if out["role"] == STUDENT:
        cg = form.get("class_group")
        out["class_group"] = st.selectbox(
            "Class", usr.STUDENT_CLASSES,
            index=usr.STUDENT_CLASSES.index(cg) if cg in usr.STUDENT_CLASSES else 0, key=f"{prefix}_class",
        )
        out["roll_no"] = st.text_input("Roll No", value=str(form.get("roll_no") or ""), key=f"{prefix}_roll")
    if out["role"] == TEACHER:
        subjects = list(form.get("subjects_taught") or [])
        st.caption("Subjects: " + (", ".join(subjects) or "none"))
        new_subject = st.text_input("Add subject", key=f"{prefix}_subject")
        if new_subject:
            try:
                subjects = usr.add_subject(subjects, new_subject)
            except ValidationError as e:
                st.warning(e.message)
        out["subjects_taught"] = subjects
    return out


def render_users(api: ApiClient, user: dict[str, Any]) -> None:
    st.subheader("👥 Manage Users")
    svc = UserService(api, user)
    users = load("users", svc.list_users, "Failed to fetch users.") or []
    query = st.text_input("Search users", key="users_search")

    for category, members in usr.group_users(users, query).items():
        if not members:
            continue
        with st.expander(f"{category} ({len(members)})"):
            for member in members:
                uid = member.get("id")
                st.markdown(f"**{member.get('full_name')}** · {member.get('username')} · {member.get('roll_no') or ''}")
                if st.toggle("Edit", key=f"user_edit_{uid}"):
                    form = _user_inputs(f"user_{uid}", member, editing=True)
                    if st.button("Save changes", key=f"user_save_{uid}"):
                        if run_mutation(lambda: svc.update(member, form), "An error occurred.", "User updated."):
                            invalidate("users")
                if confirm_button("Delete", key=f"user_del_{uid}"):
                    if run_mutation(lambda: svc.delete(uid), "Failed to delete the user.", "User deleted."):
                        invalidate("users")

    with st.expander("➕ New user"):
        form = _user_inputs("user_new", usr.new_user_form(), editing=False)
        if st.button("Create user", type="primary"):
            if run_mutation(lambda: svc.create(form), "An error occurred.", "User created."):
                invalidate("users")


# --- notifications ---

def render_notifications(api: ApiClient, user: dict[str, Any]) -> None:
    st.subheader("🔔 Notifications")
    svc = NotificationService(api, user)
    items = load("notifications", svc.fetch, "Could not load notifications.") or []
    status = st.radio("Show", notes.FILTERS, format_func=str.title, horizontal=True, key="notes_filter")
    notice = st.session_state.pop("notes_notice", None)
    if notice:
        st.info(notice)
    shown = notes.filter_notifications(items, status)
    if not shown:
        st.caption("No notifications.")
    for note in shown:
        _, icon = notes.icon_category(note.get("title"))
        weight = "" if notes.is_read(note) else "**"
        cols = st.columns([6, 1])
        cols[0].markdown(f"{icon} {weight}{note.get('title') or ''}{weight}  \n{note.get('message') or ''}")
        if cols[1].button("Open", key=f"note_{note.get('id')}"):
            st.session_state.notifications = svc.mark_read(items, note)
            invalidate("dashboard_header")
            target = notes.resolve_link(note.get("link"))
            screen = LINK_SCREENS.get(target[0]) if target else None
            if screen:
                st.session_state.screen = screen
            elif target:
                st.session_state.notes_notice = "This item is available on the web portal."
            st.rerun()


# --- profile ---

def render_profile(api: ApiClient, user: dict[str, Any]) -> None:
    st.subheader("👤 Profile")
    svc = ProfileService(api, user)
    profile = load("profile", svc.get, "Could not load profile.") or {}
    if profile.get("profile_image_url"):
        st.image(api.media_url(profile["profile_image_url"]), width=120)
    with st.form("profile_form"):
        form = {k: st.text_input(k.replace("_", " ").title(), value=str(profile.get(k) or "")) for k in PROFILE_FIELDS}
        image = st.file_uploader("Profile image", type=["png", "jpg", "jpeg"])
        if st.form_submit_button("Save"):
            ok, updated = attempt(lambda: svc.update(form, to_upload(image)), "Failed to update profile.", "Profile updated.")
            if ok:
                updated = updated if isinstance(updated, dict) else form
                st.session_state.profile = {**profile, **updated}
                get_session().update_user(full_name=updated.get("full_name") or form["full_name"])
                invalidate("dashboard_header")
