"""Role dashboard: header, searchable quick-access tiles and screen routing."""

from __future__ import annotations

from typing import Any, Callable

import streamlit as st

from school_client.domains.dashboard import filter_items
from school_client.domains.roles import ROLE_LABELS
from school_client.services.auth import AuthSession
from school_client.services.dashboard import DashboardService
from school_client.ui import academics, campus, administration
from school_client.ui.common import invalidate, load

TILE_COLUMNS = 4

SCREENS: dict[str, Callable[[Any, dict[str, Any]], None]] = {
    "calendar": academics.render_calendar,
    "attendance": academics.render_attendance,
    "homework": academics.render_homework,
    "exams": academics.render_exams,
    "performance": academics.render_performance,
    "feedback": academics.render_feedback,
    "syllabus": academics.render_syllabus,
    "library": campus.render_library,
    "kitchen": campus.render_kitchen,
    "food_menu": campus.render_food_menu,
    "dictionary": campus.render_dictionary,
    "online_classes": campus.render_online_classes,
    "events": campus.render_events,
    "resources": campus.render_resources,
    "users": administration.render_users,
    "notifications": administration.render_notifications,
    "profile": administration.render_profile,
}


def go(screen: str) -> None:
    st.session_state.screen = screen
    st.rerun()


def _render_header(session: AuthSession, header: dict[str, Any]) -> None:
    cols = st.columns([1, 5, 2])
    if header.get("image_url"):
        cols[0].image(header["image_url"], width=64)
    cols[1].markdown(f"### {header.get('name') or ''}")
    cols[1].caption(ROLE_LABELS.get(session.role, session.role))
    badge = header.get("unread_count") or 0
    if cols[2].button(f"🔔 {badge}" if badge else "🔔", key="bell"):
        go("notifications")


def _render_tiles(tiles: list[dict[str, Any]]) -> None:
    query = st.text_input("Search", placeholder="Search modules", key="tile_search")
    visible = filter_items(tiles, query)
    if not visible:
        st.info("No modules match your search.")
        return
    for start in range(0, len(visible), TILE_COLUMNS):
        cols = st.columns(TILE_COLUMNS)
        for col, tile in zip(cols, visible[start:start + TILE_COLUMNS]):
            label = f"{tile['icon']} {tile['title']}"
            if col.button(label, key=f"tile_{tile['id']}", use_container_width=True):
                if tile.get("module"):
                    go(tile["module"])
                else:
                    st.session_state.unavailable = tile["title"]
    if st.session_state.get("unavailable"):
        st.info(f"{st.session_state.pop('unavailable')} is available on the web portal.")


def render_dashboard(session: AuthSession) -> None:
    user = session.require_user()
    api = session.api
    header = load(
        "dashboard_header",
        lambda: DashboardService(api, user).load(),
        "Could not load the dashboard.",
    ) or {}

    with st.sidebar:
        st.header("Menu")
        if st.button("🏠 Home", use_container_width=True):
            go("home")
        if st.button("👤 Profile", use_container_width=True):
            go("profile")
        if st.button("🔄 Refresh", use_container_width=True):
            invalidate("dashboard_header")
            st.rerun()
        if st.button("Logout", use_container_width=True):
            session.logout()
            st.session_state.clear()
            st.rerun()

    screen = st.session_state.get("screen", "home")
    if screen != "home" and screen in SCREENS:
        if st.button("← Back"):
            invalidate("dashboard_header")
            go("home")
        SCREENS[screen](api, user)
        return

    _render_header(session, header)
    st.divider()
    _render_tiles(header.get("tiles") or [])
