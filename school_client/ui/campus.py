"""
Campus screens: library, kitchen, food menu, dictionary, online classes, events
and textbooks.
"""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Any

import streamlit as st

from school_client.domains import dictionary as dic
from school_client.domains import food_menu as menu
from school_client.domains import kitchen as kit
from school_client.domains import library as lib
from school_client.domains import resources as res
from school_client.domains.dates import display_date
from school_client.domains.events import sort_events
from school_client.domains.online_classes import LIVE, RECORDED, is_upcoming
from school_client.domains.roles import (
    ADMIN,
    STUDENT,
    can_edit_food_menu,
    can_manage_dictionary,
    has_role,
    is_library_admin,
    is_privileged,
)
from school_client.infrastructure.api.client import ApiClient
from school_client.services.dictionary import DictionaryService
from school_client.services.events import EventService
from school_client.services.food_menu import FoodMenuService
from school_client.services.kitchen import KitchenService
from school_client.services.library import LibraryService
from school_client.services.online_classes import OnlineClassService
from school_client.services.resources import ResourceService
from school_client.ui.common import confirm_button, invalidate, load, run_action, run_mutation, to_upload


# --- library ---

def render_library(api: ApiClient, user: dict[str, Any]) -> None:
    st.subheader("📚 Library")
    svc = LibraryService(api, user)
    tabs = ["Books", "Digital library", "My books"]
    if is_library_admin(user):
        tabs += ["Requests", "History"]
    panes = st.tabs(tabs)

    with panes[0]:
        _render_books(svc, user)
    with panes[1]:
        _render_digital(svc, user)
    with panes[2]:
        for item in load("lib_mine", svc.my_history, "Could not load your books.") or []:
            st.write(f"{item.get('book_title')} · {lib.request_status(item)} · due {display_date(item.get('expected_return_date'))}")
    if is_library_admin(user):
        with panes[3]:
            _render_requests(svc)
        with panes[4]:
            items = load("lib_history", svc.history, "Could not load history.") or []
            search = st.text_input("Search", key="lib_hist_search")
            c1, c2 = st.columns(2)
            start = c1.date_input("Returned from", value=None, key="lib_hist_from")
            end = c2.date_input("Returned to", value=None, key="lib_hist_to")
            for item in lib.filter_history(items, search, start, end):
                st.write(f"{item.get('book_title')} · {item.get('full_name')} · returned {display_date(item.get('actual_return_date'))}")


def _render_books(svc: LibraryService, user: dict[str, Any]) -> None:
    search = st.text_input("Search books", key="lib_search")
    books = run_action(lambda: svc.books(search), "Could not load books.") or []
    for book in books:
        with st.expander(f"{book.get('title')} · {book.get('author')} · {book.get('available_copies') or 0} left"):
            if book.get("cover_image_url"):
                st.image(svc.api.media_url(book["cover_image_url"]), width=120)
            if not lib.can_borrow(book):
                st.warning(lib.NO_COPIES_MESSAGE)
            else:
                defaults = lib.borrow_form_defaults(user)
                with st.form(f"borrow_{book.get('id')}"):
                    form = {
                        "full_name": st.text_input("Full Name", value=defaults["full_name"]),
                        "roll_no": st.text_input("Roll No / User ID", value=defaults["roll_no"]),
                        "class_name": st.text_input("Class", value=defaults["class_name"]),
                        "mobile": st.text_input("Mobile", value=defaults["mobile"]),
                        "email": st.text_input("Email", value=defaults["email"]),
                        "user_role": defaults["user_role"],
                    }
                    borrow = st.date_input("Borrow date", value=date.today())
                    due = st.date_input("Return date", value=date.today())
                    if st.form_submit_button("Request"):
                        run_mutation(lambda: svc.request_borrow(book, form, borrow, due), "Request failed", "Request sent.")
            if is_library_admin(user) and confirm_button("Delete book", key=f"book_del_{book.get('id')}"):
                run_mutation(lambda: svc.delete_book(book["id"]), "Delete failed.", "Book deleted.")
    if is_library_admin(user):
        with st.expander("➕ Add book"):
            with st.form("book_form", clear_on_submit=True):
                form = {k: st.text_input(k.replace("_", " ").title()) for k in ("title", "author", "book_no", "total_copies", "rack_no")}
                cover = st.file_uploader("Cover image", type=["png", "jpg", "jpeg"])
                if st.form_submit_button("Save"):
                    run_mutation(lambda: svc.save_book(form, to_upload(cover)), "Could not add book.", "Book added.")


def _render_digital(svc: LibraryService, user: dict[str, Any]) -> None:
    search = st.text_input("Search resources", key="dig_search")
    for item in run_action(lambda: svc.digital_resources(search), "Could not load resources.") or []:
        cols = st.columns([5, 2, 1])
        cols[0].write(f"{item.get('title')} · {item.get('author')}")
        if item.get("file_url"):
            cols[1].link_button("Open", svc.api.media_url(item["file_url"]))
        if is_library_admin(user) and cols[2].button("🗑", key=f"dig_del_{item.get('id')}"):
            run_mutation(lambda: svc.delete_digital_resource(item["id"]), "Failed to delete.", "Resource deleted.")
    if is_library_admin(user):
        with st.expander("➕ Upload resource"):
            with st.form("digital_form", clear_on_submit=True):
                form = {"title": st.text_input("Title"), "author": st.text_input("Author"), "category": st.text_input("Category")}
                document = st.file_uploader("Document")
                cover = st.file_uploader("Cover image", type=["png", "jpg", "jpeg"])
                if st.form_submit_button("Upload"):
                    run_mutation(
                        lambda: svc.save_digital_resource(form, to_upload(document), to_upload(cover)),
                        "Operation failed.",
                        "Resource uploaded.",
                    )


def _render_requests(svc: LibraryService) -> None:
    items = load("lib_requests", svc.requests, "Could not load requests.") or []
    tab = st.radio("Show", lib.REQUEST_TABS, horizontal=True, key="lib_req_tab")
    search = st.text_input("Search requests", key="lib_req_search")
    for item in lib.filter_requests(items, tab, search):
        status = lib.request_status(item)
        cols = st.columns([5, 1, 1])
        cols[0].write(f"{item.get('book_title')} · {item.get('full_name')} ({item.get('roll_no')}) · {status}")
        if item.get("status") == "pending":
            actions = ((lib.ACTION_APPROVE, "Approve"), (lib.ACTION_REJECT, "Reject"))
        elif item.get("status") == "approved":
            actions = ((lib.ACTION_RETURNED, "Returned"),)
        else:
            actions = ()
        for col, (action, label) in zip(cols[1:], actions):
            if col.button(label, key=f"lib_{action}_{item.get('id')}"):
                if run_mutation(lambda a=action: svc.act_on_request(item["id"], a), "Action failed", f"Marked {action}."):
                    invalidate("lib_requests", "lib_history")


# --- kitchen ---

def _item_inputs(prefix: str, initial: dict[str, Any], lock_unit: bool = False) -> dict[str, Any]:
    return {
        "itemName": st.text_input("Item name", value=initial["itemName"], key=f"{prefix}_name"),
        "quantity": st.number_input("Quantity", min_value=0.0, value=float(initial["quantity"]), key=f"{prefix}_qty"),
        "unit": st.selectbox(
            "Unit", kit.UNITS, index=kit.UNITS.index(initial["unit"]) if initial["unit"] in kit.UNITS else 0,
            key=f"{prefix}_unit", disabled=lock_unit,
        ),
        "notes": st.text_input("Notes", value=initial["notes"], key=f"{prefix}_notes"),
    }


def render_kitchen(api: ApiClient, user: dict[str, Any]) -> None:
    st.subheader("🍳 Kitchen")
    svc = KitchenService(api, user)
    on = st.date_input("Date", value=date.today(), key="kitchen_date")
    data = run_action(lambda: svc.load(on), "Could not fetch kitchen data.") or {}
    tab_prov, tab_usage, tab_perm = st.tabs(["Provisions", "Usage", "Permanent"])

    with tab_prov:
        for item in data.get("provisions") or []:
            label, qty = kit.quantity_label(item, kit.KIND_PROVISIONS)
            cols = st.columns([4, 2, 2])
            cols[0].write(item.get("item_name"))
            cols[1].write(f"{label}: {qty} {item.get('unit') or ''}")
            with cols[2].popover("Log usage"):
                used = st.number_input("Used", min_value=0.0, value=1.0, key=f"use_{item.get('id')}")
                if st.button("Log", key=f"log_{item.get('id')}"):
                    run_mutation(lambda: svc.log_usage(item["id"], used, on), "Failed to log usage.", "Usage logged.")
        with st.expander("➕ Add provision"):
            form = _item_inputs("prov", kit.initial_form(None, kit.MODE_ADD_PROVISION))
            image = st.file_uploader("Image", type=["png", "jpg", "jpeg"], key="prov_img")
            if st.button("Save provision"):
                run_mutation(lambda: svc.add_provision(form, to_upload(image)), "Failed to save.", "Provision added.")

    with tab_usage:
        for item in data.get("usage") or []:
            label, qty = kit.quantity_label(item, kit.KIND_USAGE)
            st.write(f"{item.get('item_name')} · {label}: {qty} {item.get('unit') or ''}")

    with tab_perm:
        for item in data.get("permanent") or []:
            with st.expander(f"{item.get('item_name')} · {kit.quantity_label(item, kit.KIND_PERMANENT)[1]}"):
                initial = kit.initial_form(item, kit.MODE_EDIT_PERMANENT)
                current = _item_inputs(f"perm_{item.get('id')}", initial, lock_unit=True)
                if st.button("Save", key=f"perm_save_{item.get('id')}"):
                    changed = run_action(
                        lambda: svc.update_permanent_item(item["id"], initial, current), "Failed to save."
                    )
                    if changed is False:
                        st.info("Nothing to update.")
                    elif changed:
                        st.success("Item updated.")
                if confirm_button("Delete", key=f"perm_del_{item.get('id')}"):
                    run_mutation(lambda: svc.delete_permanent_item(item["id"]), "Failed to delete.", "Item deleted.")
        with st.expander("➕ Add permanent item"):
            form = _item_inputs("perm_new", kit.initial_form(None, kit.MODE_ADD_PERMANENT))
            if st.button("Save item"):
                run_mutation(lambda: svc.add_permanent_item(form), "Failed to save.", "Item added.")


# --- food menu ---

def render_food_menu(api: ApiClient, user: dict[str, Any]) -> None:
    st.subheader("🍱 Food Menu")
    svc = FoodMenuService(api, user)
    data = load("food_menu", svc.fetch, "Failed to fetch the food menu.") or {}
    current_time = menu.lunch_time(data)
    editable = can_edit_food_menu(user)

    if editable:
        c1, c2 = st.columns([3, 1])
        new_time = c1.text_input("Lunch time", value="" if current_time == menu.NOT_SET else current_time)
        if c2.button("Set time"):
            if run_mutation(lambda: svc.set_lunch_time(new_time), "Failed to update the lunch time.", "Lunch time updated."):
                invalidate("food_menu")
    else:
        st.caption(f"Lunch time: {current_time}")

    for row in menu.weekly_rows(data):
        cols = st.columns([2, 5, 1])
        cols[0].markdown(f"**{row['day']}**")
        if not editable:
            cols[1].write(row["food_item"] or "—")
            continue
        text = cols[1].text_input(row["day"], value=row["food_item"], key=f"menu_{row['day']}", label_visibility="collapsed")
        if cols[2].button("Save", key=f"menu_save_{row['day']}"):
            if run_mutation(lambda: svc.save_item(row["day"], text, row["meal"], current_time), "Failed to update the menu.", "Menu updated."):
                invalidate("food_menu")


# --- dictionary ---

def render_dictionary(api: ApiClient, user: dict[str, Any]) -> None:
    st.subheader("📖 Dictionary")
    svc = DictionaryService(api, user)
    letter = st.radio("Letter", dic.ALPHABET, horizontal=True, key="dict_letter")
    query = st.text_input("Search", key="dict_query")
    words = run_action(lambda: svc.search(dic.search_term(query, letter)), "Could not search the dictionary.") or []
    if not words:
        st.caption("No words found.")
    for entry in words:
        with st.expander(f"{entry.get('word')} ({entry.get('part_of_speech') or ''})"):
            st.write(entry.get("definition_en") or "")
            st.write(entry.get("definition_te") or "")
            if can_manage_dictionary(user) and confirm_button("Delete", key=f"word_del_{entry.get('id')}"):
                run_mutation(lambda: svc.delete_word(entry["id"]), "Could not delete the word.", "Word deleted.")
    if can_manage_dictionary(user):
        with st.expander("➕ Add word"):
            with st.form("word_form", clear_on_submit=True):
                form = {
                    "word": st.text_input("Word"),
                    "part_of_speech": st.selectbox("Part of speech", dic.PARTS_OF_SPEECH),
                    "definition_en": st.text_area("Definition (English)"),
                    "definition_te": st.text_area("Definition (Telugu)"),
                }
                if st.form_submit_button("Save"):
                    run_mutation(lambda: svc.add_word(form), "Could not add the word.", "Word added.")


# --- online classes ---

def render_online_classes(api: ApiClient, user: dict[str, Any]) -> None:
    st.subheader("💻 Online Classes")
    svc = OnlineClassService(api, user)
    loaded = load("online_classes", svc.fetch, "Could not load online classes.") or ([], [])
    live, recorded = loaded
    tab_live, tab_rec = st.tabs(["Live", "Recorded"])
    with tab_live:
        for item in live:
            _render_online_class(svc, user, item, upcoming=is_upcoming(item))
    with tab_rec:
        for item in recorded:
            _render_online_class(svc, user, item)
    if is_privileged(user):
        _render_online_class_form(svc)


def _render_online_class(svc: OnlineClassService, user: dict[str, Any], item: dict[str, Any], upcoming: bool = False) -> None:
    with st.expander(f"{item.get('title')} · {item.get('class_group')} · {display_date(item.get('class_datetime'), '%d %b %Y %I:%M %p')}"):
        st.write(item.get("description") or "")
        if item.get("meet_link"):
            st.link_button("Join" if upcoming else "Meeting link", item["meet_link"])
        if item.get("video_url"):
            st.video(svc.api.media_url(item["video_url"]))
        if is_privileged(user) and confirm_button("Delete", key=f"oc_del_{item.get('id')}"):
            if run_mutation(lambda: svc.delete(item["id"]), "Failed to delete.", "Class deleted."):
                invalidate("online_classes")


def _render_online_class_form(svc: OnlineClassService) -> None:
    with st.expander("➕ New class"):
        class_type = st.radio("Type", (LIVE, RECORDED), format_func=str.title, horizontal=True, key="oc_type")
        groups = load("oc_groups", svc.class_groups, "Could not load classes.") or []
        class_group = st.selectbox("Class", ["All", *groups], key="oc_class")
        opts = run_action(lambda: svc.options(class_group), "Could not load class details.") or {}
        teachers = {t.get("id"): t.get("full_name") for t in opts.get("teachers") or []}
        form = {
            "title": st.text_input("Title", key="oc_title"),
            "class_group": class_group,
            "subject": st.selectbox("Subject", opts.get("subjects") or [], key="oc_subject"),
            "teacher_id": st.selectbox("Teacher", list(teachers), format_func=lambda i: teachers[i], key="oc_teacher"),
            "description": st.text_area("Description", key="oc_desc"),
        }
        on = st.date_input("Date", value=date.today(), key="oc_date")
        at = st.time_input("Time", value=time(10, 0), key="oc_time")
        video = None
        if class_type == LIVE:
            form["meet_link"] = st.text_input("Meeting link", key="oc_link")
        else:
            form["topic"] = st.text_input("Topic", key="oc_topic")
            video = st.file_uploader("Video", type=["mp4", "mov", "mkv"], key="oc_video")
        if st.button("Save class", type="primary"):
            when = datetime.combine(on, at)
            if run_mutation(lambda: svc.save(form, class_type, when, to_upload(video)), "Failed to save.", "Class saved."):
                invalidate("online_classes")


# --- events ---

def render_events(api: ApiClient, user: dict[str, Any]) -> None:
    st.subheader("🎉 Events")
    svc = EventService(api, user)
    admin = has_role(user, ADMIN)
    loader = svc.all_for_admin if admin else svc.for_user
    events = load("events", loader, "Could not load events.") or []
    for event in sort_events(events):
        with st.expander(f"{event.get('title')} · {display_date(event.get('event_datetime'), '%d %b %Y %I:%M %p')}"):
            st.caption(f"{event.get('category') or ''} · {event.get('location') or ''} · {event.get('target_class') or 'All'}")
            st.write(event.get("description") or "")
            if admin and confirm_button("Delete", key=f"event_del_{event.get('id')}"):
                if run_mutation(lambda: svc.delete(event["id"]), "Could not delete event.", "Event deleted."):
                    invalidate("events")
    if admin:
        targets = load("event_targets", svc.target_classes, "Could not load classes.") or ["All"]
        with st.expander("➕ New event"):
            with st.form("event_form", clear_on_submit=True):
                form = {
                    "title": st.text_input("Event Title"),
                    "category": st.text_input("Category"),
                    "location": st.text_input("Location"),
                    "description": st.text_area("Description"),
                    "target_class": st.selectbox("For", targets),
                }
                on = st.date_input("Date", value=date.today())
                at = st.time_input("Time", value=time(10, 0))
                if st.form_submit_button("Save"):
                    if run_mutation(lambda: svc.save(form, datetime.combine(on, at)), "Could not save event.", "Event saved."):
                        invalidate("events")


# --- textbooks ---

def render_resources(api: ApiClient, user: dict[str, Any]) -> None:
    st.subheader("📗 Textbooks")
    svc = ResourceService(api, user)
    board = st.radio("Board", res.BOARDS, format_func=res.BOARD_LABELS.get, horizontal=True, key="res_board")

    if has_role(user, STUDENT):
        classes = res.displayable_classes(load("res_student_classes", svc.student_classes, "Failed to fetch data.") or [])
        default = user.get("class_group")
        class_group = st.selectbox("Class", classes, index=classes.index(default) if default in classes else 0, key="res_class")
        for item in run_action(lambda: svc.for_class(class_group, board), "Textbooks have not been published for this class and board yet.") or []:
            st.link_button(f"{item.get('subject_name') or 'Textbook'}", item.get("url") or "")
        return

    items = load("res_textbooks", svc.textbooks, "Failed to fetch data.") or []
    classes = res.displayable_classes(load("res_classes", svc.all_classes, "Failed to fetch data.") or [])
    class_filter = st.selectbox("Class", [res.ALL, *classes], key="res_filter")
    for item in res.filter_resources(items, board, class_filter):
        cols = st.columns([5, 1, 1])
        cols[0].write(f"{item.get('class_group')} · {item.get('subject_name')}")
        cols[1].link_button("Open", item.get("url") or "")
        if is_privileged(user) and cols[2].button("🗑", key=f"res_del_{item.get('id')}"):
            if run_mutation(lambda: svc.delete(item["id"]), "Could not delete.", "Textbook removed."):
                invalidate("res_textbooks")
    if is_privileged(user):
        with st.expander("➕ Add textbook"):
            with st.form("res_form", clear_on_submit=True):
                form = {
                    "class_group": st.selectbox("Class", classes),
                    "subject_name": st.text_input("Subject"),
                    "url": st.text_input("Link"),
                    "syllabus_type": board,
                }
                cover = st.file_uploader("Cover image", type=["png", "jpg", "jpeg"])
                if st.form_submit_button("Save"):
                    if run_mutation(lambda: svc.save(form, to_upload(cover)), "Save failed.", "Textbook saved."):
                        invalidate("res_textbooks")
