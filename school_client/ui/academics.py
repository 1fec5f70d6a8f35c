"""
Academic screens: calendar, attendance, homework, exams, performance, feedback
and syllabus.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

import streamlit as st

from school_client.domains import attendance as att
from school_client.domains import calendar as cal
from school_client.domains import exams as ex
from school_client.domains import feedback as fb
from school_client.domains import performance as perf
from school_client.domains import syllabus as syl
from school_client.domains.homework import HOMEWORK_TYPES, can_delete_submission, submission_status
from school_client.domains.roles import ADMIN, STUDENT, TEACHER, can_manage_calendar, role_of
from school_client.infrastructure.api.client import ApiClient
from school_client.services.attendance import AttendanceService
from school_client.services.calendar import CalendarService
from school_client.services.exams import ExamService
from school_client.services.feedback import FeedbackService
from school_client.services.homework import HomeworkService
from school_client.services.reports import ReportService
from school_client.services.syllabus import SyllabusService
from school_client.ui.common import confirm_button, invalidate, load, run_action, run_mutation, to_upload

BAND_COLORS = {
    att.BAND_GOOD: "green",
    att.BAND_WARNING: "orange",
    att.BAND_POOR: "red",
    perf.BAND_SUCCESS: "green",
    perf.BAND_AVERAGE: "orange",
}


# --- calendar ---

def render_calendar(api: ApiClient, user: dict[str, Any]) -> None:
    st.subheader("📅 Academic Calendar")
    svc = CalendarService(api, user)
    events = load("calendar_events", svc.fetch_events, "Failed to fetch calendar data.") or {}

    today = date.today()
    offset = st.session_state.setdefault("calendar_offset", 0)
    year, month = cal.shift_month(today.year, today.month, offset)
    nav = st.columns([1, 4, 1])
    if nav[0].button("◀", key="cal_prev"):
        st.session_state.calendar_offset -= 1
        st.rerun()
    nav[1].markdown(f"#### {date(year, month, 1):%B %Y}")
    if nav[2].button("▶", key="cal_next"):
        st.session_state.calendar_offset += 1
        st.rerun()

    header = st.columns(7)
    for col, label in zip(header, cal.WEEKDAY_LABELS):
        col.caption(label)
    cells = cal.day_cells(events, year, month, today)
    for start in range(0, len(cells), 7):
        cols = st.columns(7)
        for col, cell in zip(cols, cells[start:start + 7]):
            if cell is None:
                col.write("")
                continue
            text = f"**{cell['day']}**" if cell["is_today"] else str(cell["day"])
            if cell["is_sunday"]:
                text = f":red[{text}]"
            if cell["events"]:
                text += " •"
            col.markdown(text)

    st.markdown("##### This month")
    items = cal.month_items(events, year, month)
    if not items:
        st.caption("No events this month.")
    for item in items:
        with st.expander(f"{item['formatted_date']} · {item.get('name')} ({cal.event_display_name(item.get('type'))})"):
            st.write(item.get("time") or "")
            st.write(item.get("description") or "")
            if can_manage_calendar(user):
                if st.toggle("Edit", key=f"cal_edit_{item.get('id')}"):
                    _render_event_form(svc, f"cal_form_{item.get('id')}", item, item.get("id"))
                if confirm_button("Delete", key=f"cal_del_{item.get('id')}"):
                    run_mutation(
                        lambda: svc.delete_event(item["id"]), "Failed to delete event.", "Event deleted.",
                        invalidates=("calendar_events",),
                    )

    if can_manage_calendar(user):
        st.markdown("##### Add event")
        _render_event_form(svc, "calendar_form", {"date_key": cal.format_date_key(today)})


def _render_event_form(svc: CalendarService, key: str, initial: dict[str, Any], event_id: Any = None) -> None:
    """Create an event, or update `event_id` starting from `initial`."""
    kinds = list(cal.EVENT_TYPES)
    kind = initial.get("type") or cal.DEFAULT_EVENT_TYPE
    with st.form(key, clear_on_submit=event_id is None):
        on = st.date_input("Date", value=date.fromisoformat(initial["date_key"]))
        name = st.text_input("Title", value=initial.get("name") or "")
        kind = st.selectbox(
            "Type", kinds, index=kinds.index(kind) if kind in kinds else 0, format_func=cal.event_display_name
        )
        time_text = st.text_input("Time", value=initial.get("time") or "", placeholder="10:00 AM")
        description = st.text_area("Description", value=initial.get("description") or "")
        if st.form_submit_button("Save"):
            details = {"name": name, "type": kind, "time": time_text, "description": description}
            run_mutation(
                lambda: svc.save_event(details, cal.format_date_key(on), event_id),
                "Failed to save event.", "Event saved.", invalidates=("calendar_events",),
            )


# --- attendance ---

def _period_inputs(prefix: str, default_mode: str) -> dict[str, Any]:
    mode = st.radio(
        "View", att.VIEW_MODES, index=att.VIEW_MODES.index(default_mode), horizontal=True, key=f"{prefix}_mode"
    )
    period: dict[str, Any] = {"view_mode": mode}
    if mode in (att.VIEW_DAILY, att.VIEW_MONTHLY, att.VIEW_YEARLY):
        period["selected_date"] = st.date_input("Date", value=date.today(), key=f"{prefix}_date")
    elif mode == att.VIEW_CUSTOM:
        start, end = att.default_range()
        c1, c2 = st.columns(2)
        period["from_date"] = c1.date_input("From", value=start, key=f"{prefix}_from")
        period["to_date"] = c2.date_input("To", value=end, key=f"{prefix}_to")
    return period


def _render_history(data: dict[str, Any] | None) -> None:
    if not data:
        return
    summary = data.get("summary") or {}
    c1, c2, c3 = st.columns(3)
    c1.metric("Overall", f"{att.attendance_percentage(summary)}%")
    c2.metric("Present", summary.get("present_days") or 0)
    c3.metric("Total days", summary.get("total_days") or 0)
    history = data.get("history") or []
    if history:
        st.dataframe(history, use_container_width=True)


def _render_student_rows(rows: list[dict[str, Any]]) -> None:
    query = st.text_input("Search student", key="att_search")
    for row in att.search_students(rows, query):
        pct = att.student_percentage(row)
        color = BAND_COLORS[att.percentage_band(pct)]
        st.markdown(
            f"{row.get('roll_no') or '-'} · {row.get('full_name')} :{color}[{pct:.0f}%]"
            f" ({row.get('present_days') or 0}/{row.get('total_days') or 0})"
        )


def render_attendance(api: ApiClient, user: dict[str, Any]) -> None:
    st.subheader("✅ Attendance")
    svc = AttendanceService(api, user)
    role = role_of(user)

    if role == STUDENT:
        period = _period_inputs("my_att", att.VIEW_MONTHLY)
        _render_history(run_action(lambda: svc.my_history(**period), "Could not load attendance history."))
        return

    if role == TEACHER:
        tab_summary, tab_mark = st.tabs(["Summary", "Mark attendance"])
        assignments = load("att_assignments", svc.teacher_assignments, "Could not fetch assignments.") or []
        classes = att.unique_classes(assignments)
        with tab_summary:
            if not classes:
                st.info("No classes assigned.")
            else:
                cg = st.selectbox("Class", classes, key="att_t_class")
                subjects = att.subjects_for_class(assignments, cg)
                subject = st.selectbox("Subject", subjects, key="att_t_subject")
                period = _period_inputs("t_att", att.VIEW_OVERALL)
                data = run_action(lambda: svc.teacher_summary(cg, subject, **period), "Could not retrieve data.")
                _render_student_rows((data or {}).get("studentDetails") or [])
        with tab_mark:
            _render_live_marking(svc, classes, assignments)
        return

    if role == ADMIN:
        cg = st.selectbox("Class", att.CLASS_GROUPS, key="att_a_class")
        period = _period_inputs("a_att", att.VIEW_OVERALL)
        data = run_action(lambda: svc.admin_summary(cg, **period), "Could not fetch summary.") or {}
        overall = data.get("overallSummary") or {}
        c1, c2, c3 = st.columns(3)
        c1.metric("Class Attendance %", f"{float(overall.get('overall_percentage') or 0):.1f}%")
        c2.metric("Avg. Daily Attendance", f"{float(overall.get('avg_daily_attendance') or 0):.1f}%")
        c3.metric("Students Below 75%", overall.get("students_below_threshold") or 0)
        rows = data.get("studentDetails") or []
        _render_student_rows(rows)
        names = {r.get("student_id"): r.get("full_name") for r in rows}
        if names:
            sid = st.selectbox("Student detail", list(names), format_func=lambda i: names[i], key="att_a_student")
            _render_history(
                run_action(
                    lambda: svc.student_history(sid, as_admin=True, **period),
                    "Could not load attendance history.",
                )
            )
        return

    st.info("Attendance is not available for this role.")


def _render_live_marking(svc: AttendanceService, classes: list[str], assignments: list[dict[str, Any]]) -> None:
    if not classes:
        st.info("No classes assigned.")
        return
    c1, c2, c3 = st.columns(3)
    cg = c1.selectbox("Class", classes, key="mark_class")
    subject = c2.selectbox("Subject", att.subjects_for_class(assignments, cg), key="mark_subject")
    period_number = c3.number_input("Period", min_value=1, max_value=10, value=1, key="mark_period")
    on = st.date_input("Date", value=date.today(), key="mark_date").strftime("%Y-%m-%d")

    sheet_key = f"sheet_{cg}_{subject}_{period_number}_{on}"
    if sheet_key not in st.session_state:
        loaded = run_action(lambda: svc.load_sheet(cg, on, period_number, subject), "Failed to load attendance data.")
        st.session_state[sheet_key] = loaded or (False, [])
    is_marked, rows = st.session_state[sheet_key]
    if is_marked:
        st.success("Attendance already marked for this period.")
        return
    for row in rows:
        status = st.radio(
            row.get("full_name") or str(row.get("id")),
            att.STATUSES,
            index=att.STATUSES.index(row.get("status", att.PRESENT)),
            horizontal=True,
            key=f"{sheet_key}_{row.get('id')}",
        )
        if status != row.get("status"):
            rows = att.set_status(rows, row.get("id"), status)
    st.session_state[sheet_key] = (False, rows)
    counts = att.sheet_counts(rows)
    st.caption(f"Present {counts['present']} · Absent {counts['absent']} · Total {counts['total']}")
    if st.button("Submit attendance", type="primary", disabled=not rows):
        if run_mutation(lambda: svc.submit_sheet(rows, cg, subject, period_number, on), "Failed to save attendance.", "Attendance saved."):
            st.session_state[sheet_key] = (True, rows)


# --- homework ---

def render_homework(api: ApiClient, user: dict[str, Any]) -> None:
    st.subheader("📚 Homework")
    svc = HomeworkService(api, user)
    if role_of(user) == STUDENT:
        items = load("hw_student", svc.list_for_student, "Failed to fetch assignments.") or []
        for item in items:
            status = submission_status(item)
            with st.expander(f"{item.get('title')} · {item.get('subject')} · {status}"):
                st.write(item.get("description") or "")
                st.caption(f"Due {str(item.get('due_date') or '')[:10]}")
                if status == "Graded":
                    st.success(f"Grade: {item.get('grade')} {item.get('remarks') or ''}")
                if item.get("submission_id"):
                    if can_delete_submission(item) and confirm_button("Delete submission", key=f"hw_del_{item['id']}"):
                        if run_mutation(lambda: svc.delete_submission(item["submission_id"]), "Could not delete submission.", "Your submission has been deleted."):
                            invalidate("hw_student")
                elif item.get("homework_type") == "Written":
                    answer = st.text_area("Your answer", key=f"hw_ans_{item['id']}")
                    if st.button("Submit answer", key=f"hw_sub_{item['id']}"):
                        if run_mutation(lambda: svc.submit_written(item["id"], answer), "Failed to submit your answer.", "Your answer has been submitted!"):
                            invalidate("hw_student")
                else:
                    upload = st.file_uploader("Upload", key=f"hw_file_{item['id']}")
                    if upload and st.button("Submit file", key=f"hw_up_{item['id']}"):
                        if run_mutation(lambda: svc.submit_file(item["id"], to_upload(upload)), "Could not submit file.", "Homework submitted!"):
                            invalidate("hw_student")
        return

    items = load("hw_teacher", svc.list_for_teacher, "Failed to fetch assignment history.") or []
    classes = load("hw_classes", svc.classes, "Could not load classes.") or []
    with st.expander("➕ New assignment"):
        cg = st.selectbox("Class", classes, key="hw_new_class")
        subjects = run_action(lambda: svc.subjects_for_class(cg), "Could not load subjects.") if cg else []
        with st.form("hw_form", clear_on_submit=True):
            subject = st.selectbox("Subject", subjects or [])
            title = st.text_input("Title")
            description = st.text_area("Description")
            due = st.date_input("Due date", value=date.today())
            hw_type = st.selectbox("Type", HOMEWORK_TYPES)
            attachment = st.file_uploader("Attachment")
            if st.form_submit_button("Save"):
                form = {
                    "title": title, "description": description, "due_date": due.strftime("%Y-%m-%d"),
                    "class_group": cg, "subject": subject, "homework_type": hw_type,
                }
                if run_mutation(lambda: svc.save_assignment(form, to_upload(attachment)), "An error occurred while saving.", "Assignment created!"):
                    invalidate("hw_teacher")
    for item in items:
        with st.expander(f"{item.get('title')} · {item.get('class_group')} · {item.get('subject')}"):
            st.write(item.get("description") or "")
            roster = run_action(lambda: svc.submissions(item["id"]), "Failed to fetch student roster.") or []
            for sub in roster:
                st.markdown(f"**{sub.get('full_name')}** · {sub.get('status') or 'Pending'}")
                if sub.get("submission_id"):
                    grade = st.text_input("Grade", value=sub.get("grade") or "", key=f"g_{sub['submission_id']}")
                    remarks = st.text_input("Remarks", value=sub.get("remarks") or "", key=f"r_{sub['submission_id']}")
                    if st.button("Save grade", key=f"gs_{sub['submission_id']}"):
                        run_mutation(lambda: svc.grade(sub["submission_id"], grade, remarks), "An error occurred.", "Submission graded!")
            if confirm_button("Delete assignment", key=f"hw_tdel_{item['id']}"):
                if run_mutation(lambda: svc.delete_assignment(item["id"]), "Failed to delete assignment.", "Assignment deleted."):
                    invalidate("hw_teacher")


# --- exams ---

def render_exams(api: ApiClient, user: dict[str, Any]) -> None:
    st.subheader("📝 Exams")
    svc = ExamService(api, user)
    if role_of(user) == STUDENT:
        _render_student_exams(svc)
        return

    exams = load("exams_teacher", svc.list_for_teacher, "Failed to fetch exams.") or []
    query = st.text_input("Search exams", key="exam_search")
    with st.expander("➕ New exam"):
        _render_exam_form(svc)
    for exam in ex.filter_exams(exams, query):
        with st.expander(f"{exam.get('title')} · {exam.get('class_group')} · {exam.get('time_limit_mins') or 0} mins"):
            subs = run_action(lambda: svc.submissions(exam["exam_id"]), "Failed to fetch submissions.") or []
            sub_query = st.text_input("Search submissions", key=f"sq_{exam['exam_id']}")
            for sub in ex.filter_submissions(subs, sub_query):
                st.markdown(f"**{sub.get('student_name')}** · {sub.get('status')}")
                if st.button("Grade", key=f"grade_{sub.get('attempt_id')}"):
                    st.session_state.grading_attempt = sub.get("attempt_id")
            if confirm_button("Delete exam", key=f"exam_del_{exam['exam_id']}"):
                if run_mutation(lambda: svc.delete(exam["exam_id"]), "Failed to delete.", "Exam deleted."):
                    invalidate("exams_teacher")

    attempt_id = st.session_state.get("grading_attempt")
    if attempt_id:
        details = run_action(lambda: svc.submission_detail(attempt_id), "Could not fetch submission.") or []
        grades = ex.initial_grades(details)
        with st.form("grading_form"):
            for d in details:
                st.markdown(f"**{d.get('question_text')}**  \nAnswer: {d.get('answer_text') or '-'}")
                grades[d.get("question_id")] = st.text_input(
                    f"Marks (of {d.get('marks')})", value=str(grades.get(d.get("question_id")) or ""), key=f"qm_{d.get('question_id')}"
                )
            if st.form_submit_button("Submit grades"):
                if run_mutation(lambda: svc.grade(attempt_id, grades), "Failed to submit grades.", "Grades submitted!"):
                    st.session_state.grading_attempt = None


def _render_exam_form(svc: ExamService) -> None:
    questions = st.session_state.setdefault("exam_questions", [ex.blank_question()])
    title = st.text_input("Title", key="exam_title")
    class_group = st.selectbox("Class", att.CLASS_GROUPS, key="exam_class")
    time_limit = st.number_input("Time limit (mins)", min_value=0, value=0, key="exam_time")
    for i, q in enumerate(questions):
        st.markdown(f"**Question {i + 1}**")
        q["question_text"] = st.text_input("Question", value=q["question_text"], key=f"q_text_{i}")
        q["question_type"] = st.selectbox("Type", ex.QUESTION_TYPES, key=f"q_type_{i}")
        q["marks"] = st.text_input("Marks", value=str(q.get("marks") or "1"), key=f"q_marks_{i}")
        if q["question_type"] == ex.MULTIPLE_CHOICE:
            opts = q.setdefault("options", {k: "" for k in ex.OPTION_KEYS})
            for k in ex.OPTION_KEYS:
                opts[k] = st.text_input(f"Option {k}", value=opts.get(k, ""), key=f"q_opt_{i}_{k}")
            q["correct_answer"] = st.selectbox("Correct answer", ex.OPTION_KEYS, key=f"q_ans_{i}")
    if st.button("Add question"):
        questions.append(ex.blank_question())
        st.rerun()
    if st.button("Save exam", type="primary"):
        details = {"title": title, "class_group": class_group, "time_limit_mins": int(time_limit)}
        if run_mutation(lambda: svc.save(details, questions), "Failed to save exam.", "Exam created!"):
            invalidate("exams_teacher", "exam_questions")


def _render_student_exams(svc: ExamService) -> None:
    active = st.session_state.get("exam_attempt")
    if active:
        remaining = None
        if active.get("time_limit_seconds"):
            elapsed = (datetime.now() - active["started_at"]).total_seconds()
            remaining = active["time_limit_seconds"] - elapsed
            st.metric("Time left", ex.format_countdown(remaining))
        answers = active.setdefault("answers", {})
        for q in active["questions"]:
            qid = q.get("question_id")
            if q.get("question_type") == ex.MULTIPLE_CHOICE and isinstance(q.get("options"), dict):
                opts = q["options"]
                answers[qid] = st.radio(q.get("question_text"), list(opts), format_func=lambda k, o=opts: f"{k}. {o[k]}", key=f"ans_{qid}")
            else:
                answers[qid] = st.text_area(q.get("question_text"), key=f"ans_{qid}")
        timed_out = remaining is not None and remaining <= 0
        if timed_out or st.button("Submit exam", type="primary"):
            msg = "Time's up! Your exam has been automatically submitted." if timed_out else "Your exam has been submitted!"
            if run_mutation(lambda: svc.submit(active["attempt_id"], answers), "Could not submit exam.", msg):
                st.session_state.exam_attempt = None
        return

    exams = load("exams_student", svc.list_for_student, "Failed to fetch exams.") or []
    for exam in exams:
        with st.expander(f"{exam.get('title')} · {exam.get('time_limit_mins') or 0} Mins · {exam.get('status') or ''}"):
            if exam.get("attempt_id") and exam.get("status") == "graded":
                result = run_action(lambda: svc.result(exam["attempt_id"]), "Could not fetch results.")
                if result:
                    st.json(result)
            elif st.button("Start", key=f"start_{exam.get('exam_id')}"):
                started = run_action(lambda: svc.start(exam), "Could not start exam.")
                if started:
                    st.session_state.exam_attempt = {**started, "started_at": datetime.now()}
                    st.rerun()


# --- my performance ---

def render_performance(api: ApiClient, user: dict[str, Any]) -> None:
    st.subheader("🏆 My Performance")
    svc = ReportService(api, user)
    loaded = load("performance_data", svc.load_performance, "Could not load performance.")
    if not loaded:
        return
    class_data, my_info = loaded
    exam = st.selectbox("Select Exam Type", perf.EXAM_OPTIONS, key="perf_exam")
    class_group = my_info.get("class_group") or class_data.get("currentUserClass")
    subject = st.radio(
        "Select Subject", perf.subject_chips(class_group), format_func=perf.chip_label, horizontal=True, key="perf_subject"
    )
    view = perf.performance_view(class_data, my_info, exam, subject)
    if view is None:
        st.info("No performance data yet.")
        return

    def bar(label: str, data: dict[str, Any]) -> None:
        color = BAND_COLORS.get(perf.performance_band(data["percentage"]), "red")
        st.markdown(f"**{label}** · #{data['rank']} · {round(data['obtained'])}/{round(data['total'])} · :{color}[{round(data['percentage'])}%]")
        st.progress(min(int(data["percentage"]), 100))

    if view["mode"] == "Overview":
        for row in view["data"]:
            st.markdown(f"##### {row['subject']}")
            bar("Topper", row["topper"])
            bar("Me", row["me"])
    else:
        bar("Topper", view["data"]["topper"])
        bar("My Marks", view["data"]["me"])
    st.caption("Green ≥ 90% · Orange 60–89% · Red < 60%")


# --- student feedback ---

def render_feedback(api: ApiClient, user: dict[str, Any]) -> None:
    st.subheader("💬 Student Feedback")
    svc = FeedbackService(api, user)
    classes = load("fb_classes", svc.classes, "Could not load classes.") or []
    if not classes:
        st.info("No classes available.")
        return
    cg = st.selectbox("Class", classes, key="fb_class")
    subjects = run_action(lambda: svc.subjects(cg), "Could not load subjects.") or []
    subject = st.selectbox("Subject", subjects, key="fb_subject")
    if not subject:
        return
    teachers = run_action(lambda: svc.teachers(cg, subject), "Could not load teachers.") or []
    if role_of(user) == ADMIN and teachers:
        names = {t.get("id"): t.get("full_name") for t in teachers}
        teacher_id = st.selectbox("Teacher", list(names), format_func=lambda i: names[i], key="fb_teacher")
    else:
        teacher_id = fb.first_id(teachers)
    if not teacher_id:
        return

    rows_key = f"fb_rows_{cg}_{teacher_id}"
    if rows_key not in st.session_state:
        st.session_state[rows_key] = run_action(lambda: svc.students(cg, teacher_id), "Failed to load student list.") or []
        st.session_state.fb_dirty = False
    rows = st.session_state[rows_key]
    read_only = role_of(user) != TEACHER
    for row in rows:
        sid = row.get("student_id")
        cols = st.columns([3, 3, 4])
        cols[0].write(f"{row.get('roll_no') or ''} {row.get('full_name') or ''}")
        options = [None, *fb.BEHAVIOR_STATUSES]
        status = cols[1].radio(
            "Behaviour", options, index=options.index(row.get("behavior_status")),
            format_func=lambda s: s or "—", horizontal=True, key=f"fb_s_{sid}", disabled=read_only,
            label_visibility="collapsed",
        )
        remarks = cols[2].text_input("Remarks", value=row.get("remarks"), key=f"fb_r_{sid}", disabled=read_only, label_visibility="collapsed")
        for field, value in (("behavior_status", status), ("remarks", remarks)):
            if value != row.get(field):
                rows, changed = fb.update_row(rows, sid, field, value, user)
                st.session_state.fb_dirty = st.session_state.get("fb_dirty") or changed
    st.session_state[rows_key] = rows
    if not read_only and st.session_state.get("fb_dirty"):
        if st.button("Save feedback", type="primary"):
            if run_mutation(lambda: svc.save(cg, rows, teacher_id), "Failed to save feedback.", "Student behavior updated!"):
                st.session_state.fb_dirty = False


# --- syllabus ---

def render_syllabus(api: ApiClient, user: dict[str, Any]) -> None:
    st.subheader("📖 Syllabus")
    svc = SyllabusService(api, user)
    role = role_of(user)
    if role == STUDENT:
        loaded = load("syl_overview", svc.student_overview, "Failed to fetch progress.")
        if not loaded:
            return
        overall, subjects = loaded
        st.progress(syl.progress(overall), text=f"{overall['Done']} Done · {overall['Missed']} Missed · {overall['Pending']} Pending")
        for subject in subjects:
            with st.expander(f"{subject['name']} · {subject['Done']}/{subject['Total']}"):
                lessons = run_action(lambda: svc.subject_details(subject["id"]), "Failed to load details.") or []
                exam_type = st.selectbox("Exam", syl.EXAM_FILTERS, key=f"syl_f_{subject['id']}")
                for lesson in syl.filter_lessons(lessons, exam_type):
                    st.write(f"{lesson.get('lesson_name')} · {lesson.get('exam_type') or ''} · {lesson.get('status')}")
        return

    if role == TEACHER:
        assignments = load("syl_assign", svc.teacher_assignments, "Failed to load subjects.") or []
        classes = att.unique_classes(assignments)
        if not classes:
            st.info("No subjects assigned.")
            return
        cg = st.selectbox("Class", classes, key="syl_t_class")
        subject = st.selectbox("Subject", att.subjects_for_class(assignments, cg), key="syl_t_subject")
        loaded = run_action(lambda: svc.class_syllabus(cg, subject), "Syllabus not found for this subject.")
        if not loaded:
            return
        _, lessons = loaded
        exam_type = st.selectbox("Exam", syl.EXAM_FILTERS, key="syl_t_filter")
        shown = syl.filter_lessons(lessons, exam_type)
        counts = syl.lesson_counts(shown)
        st.caption(f"Completed {counts['completed']} · Missed {counts['missed']} · Left {counts['left']}")
        for lesson in shown:
            cols = st.columns([5, 1, 1])
            cols[0].write(f"{lesson.get('lesson_name')} · {lesson.get('status')}")
            for col, status in zip(cols[1:], (syl.COMPLETED, syl.MISSED)):
                if col.button(status, key=f"ls_{lesson.get('lesson_id')}_{status}"):
                    run_mutation(lambda s=status: svc.update_lesson_status(cg, lesson["lesson_id"], s), "Update failed.", "Lesson updated.")
        return

    if role == ADMIN:
        items = load("syl_all", svc.all_syllabi, "Failed to load syllabus history.") or []
        classes = load("syl_classes", svc.all_classes, "Could not load classes.") or []
        class_filter = st.selectbox("Class", ["All", *classes], key="syl_a_filter")
        for item in syl.filter_by_class(items, class_filter):
            with st.expander(f"{item.get('class_group')} · {item.get('subject_name')}"):
                for lesson in run_action(lambda: svc.progress_for(item["id"]), "Could not load class progress.") or []:
                    st.write(f"{lesson.get('lesson_name')} · {lesson.get('status')}")
                if confirm_button("Delete", key=f"syl_del_{item['id']}"):
                    if run_mutation(lambda: svc.delete(item["id"]), "Could not delete the syllabus.", "Syllabus has been deleted."):
                        invalidate("syl_all")
        _render_syllabus_form(svc, classes)


def _render_syllabus_form(svc: SyllabusService, classes: list[str]) -> None:
    with st.expander("➕ New syllabus"):
        cg = st.selectbox("Class", classes, key="syl_new_class")
        subjects = run_action(lambda: svc.subjects_for_class(cg), "Could not load subjects.") if cg else []
        subject = st.selectbox("Subject", subjects or [], key="syl_new_subject")
        teachers = run_action(lambda: svc.teachers_for(cg, subject), "Could not load teachers.") if subject else []
        names = {t.get("id"): t.get("full_name") for t in teachers or []}
        teacher_id = st.selectbox("Teacher", list(names), format_func=lambda i: names[i], key="syl_new_teacher")
        lessons = st.session_state.setdefault("syl_lessons", syl.editor_lessons(None))
        for i, lesson in enumerate(lessons):
            c1, c2 = st.columns(2)
            lesson["lessonName"] = c1.text_input("Lesson Name", value=lesson["lessonName"], key=f"syl_ln_{i}")
            lesson["dueDate"] = c2.text_input("Due date (YYYY-MM-DD)", value=lesson["dueDate"], key=f"syl_ld_{i}")
        if st.button("Add lesson"):
            lessons.append({"lessonName": "", "dueDate": ""})
            st.rerun()
        if st.button("Save syllabus", type="primary"):
            if run_mutation(lambda: svc.save(cg, subject, teacher_id, lessons), "Failed to save syllabus.", "Syllabus saved."):
                invalidate("syl_all", "syl_lessons")
