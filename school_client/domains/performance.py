"""
Class performance aggregation for the "My Performance" screen.

Input is the /reports/student-class-performance payload: `students` ([{id, ...}]),
`marks` ([{student_id, subject, exam_type, marks_obtained}]) and `currentUserClass`.
Everything is computed client-side: per-student totals, percentages and ranks, then
the topper and the signed-in student are picked out.
"""

from __future__ import annotations

from typing import Any

ALL_SUBJECTS = "All Subjects"
OVERVIEW = "Overview"
OVERALL = "Overall"

JUNIOR_SUBJECTS = ["Telugu", "English", "Hindi", "EVS", "Maths"]
SENIOR_SUBJECTS = ["Telugu", "English", "Hindi", "Maths", "Science", "Social"]

CLASS_SUBJECTS: dict[str, list[str]] = {
    "LKG": [ALL_SUBJECTS],
    "UKG": [ALL_SUBJECTS],
    **{f"Class {n}": JUNIOR_SUBJECTS for n in range(1, 6)},
    **{f"Class {n}": SENIOR_SUBJECTS for n in range(6, 11)},
}

SENIOR_CLASSES = tuple(f"Class {n}" for n in range(6, 11))

EXAM_NAME_TO_CODE: dict[str, str] = {
    **{f"Assignment-{n}": f"AT{n}" for n in range(1, 5)},
    **{f"Unitest-{n}": f"UT{n}" for n in range(1, 5)},
    **{f"AT{n}": f"AT{n}" for n in range(1, 5)},
    **{f"UT{n}": f"UT{n}" for n in range(1, 5)},
    "SA1": "SA1",
    "SA2": "SA2",
    "Pre-Final": "Pre-Final",
    OVERALL: OVERALL,
}

EXAM_OPTIONS = [OVERALL, "AT1", "UT1", "AT2", "UT2", "SA1", "AT3", "UT3", "AT4", "UT4", "SA2"]

SUMMATIVE_CODES = ("SA1", "SA2", "Pre-Final")

BAND_SUCCESS = "success"
BAND_AVERAGE = "average"
BAND_POOR = "poor"


def exam_code(exam_type: str | None) -> str | None:
    return EXAM_NAME_TO_CODE.get(exam_type or "")


def is_senior(class_group: str | None) -> bool:
    return class_group in SENIOR_CLASSES


def max_marks(code: str, senior: bool) -> int:
    """Maximum marks for one exam code."""
    if code in SUMMATIVE_CODES:
        return 100
    return 20 if senior else 25


def performance_band(percentage: float) -> str:
    if percentage >= 90:
        return BAND_SUCCESS
    if percentage >= 60:
        return BAND_AVERAGE
    return BAND_POOR


def _mark_value(entry: dict[str, Any] | None) -> float | None:
    """Numeric marks or None for missing/blank/non-numeric entries."""
    if not entry:
        return None
    raw = entry.get("marks_obtained")
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None
    try:
        return float(raw)
    except (TypeError, ValueError):
        return None


def _find_mark(marks: list[dict[str, Any]], subject: str, code: str) -> dict[str, Any] | None:
    for m in marks:
        if m.get("subject") == subject and exam_code(m.get("exam_type")) == code:
            return m
    return None


def _accumulate(
    marks: list[dict[str, Any]], subject: str, exam: str, senior: bool
) -> tuple[float, int]:
    codes = EXAM_OPTIONS[1:] if exam == OVERALL else [exam]
    obtained = 0.0
    possible = 0
    for code in codes:
        val = _mark_value(_find_mark(marks, subject, code))
        if val is None:
            continue
        obtained += val
        possible += max_marks(code, senior)
    return obtained, possible


def empty_result() -> dict[str, Any]:
    return {"obtained": 0, "percentage": 0, "rank": "-", "total": 0}


def _rank(
    students: list[dict[str, Any]],
    marks: list[dict[str, Any]],
    subjects: list[str],
    exam: str,
    my_id: Any,
    senior: bool,
) -> dict[str, dict[str, Any]]:
    results = []
    for student in students:
        sid = student.get("id")
        own = [m for m in marks if m.get("student_id") == sid]
        obtained = 0.0
        possible = 0
        for subject in subjects:
            o, p = _accumulate(own, subject, exam, senior)
            obtained += o
            possible += p
        results.append(
            {
                "id": sid,
                "obtained": obtained,
                "total": possible,
                "percentage": (obtained / possible) * 100 if possible > 0 else 0,
            }
        )
    # stable sort keeps server order for ties
    results.sort(key=lambda r: r["obtained"], reverse=True)
    ranked = [{**r, "rank": i + 1} for i, r in enumerate(results)]
    topper = ranked[0] if ranked else empty_result()
    me = next((r for r in ranked if r["id"] == my_id), None) or empty_result()
    return {"topper": topper, "me": me}


def subject_stats(
    subject: str,
    exam: str,
    students: list[dict[str, Any]],
    marks: list[dict[str, Any]],
    my_id: Any,
    senior: bool,
) -> dict[str, dict[str, Any]]:
    """Topper and me for one subject under one exam code (or Overall)."""
    return _rank(students, marks, [subject], exam, my_id, senior)


def all_subjects_stats(
    subjects: list[str],
    exam: str,
    students: list[dict[str, Any]],
    marks: list[dict[str, Any]],
    my_id: Any,
    senior: bool,
) -> dict[str, dict[str, Any]]:
    """Topper and me with marks summed over every subject of the class."""
    real = [s for s in subjects if s != ALL_SUBJECTS] or [ALL_SUBJECTS]
    return _rank(students, marks, real, exam, my_id, senior)


def subject_chips(class_group: str | None) -> list[str]:
    """Subject selector values: All Subjects, the class's subjects, Overview."""
    raw = CLASS_SUBJECTS.get(class_group or "", [])
    return [ALL_SUBJECTS, *[s for s in raw if s != ALL_SUBJECTS], OVERVIEW]


def chip_label(subject: str) -> str:
    if subject == ALL_SUBJECTS:
        return "All"
    if subject == OVERVIEW:
        return subject
    return subject[:3].upper()


def performance_view(
    class_data: dict[str, Any] | None,
    my_info: dict[str, Any] | None,
    exam: str = OVERALL,
    subject: str = ALL_SUBJECTS,
) -> dict[str, Any] | None:
    """
    Build what the screen renders for the chosen exam and subject chip.

    Returns:
        None until both payloads are loaded; otherwise {"mode": "Single", "data":
        {topper, me}} or {"mode": "Overview", "data": [{subject, topper, me}, ...]}.
    """
    if not my_info or not class_data or not class_data.get("students"):
        return None
    students = class_data.get("students") or []
    marks = class_data.get("marks") or []
    class_group = class_data.get("currentUserClass") or my_info.get("class_group")
    senior = is_senior(class_group)
    subjects = CLASS_SUBJECTS.get(class_group or "", [])
    my_id = my_info.get("id")

    if subject == OVERVIEW:
        rows = [
            {"subject": s, **subject_stats(s, exam, students, marks, my_id, senior)}
            for s in subjects
            if s != ALL_SUBJECTS
        ]
        return {"mode": "Overview", "data": rows}
    if subject == ALL_SUBJECTS:
        return {"mode": "Single", "data": all_subjects_stats(subjects, exam, students, marks, my_id, senior)}
    return {"mode": "Single", "data": subject_stats(subject, exam, students, marks, my_id, senior)}
