"""
Tests for My Performance: max marks, mark parsing, ranking, view modes.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from school_client.domains.performance import (
    ALL_SUBJECTS,
    OVERVIEW,
    chip_label,
    exam_code,
    max_marks,
    performance_band,
    performance_view,
    subject_chips,
    subject_stats,
)
from school_client.infrastructure.api.client import ApiClient
from school_client.services.reports import ReportService

STUDENTS = [{"id": 1}, {"id": 2}, {"id": 3}]


def _mark(sid: int, subject: str, exam: str, value: object) -> dict:
    return {"student_id": sid, "subject": subject, "exam_type": exam, "marks_obtained": value}


def test_max_marks() -> None:
    assert max_marks("SA1", senior=False) == 100
    assert max_marks("Pre-Final", senior=True) == 100
    assert max_marks("AT1", senior=True) == 20
    assert max_marks("UT3", senior=False) == 25


def test_exam_code_aliases() -> None:
    assert exam_code("Assignment-2") == "AT2"
    assert exam_code("Unitest-4") == "UT4"
    assert exam_code("SA2") == "SA2"
    assert exam_code("Quiz") is None


def test_performance_band() -> None:
    assert performance_band(90) == "success"
    assert performance_band(60) == "average"
    assert performance_band(59.9) == "poor"


def test_subject_chips_and_labels() -> None:
    assert subject_chips("LKG") == [ALL_SUBJECTS, OVERVIEW]
    chips = subject_chips("Class 7")
    assert chips[0] == ALL_SUBJECTS and chips[-1] == OVERVIEW
    assert "Science" in chips
    assert chip_label("Science") == "SCI"
    assert chip_label(ALL_SUBJECTS) == "All"


def test_zero_counts_and_blank_is_skipped() -> None:
    marks = [
        _mark(1, "Maths", "AT1", 0),
        _mark(1, "Maths", "UT1", ""),
        _mark(1, "Maths", "SA1", "absent"),
        _mark(2, "Maths", "AT1", "20"),
    ]
    stats = subject_stats("Maths", "Overall", STUDENTS[:2], marks, 1, senior=False)
    me = stats["me"]
    assert me["obtained"] == 0
    assert me["total"] == 25
    assert me["rank"] == 2
    assert stats["topper"]["id"] == 2
    assert stats["topper"]["percentage"] == pytest.approx(80.0)


def test_ties_keep_server_order() -> None:
    marks = [_mark(1, "Maths", "AT1", 10), _mark(2, "Maths", "AT1", 10)]
    stats = subject_stats("Maths", "AT1", STUDENTS[:2], marks, 2, senior=True)
    assert stats["topper"]["id"] == 1
    assert stats["me"]["rank"] == 2


def test_me_missing_from_class() -> None:
    stats = subject_stats("Maths", "AT1", STUDENTS, [], 99, senior=False)
    assert stats["me"] == {"obtained": 0, "percentage": 0, "rank": "-", "total": 0}
    assert stats["topper"]["percentage"] == 0


def test_view_needs_both_payloads() -> None:
    assert performance_view(None, {"id": 1}) is None
    assert performance_view({"students": STUDENTS}, None) is None
    assert performance_view({"students": []}, {"id": 1}) is None


def test_view_all_subjects_sums_subjects() -> None:
    class_data = {
        "currentUserClass": "Class 2",
        "students": STUDENTS[:2],
        "marks": [
            _mark(1, "Maths", "SA1", 50),
            _mark(1, "English", "SA1", 40),
            _mark(2, "Maths", "SA1", 95),
        ],
    }
    view = performance_view(class_data, {"id": 1}, "SA1", ALL_SUBJECTS)
    assert view["mode"] == "Single"
    me = view["data"]["me"]
    assert me["obtained"] == 90
    assert me["total"] == 200
    assert me["rank"] == 2
    assert view["data"]["topper"]["id"] == 2


def test_view_overview_rows_per_subject() -> None:
    class_data = {"currentUserClass": "Class 8", "students": STUDENTS, "marks": [_mark(3, "Science", "AT1", 18)]}
    view = performance_view(class_data, {"id": 3}, "AT1", OVERVIEW)
    assert view["mode"] == "Overview"
    subjects = [r["subject"] for r in view["data"]]
    assert subjects == ["Telugu", "English", "Hindi", "Maths", "Science", "Social"]
    science = view["data"][4]
    assert science["me"]["rank"] == 1
    assert science["me"]["percentage"] == pytest.approx(90.0)


def test_view_kindergarten_all_subjects() -> None:
    class_data = {"currentUserClass": "UKG", "students": STUDENTS[:1], "marks": [_mark(1, ALL_SUBJECTS, "SA2", 75)]}
    view = performance_view(class_data, {"id": 1}, "Overall", ALL_SUBJECTS)
    assert view["data"]["me"]["percentage"] == pytest.approx(75.0)


def test_report_service_loads_both_payloads() -> None:
    api = MagicMock(spec=ApiClient)
    api.get.side_effect = [
        {"students": [{"id": 5}], "marks": [], "currentUserClass": "Class 1"},
        {"studentInfo": {"id": 5, "class_group": "Class 1"}},
    ]
    class_data, my_info = ReportService(api, {"id": 5, "role": "student"}).load_performance()
    assert class_data["currentUserClass"] == "Class 1"
    assert my_info["id"] == 5
