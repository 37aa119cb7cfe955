from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.student_attendance.student_attendance.core.exceptions import ValidationError
from src.student_attendance.student_attendance.reports.service import CLASS_REPORT_CSV_FIELDS, ReportService


@pytest.fixture
def service(reports):
    return ReportService(reports)


def test_attendance_percentage_passes_filters(service, reports):
    value = service.attendance_percentage(
        student_id=1, class_id=100, start=date(2026, 1, 1), end=date(2026, 1, 31)
    )

    assert value == Decimal("90.00")
    assert reports.last_percentage_args == {
        "student_id": 1,
        "class_id": 100,
        "start_date": date(2026, 1, 1),
        "end_date": date(2026, 1, 31),
    }


def test_attendance_percentage_rejects_inverted_range(service):
    with pytest.raises(ValidationError):
        service.attendance_percentage(student_id=1, start=date(2026, 2, 1), end=date(2026, 1, 1))


def test_student_summary_missing_student(service):
    with pytest.raises(ValidationError):
        service.student_summary(42)


def test_build_overview_formats_rows(service, reports):
    data = service.build_overview(start=date(2026, 2, 1), end=date(2026, 2, 28), class_id=100)

    assert data.classes[0]["attendance_percentage"] == "85.00"
    assert data.students[0]["attendance_percentage"] == "75.00"
    assert data.daily[0]["session_date"] == "2026-02-02"
    assert data.daily[0]["marked_by"] == "-"
    assert reports.last_daily_args["class_id"] == 100


def test_class_report_csv_rows_match_header(service):
    rows = service.class_report_csv_rows()

    assert len(rows) == 1
    assert list(rows[0].keys()) == CLASS_REPORT_CSV_FIELDS


def test_daily_summary_rejects_inverted_range(service):
    with pytest.raises(ValidationError):
        service.daily_summary(start=date(2026, 3, 1), end=date(2026, 2, 1))


def test_student_stats_and_class_report_pass_through(service):
    assert [s.roll_number for s in service.student_stats()] == ["STU001"]
    assert [c.class_code for c in service.class_report()] == ["CS101"]
