from __future__ import annotations

from datetime import timedelta

import pytest

from src.student_attendance.student_attendance.attendance.model import AttendanceRow, RosterMark
from src.student_attendance.student_attendance.core.enums import AttendanceStatus
from src.student_attendance.student_attendance.core.exceptions import ValidationError

CS101 = 100
MA201 = 200
TEACHER = 1


def test_query_without_session_returns_empty(attendance_service, today):
    assert attendance_service.query(class_id=CS101, session_date=today) == []


def test_query_of_empty_session_matches_missing_session(attendance_service, today):
    attendance_service.submit(class_id=CS101, roster=[], marked_by=TEACHER, today=today)

    assert attendance_service.query(class_id=CS101, session_date=today) == []
    assert attendance_service.query(class_id=CS101, session_date=today - timedelta(days=1)) == []


def test_query_joins_student_identity(attendance_service, today):
    attendance_service.submit(
        class_id=CS101,
        roster=[RosterMark(student_id=2, present=False), RosterMark(student_id=3, present=True)],
        marked_by=TEACHER,
        today=today,
    )

    rows = attendance_service.query(class_id=CS101, session_date=today)

    assert rows == [
        AttendanceRow(student_id=2, roll_number="STU002", full_name="Student 2", status=AttendanceStatus.ABSENT),
        AttendanceRow(student_id=3, roll_number="STU003", full_name="Student 3", status=AttendanceStatus.PRESENT),
    ]


def test_query_is_scoped_to_class(attendance_service, today):
    attendance_service.submit(
        class_id=CS101, roster=[RosterMark(student_id=1, present=True)], marked_by=TEACHER, today=today
    )

    assert attendance_service.query(class_id=MA201, session_date=today) == []


def test_query_rejects_invalid_class_id(attendance_service, today):
    with pytest.raises(ValidationError):
        attendance_service.query(class_id="x", session_date=today)
