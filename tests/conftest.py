from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.student_attendance.student_attendance.attendance.model import (
    AttendanceMark,
    AttendanceRow,
    AttendanceSession,
)
from src.student_attendance.student_attendance.attendance.service import AttendanceService
from src.student_attendance.student_attendance.core.enums import Role
from src.student_attendance.student_attendance.core.exceptions import BackendError, ConstraintViolation
from src.student_attendance.student_attendance.directory.model import SchoolClass, Student
from src.student_attendance.student_attendance.reports.model import (
    ClassReportRow,
    DailySummaryRow,
    StudentStatsRow,
)
from src.student_attendance.student_attendance.users.model import Profile

TEACHER_ID = 1
OTHER_TEACHER_ID = 2
ADMIN_ID = 3


class InMemoryDirectory:
    def __init__(self):
        self.classes: dict[int, SchoolClass] = {}
        self.students: dict[int, Student] = {}
        self.enrollments: list[tuple[int, int]] = []

    def add_class(self, class_id: int, code: str, name: str) -> SchoolClass:
        c = SchoolClass(class_id=class_id, class_code=code, class_name=name)
        self.classes[class_id] = c
        return c

    def add_student(self, student_id: int, roll_number: str, full_name: str) -> Student:
        s = Student(student_id=student_id, roll_number=roll_number, full_name=full_name)
        self.students[student_id] = s
        return s

    def unenroll(self, *, student_id: int, class_id: int) -> None:
        self.enrollments.remove((student_id, class_id))

    def list_classes(self):
        return sorted(self.classes.values(), key=lambda c: c.class_name)

    def get_class(self, class_id: int) -> Optional[SchoolClass]:
        return self.classes.get(class_id)

    def list_enrolled_students(self, class_id: int):
        return [self.students[sid] for sid, cid in self.enrollments if cid == class_id]

    def get_student(self, student_id: int) -> Optional[Student]:
        return self.students.get(student_id)

    def create_enrollment(self, *, student_id: int, class_id: int) -> int:
        if (student_id, class_id) in self.enrollments:
            raise ConstraintViolation("Duplicate entry for key 'uq_class_enrollments'", errno=1062)
        self.enrollments.append((student_id, class_id))
        return len(self.enrollments)


class InMemoryAttendance:
    """Mirrors the unique keys of attendance_sessions and attendance_records."""

    def __init__(self, directory: InMemoryDirectory):
        self._directory = directory
        self.sessions: dict[tuple[int, date], AttendanceSession] = {}
        self.records: dict[int, list[AttendanceMark]] = {}
        self._next_id = 1
        self.fail_on_replace = False

    def get_session(self, *, class_id: int, session_date: date) -> Optional[AttendanceSession]:
        return self.sessions.get((class_id, session_date))

    def get_or_create_session(self, *, class_id: int, session_date: date, marked_by: int):
        key = (class_id, session_date)
        if key in self.sessions:
            return self.sessions[key], False
        session = AttendanceSession(
            session_id=self._next_id,
            class_id=class_id,
            session_date=session_date,
            marked_by=marked_by,
        )
        self._next_id += 1
        self.sessions[key] = session
        self.records[session.session_id] = []
        return session, True

    def replace_records(self, *, session_id: int, marks) -> int:
        if self.fail_on_replace:
            raise BackendError("Lost connection to MySQL server during query", errno=2013)
        student_ids = [m.student_id for m in marks]
        if len(student_ids) != len(set(student_ids)):
            raise ConstraintViolation("Duplicate entry for key 'uq_attendance_records'", errno=1062)
        self.records[session_id] = list(marks)
        return len(marks)

    def list_session_rows(self, *, session_id: int):
        rows = []
        for m in self.records.get(session_id, []):
            st = self._directory.students[m.student_id]
            rows.append(
                AttendanceRow(
                    student_id=st.student_id,
                    roll_number=st.roll_number,
                    full_name=st.full_name,
                    status=m.status,
                )
            )
        return rows


class InMemoryProfiles:
    def __init__(self):
        self.profiles: dict[int, Profile] = {}
        self.roles: dict[int, list[Role]] = {}

    def add(self, profile_id: int, full_name: str, email: str, password: str, role: Role) -> Profile:
        p = Profile(
            profile_id=profile_id,
            full_name=full_name,
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
        )
        self.profiles[profile_id] = p
        self.roles[profile_id] = [role]
        return p

    def get_by_email(self, email: str) -> Optional[Profile]:
        for p in self.profiles.values():
            if p.email == email:
                return p
        return None

    def create_profile(self, *, full_name: str, email: str, password_hash: str, role: Role) -> int:
        if self.get_by_email(email):
            raise ConstraintViolation("Duplicate entry for key 'uq_profiles_email'", errno=1062)
        profile_id = max(self.profiles, default=0) + 1
        self.profiles[profile_id] = Profile(
            profile_id=profile_id,
            full_name=full_name,
            email=email,
            password_hash=password_hash,
            role=role,
        )
        self.roles[profile_id] = [role]
        return profile_id

    def list_roles(self, profile_id: int):
        return list(self.roles.get(profile_id, []))


class FakeReports:
    def __init__(self):
        self.percentage = Decimal("90.00")
        self.last_percentage_args = None
        self.last_daily_args = None
        self.student_stats = [
            StudentStatsRow(
                student_id=1,
                roll_number="STU001",
                full_name="John Doe",
                total_sessions=4,
                present_count=3,
                absent_count=1,
                late_count=0,
                excused_count=0,
                attendance_percentage=Decimal("75.00"),
            )
        ]
        self.class_report = [
            ClassReportRow(
                class_id=100,
                class_code="CS101",
                class_name="Introduction to Computer Science",
                total_sessions=2,
                enrolled_students=10,
                total_records=20,
                total_present=17,
                total_absent=3,
                overall_attendance_percentage=Decimal("85"),
            )
        ]
        self.daily = [
            DailySummaryRow(
                session_date=date(2026, 2, 2),
                class_id=100,
                class_code="CS101",
                class_name="Introduction to Computer Science",
                total_marked=10,
                present=9,
                absent=1,
                late=0,
                marked_by=None,
            )
        ]

    def attendance_percentage(self, *, student_id, class_id=None, start_date=None, end_date=None):
        self.last_percentage_args = {
            "student_id": student_id,
            "class_id": class_id,
            "start_date": start_date,
            "end_date": end_date,
        }
        return self.percentage

    def get_student_stats(self, student_id):
        for s in self.student_stats:
            if s.student_id == student_id:
                return s
        return None

    def list_student_stats(self):
        return list(self.student_stats)

    def list_class_report(self):
        return list(self.class_report)

    def list_daily_summary(self, *, start_date, end_date, class_id=None):
        self.last_daily_args = {"start_date": start_date, "end_date": end_date, "class_id": class_id}
        return list(self.daily)


CS101_ID = 100
MA201_ID = 200


@pytest.fixture
def today() -> date:
    return date(2026, 2, 2)


@pytest.fixture
def directory() -> InMemoryDirectory:
    d = InMemoryDirectory()
    d.add_class(CS101_ID, "CS101", "Introduction to Computer Science")
    d.add_class(MA201_ID, "MA201", "Calculus")
    for i in range(1, 11):
        d.add_student(i, f"STU{i:03d}", f"Student {i}")
        d.enrollments.append((i, CS101_ID))
    d.enrollments.append((1, MA201_ID))
    d.enrollments.append((2, MA201_ID))
    return d


@pytest.fixture
def attendance_repo(directory) -> InMemoryAttendance:
    return InMemoryAttendance(directory)


@pytest.fixture
def attendance_service(attendance_repo, directory) -> AttendanceService:
    return AttendanceService(attendance_repo, directory)


@pytest.fixture
def profiles() -> InMemoryProfiles:
    p = InMemoryProfiles()
    p.add(TEACHER_ID, "Teacher One", "teacher@example.com", "teacher123", Role.TEACHER)
    p.add(OTHER_TEACHER_ID, "Teacher Two", "other@example.com", "other123", Role.TEACHER)
    p.add(ADMIN_ID, "Admin", "admin@example.com", "admin123", Role.ADMIN)
    return p


@pytest.fixture
def reports() -> FakeReports:
    return FakeReports()
