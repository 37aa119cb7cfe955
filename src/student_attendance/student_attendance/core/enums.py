from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Application role stored on a profile and in user_roles."""

    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"


class AttendanceStatus(str, Enum):
    """Closed set of statuses accepted by attendance_records.status."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LATE = "LATE"
    EXCUSED = "EXCUSED"

    @classmethod
    def from_flag(cls, present: bool) -> "AttendanceStatus":
        return cls.PRESENT if present else cls.ABSENT
