from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceSession:
    """Domain entity: attendance of one class on one calendar day."""

    session_id: int
    class_id: int
    session_date: date
    marked_by: Optional[int]


@dataclass(frozen=True)
class RosterMark:
    """Submitted flag for one student."""

    student_id: int
    present: bool


@dataclass(frozen=True)
class AttendanceMark:
    """Record to be written into a session."""

    student_id: int
    status: AttendanceStatus


@dataclass(frozen=True)
class AttendanceRow:
    """Read-model for the query page: a record joined with student identity."""

    student_id: int
    roll_number: str
    full_name: str
    status: AttendanceStatus


@dataclass(frozen=True)
class SubmissionResult:
    session_id: int
    session_date: date
    created: bool
    total: int
    present: int
    absent: int
