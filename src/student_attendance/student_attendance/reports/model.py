from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class StudentStatsRow:
    """Per-student totals (view student_attendance_stats)."""

    student_id: int
    roll_number: str
    full_name: str
    total_sessions: int
    present_count: int
    absent_count: int
    late_count: int
    excused_count: int
    attendance_percentage: Decimal


@dataclass(frozen=True)
class ClassReportRow:
    """Per-class totals (view class_attendance_report)."""

    class_id: int
    class_code: str
    class_name: str
    total_sessions: int
    enrolled_students: int
    total_records: int
    total_present: int
    total_absent: int
    overall_attendance_percentage: Decimal


@dataclass(frozen=True)
class DailySummaryRow:
    """One marked session (view daily_attendance_summary)."""

    session_date: date
    class_id: int
    class_code: str
    class_name: str
    total_marked: int
    present: int
    absent: int
    late: int
    marked_by: Optional[str] = None
