from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..common.validators import require_positive_id
from ..core.exceptions import ValidationError
from .model import ClassReportRow, DailySummaryRow, StudentStatsRow
from .repository import ReportRepository

CLASS_REPORT_CSV_FIELDS = [
    "class_code",
    "class_name",
    "enrolled_students",
    "total_sessions",
    "total_records",
    "total_present",
    "total_absent",
    "attendance_percentage",
]


@dataclass(frozen=True)
class ReportData:
    classes: list[dict]
    students: list[dict]
    daily: list[dict]


def _pct(value: Decimal) -> str:
    return f"{Decimal(value):.2f}"


def _check_range(start: Optional[date], end: Optional[date]) -> None:
    if start and end and start > end:
        raise ValidationError("Start date must not be after end date")


def _class_row(r: ClassReportRow) -> dict:
    return {
        "class_id": r.class_id,
        "class_code": r.class_code,
        "class_name": r.class_name,
        "enrolled_students": r.enrolled_students,
        "total_sessions": r.total_sessions,
        "total_records": r.total_records,
        "total_present": r.total_present,
        "total_absent": r.total_absent,
        "attendance_percentage": _pct(r.overall_attendance_percentage),
    }


class ReportService:
    """Formats database-side aggregates for pages and exports.

    Nothing is computed here: percentages and totals come from the
    calculate_attendance_percentage function and the report views.
    """

    def __init__(self, reports: ReportRepository):
        self._reports = reports

    def attendance_percentage(
        self,
        *,
        student_id: int,
        class_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Decimal:
        student_id = require_positive_id(student_id, "Student")
        if class_id is not None:
            class_id = require_positive_id(class_id, "Class")
        _check_range(start, end)

        return self._reports.attendance_percentage(
            student_id=student_id,
            class_id=class_id,
            start_date=start,
            end_date=end,
        )

    def student_summary(self, student_id: int) -> StudentStatsRow:
        stats = self._reports.get_student_stats(require_positive_id(student_id, "Student"))
        if not stats:
            raise ValidationError("Student does not exist")
        return stats

    def student_stats(self) -> list[StudentStatsRow]:
        return list(self._reports.list_student_stats())

    def class_report(self) -> list[ClassReportRow]:
        return list(self._reports.list_class_report())

    def daily_summary(self, *, start: date, end: date, class_id: Optional[int] = None) -> list[DailySummaryRow]:
        _check_range(start, end)
        if class_id is not None:
            class_id = require_positive_id(class_id, "Class")
        return list(self._reports.list_daily_summary(start_date=start, end_date=end, class_id=class_id))

    def build_overview(self, *, start: date, end: date, class_id: Optional[int] = None) -> ReportData:
        daily = [
            {
                "session_date": r.session_date.strftime("%Y-%m-%d"),
                "class_code": r.class_code,
                "class_name": r.class_name,
                "total_marked": r.total_marked,
                "present": r.present,
                "absent": r.absent,
                "late": r.late,
                "marked_by": r.marked_by or "-",
            }
            for r in self.daily_summary(start=start, end=end, class_id=class_id)
        ]

        students = [
            {
                "student_id": r.student_id,
                "roll_number": r.roll_number,
                "full_name": r.full_name,
                "total_sessions": r.total_sessions,
                "present_count": r.present_count,
                "absent_count": r.absent_count,
                "late_count": r.late_count,
                "excused_count": r.excused_count,
                "attendance_percentage": _pct(r.attendance_percentage),
            }
            for r in self.student_stats()
        ]

        return ReportData(
            classes=[_class_row(r) for r in self.class_report()],
            students=students,
            daily=daily,
        )

    def class_report_csv_rows(self) -> list[dict]:
        return [{k: row[k] for k in CLASS_REPORT_CSV_FIELDS} for row in map(_class_row, self.class_report())]
