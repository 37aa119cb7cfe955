from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ClassReportRow, DailySummaryRow, StudentStatsRow
from .repository import ReportRepository

_STUDENT_STATS_COLUMNS = """
    student_id, roll_number, full_name, total_sessions,
    present_count, absent_count, late_count, excused_count, attendance_percentage
"""


def _to_student_stats(r: dict) -> StudentStatsRow:
    return StudentStatsRow(
        student_id=int(r["student_id"]),
        roll_number=r["roll_number"],
        full_name=r["full_name"],
        total_sessions=int(r["total_sessions"] or 0),
        present_count=int(r["present_count"] or 0),
        absent_count=int(r["absent_count"] or 0),
        late_count=int(r["late_count"] or 0),
        excused_count=int(r["excused_count"] or 0),
        attendance_percentage=Decimal(r["attendance_percentage"] or 0),
    )


class MySQLReportRepository(ReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def attendance_percentage(
        self,
        *,
        student_id: int,
        class_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Decimal:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT calculate_attendance_percentage(%s,%s,%s,%s) AS pct",
                (student_id, class_id, start_date, end_date),
            )
            r = fetchone(cur)
            return Decimal(r["pct"] or 0) if r else Decimal("0")

    def get_student_stats(self, student_id: int) -> Optional[StudentStatsRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_STUDENT_STATS_COLUMNS} FROM student_attendance_stats WHERE student_id=%s",
                (student_id,),
            )
            r = fetchone(cur)
            return _to_student_stats(r) if r else None

    def list_student_stats(self) -> Sequence[StudentStatsRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_STUDENT_STATS_COLUMNS} FROM student_attendance_stats ORDER BY roll_number")
            return [_to_student_stats(r) for r in fetchall(cur)]

    def list_class_report(self) -> Sequence[ClassReportRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT class_id, class_code, class_name, total_sessions, enrolled_students,
                       total_records, total_present, total_absent, overall_attendance_percentage
                FROM class_attendance_report
                ORDER BY class_name
                """
            )
            return [
                ClassReportRow(
                    class_id=int(r["class_id"]),
                    class_code=r["class_code"],
                    class_name=r["class_name"],
                    total_sessions=int(r["total_sessions"] or 0),
                    enrolled_students=int(r["enrolled_students"] or 0),
                    total_records=int(r["total_records"] or 0),
                    total_present=int(r["total_present"] or 0),
                    total_absent=int(r["total_absent"] or 0),
                    overall_attendance_percentage=Decimal(r["overall_attendance_percentage"] or 0),
                )
                for r in fetchall(cur)
            ]

    def list_daily_summary(
        self,
        *,
        start_date: date,
        end_date: date,
        class_id: Optional[int] = None,
    ) -> Sequence[DailySummaryRow]:
        clauses = ["session_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]

        if class_id is not None:
            clauses.append("class_id=%s")
            params.append(int(class_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT session_date, class_id, class_code, class_name,
                       total_marked, present, absent, late, marked_by
                FROM daily_attendance_summary
                WHERE {where}
                ORDER BY session_date DESC, class_name ASC
                """,
                tuple(params),
            )
            return [
                DailySummaryRow(
                    session_date=r["session_date"],
                    class_id=int(r["class_id"]),
                    class_code=r["class_code"],
                    class_name=r["class_name"],
                    total_marked=int(r["total_marked"] or 0),
                    present=int(r["present"] or 0),
                    absent=int(r["absent"] or 0),
                    late=int(r["late"] or 0),
                    marked_by=r.get("marked_by"),
                )
                for r in fetchall(cur)
            ]
