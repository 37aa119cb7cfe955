from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceMark, AttendanceRow, AttendanceSession
from .repository import AttendanceRepository


def _to_session(r: dict) -> AttendanceSession:
    return AttendanceSession(
        session_id=int(r["session_id"]),
        class_id=int(r["class_id"]),
        session_date=r["session_date"],
        marked_by=int(r["marked_by"]) if r.get("marked_by") is not None else None,
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_session(self, *, class_id: int, session_date: date) -> Optional[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT session_id, class_id, session_date, marked_by
                FROM attendance_sessions
                WHERE class_id=%s AND session_date=%s
                """,
                (class_id, session_date),
            )
            r = fetchone(cur)
            return _to_session(r) if r else None

    def get_or_create_session(
        self,
        *,
        class_id: int,
        session_date: date,
        marked_by: int,
    ) -> tuple[AttendanceSession, bool]:
        with db_cursor(self._conn_factory) as (_, cur):
            # No-op update on the (class_id, session_date) key: an existing row is kept untouched.
            cur.execute(
                """
                INSERT INTO attendance_sessions(class_id, session_date, marked_by)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE session_id = session_id
                """,
                (class_id, session_date, marked_by),
            )
            inserted_id = int(cur.lastrowid or 0)

            cur.execute(
                """
                SELECT session_id, class_id, session_date, marked_by
                FROM attendance_sessions
                WHERE class_id=%s AND session_date=%s
                """,
                (class_id, session_date),
            )
            session = _to_session(fetchone(cur))
            return session, inserted_id == session.session_id

    def replace_records(self, *, session_id: int, marks: Sequence[AttendanceMark]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE session_id=%s", (session_id,))
            if marks:
                cur.executemany(
                    """
                    INSERT INTO attendance_records(session_id, student_id, status)
                    VALUES(%s,%s,%s)
                    """,
                    [(session_id, m.student_id, m.status.value) for m in marks],
                )
            cur.execute(
                "UPDATE attendance_sessions SET updated_at=CURRENT_TIMESTAMP WHERE session_id=%s",
                (session_id,),
            )
            return len(marks)

    def list_session_rows(self, *, session_id: int) -> Sequence[AttendanceRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT ar.student_id, st.roll_number, st.full_name, ar.status
                FROM attendance_records ar
                JOIN students st ON st.student_id = ar.student_id
                WHERE ar.session_id=%s
                """,
                (session_id,),
            )
            return [
                AttendanceRow(
                    student_id=int(r["student_id"]),
                    roll_number=r["roll_number"],
                    full_name=r["full_name"],
                    status=AttendanceStatus(r["status"]),
                )
                for r in fetchall(cur)
            ]
