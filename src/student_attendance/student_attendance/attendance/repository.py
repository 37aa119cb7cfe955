from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceMark, AttendanceRow, AttendanceSession


class AttendanceRepository(Protocol):
    def get_session(self, *, class_id: int, session_date: date) -> Optional[AttendanceSession]:
        raise NotImplementedError

    def get_or_create_session(
        self,
        *,
        class_id: int,
        session_date: date,
        marked_by: int,
    ) -> tuple[AttendanceSession, bool]:
        """Return the (class, date) session, inserting it if missing.

        Must be a single conditional write keyed on the (class_id, session_date)
        unique constraint so concurrent callers converge on one row.
        The bool is True when this call created the row.
        """

        raise NotImplementedError

    def replace_records(self, *, session_id: int, marks: Sequence[AttendanceMark]) -> int:
        """Delete every record of the session and insert `marks`, atomically.

        Returns the number of records inserted.
        """

        raise NotImplementedError

    def list_session_rows(self, *, session_id: int) -> Sequence[AttendanceRow]:
        raise NotImplementedError
