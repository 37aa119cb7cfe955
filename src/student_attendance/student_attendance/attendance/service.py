from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional

from ..common.datetime_utils import today_local
from ..common.validators import require_positive_id
from ..core.enums import AttendanceStatus
from ..core.exceptions import AuthorizationError, ValidationError
from ..directory.repository import DirectoryRepository
from .model import AttendanceMark, AttendanceRow, RosterMark, SubmissionResult
from .repository import AttendanceRepository

logger = logging.getLogger("student_attendance.attendance")


class AttendanceService:
    """Marking and lookup of class attendance.

    Submitting is an overwrite: the stored record set of a (class, date) session
    always equals the last roster submitted for it.
    """

    def __init__(self, attendance: AttendanceRepository, directory: DirectoryRepository):
        self._attendance = attendance
        self._directory = directory

    def submit(
        self,
        *,
        class_id: int,
        roster: Iterable[RosterMark],
        marked_by: int,
        today: Optional[date] = None,
    ) -> SubmissionResult:
        today = today or today_local()
        class_id = require_positive_id(class_id, "Class")
        marked_by = require_positive_id(marked_by, "User")

        marks = self._build_marks(roster)

        if not self._directory.get_class(class_id):
            raise ValidationError("Class does not exist")

        session, created = self._attendance.get_or_create_session(
            class_id=class_id,
            session_date=today,
            marked_by=marked_by,
        )
        # Only the marker may rewrite a session. Once the marker's profile is deleted
        # (marked_by NULL) the session is read-only for everyone.
        if session.marked_by != marked_by:
            raise AuthorizationError("Attendance for this class and date was marked by another teacher")

        self._attendance.replace_records(session_id=session.session_id, marks=marks)

        present = sum(1 for m in marks if m.status == AttendanceStatus.PRESENT)
        result = SubmissionResult(
            session_id=session.session_id,
            session_date=today,
            created=created,
            total=len(marks),
            present=present,
            absent=len(marks) - present,
        )
        logger.info(
            "Attendance %s for class %s on %s by %s: %d present, %d absent",
            "recorded" if created else "replaced",
            class_id,
            today.isoformat(),
            marked_by,
            result.present,
            result.absent,
        )
        return result

    def query(self, *, class_id: int, session_date: date) -> list[AttendanceRow]:
        """Records of the (class, date) session; empty when no session exists."""

        class_id = require_positive_id(class_id, "Class")
        session = self._attendance.get_session(class_id=class_id, session_date=session_date)
        if not session:
            return []
        return list(self._attendance.list_session_rows(session_id=session.session_id))

    @staticmethod
    def _build_marks(roster: Iterable[RosterMark]) -> list[AttendanceMark]:
        marks: list[AttendanceMark] = []
        seen: set[int] = set()
        for entry in roster:
            student_id = require_positive_id(entry.student_id, "Student")
            if student_id in seen:
                raise ValidationError(f"Student {student_id} appears more than once in the roster")
            seen.add(student_id)
            marks.append(AttendanceMark(student_id=student_id, status=AttendanceStatus.from_flag(bool(entry.present))))
        return marks
