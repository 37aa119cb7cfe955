from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import SchoolClass, Student
from .repository import DirectoryRepository


def _to_class(r: dict) -> SchoolClass:
    return SchoolClass(
        class_id=int(r["class_id"]),
        class_code=r["class_code"],
        class_name=r["class_name"],
        description=r.get("description"),
        teacher_id=r.get("teacher_id"),
    )


def _to_student(r: dict) -> Student:
    return Student(
        student_id=int(r["student_id"]),
        roll_number=r["roll_number"],
        full_name=r["full_name"],
        email=r.get("email"),
        phone=r.get("phone"),
    )


class MySQLDirectoryRepository(DirectoryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_classes(self) -> Sequence[SchoolClass]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT class_id, class_code, class_name, description, teacher_id
                FROM classes
                ORDER BY class_name
                """
            )
            return [_to_class(r) for r in fetchall(cur)]

    def get_class(self, class_id: int) -> Optional[SchoolClass]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT class_id, class_code, class_name, description, teacher_id
                FROM classes
                WHERE class_id=%s
                """,
                (class_id,),
            )
            r = fetchone(cur)
            return _to_class(r) if r else None

    def list_enrolled_students(self, class_id: int) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT st.student_id, st.roll_number, st.full_name, st.email, st.phone
                FROM class_enrollments ce
                JOIN students st ON st.student_id = ce.student_id
                WHERE ce.class_id=%s
                """,
                (class_id,),
            )
            return [_to_student(r) for r in fetchall(cur)]

    def get_student(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT student_id, roll_number, full_name, email, phone
                FROM students
                WHERE student_id=%s
                """,
                (student_id,),
            )
            r = fetchone(cur)
            return _to_student(r) if r else None

    def create_enrollment(self, *, student_id: int, class_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO class_enrollments(student_id, class_id) VALUES(%s,%s)",
                (student_id, class_id),
            )
            return int(cur.lastrowid)
