from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SchoolClass:
    class_id: int
    class_code: str
    class_name: str
    description: Optional[str] = None
    teacher_id: Optional[int] = None


@dataclass(frozen=True)
class Student:
    student_id: int
    roll_number: str
    full_name: str
    email: Optional[str] = None
    phone: Optional[str] = None


@dataclass(frozen=True)
class RosterEntry:
    """One enrolled student on the marking form, with the teacher's present/absent flag."""

    student_id: int
    roll_number: str
    full_name: str
    present: bool = True
