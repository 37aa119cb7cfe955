from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import SchoolClass, Student


class DirectoryRepository(Protocol):
    """Read access to classes and their enrolled students, plus enrollment."""

    def list_classes(self) -> Sequence[SchoolClass]:
        """All classes ordered by class_name."""

        raise NotImplementedError

    def get_class(self, class_id: int) -> Optional[SchoolClass]:
        raise NotImplementedError

    def list_enrolled_students(self, class_id: int) -> Sequence[Student]:
        raise NotImplementedError

    def get_student(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def create_enrollment(self, *, student_id: int, class_id: int) -> int:
        """Insert a (student, class) enrollment; returns enrollment_id.

        Raises ConstraintViolation when the pair already exists.
        """

        raise NotImplementedError
