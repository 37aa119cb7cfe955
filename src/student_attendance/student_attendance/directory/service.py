from __future__ import annotations

import logging
from typing import Optional

from ..common.validators import require_positive_id
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ConstraintViolation, ValidationError
from .model import RosterEntry, SchoolClass
from .repository import DirectoryRepository

logger = logging.getLogger("student_attendance.directory")


class DirectoryService:
    """Class and roster lookups used by the marking and query pages."""

    def __init__(self, directory: DirectoryRepository):
        self._directory = directory

    def list_classes(self) -> list[SchoolClass]:
        return list(self._directory.list_classes())

    def get_class(self, class_id: int) -> Optional[SchoolClass]:
        return self._directory.get_class(require_positive_id(class_id, "Class"))

    def load_roster(self, class_id: int) -> list[RosterEntry]:
        """Enrolled students of a class, every one initially marked present."""

        class_id = require_positive_id(class_id, "Class")
        return [
            RosterEntry(
                student_id=s.student_id,
                roll_number=s.roll_number,
                full_name=s.full_name,
                present=True,
            )
            for s in self._directory.list_enrolled_students(class_id)
        ]

    def enroll(self, *, current_role: Role, student_id: int, class_id: int) -> int:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only administrators can manage enrollments")

        student_id = require_positive_id(student_id, "Student")
        class_id = require_positive_id(class_id, "Class")

        if not self._directory.get_class(class_id):
            raise ValidationError("Class does not exist")
        if not self._directory.get_student(student_id):
            raise ValidationError("Student does not exist")

        try:
            enrollment_id = self._directory.create_enrollment(student_id=student_id, class_id=class_id)
        except ConstraintViolation:
            raise ValidationError("Student is already enrolled in this class")

        logger.info("Enrolled student %s in class %s", student_id, class_id)
        return enrollment_id
