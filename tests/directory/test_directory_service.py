from __future__ import annotations

import pytest

from src.student_attendance.student_attendance.core.enums import Role
from src.student_attendance.student_attendance.core.exceptions import AuthorizationError, ValidationError
from src.student_attendance.student_attendance.directory.service import DirectoryService

CS101 = 100
MA201 = 200


@pytest.fixture
def service(directory):
    return DirectoryService(directory)


def test_list_classes_ordered_by_name(service):
    assert [c.class_name for c in service.list_classes()] == ["Calculus", "Introduction to Computer Science"]


def test_roster_defaults_everyone_to_present(service):
    roster = service.load_roster(CS101)

    assert len(roster) == 10
    assert all(entry.present for entry in roster)
    assert roster[0].roll_number == "STU001"


def test_roster_only_contains_enrolled_students(service):
    assert [e.student_id for e in service.load_roster(MA201)] == [1, 2]


def test_roster_of_class_without_enrollments_is_empty(service, directory):
    directory.add_class(300, "PH101", "Physics")

    assert service.load_roster(300) == []


def test_admin_can_enroll_student(service, directory):
    service.enroll(current_role=Role.ADMIN, student_id=3, class_id=MA201)

    assert [e.student_id for e in service.load_roster(MA201)] == [1, 2, 3]


def test_duplicate_enrollment_is_rejected(service):
    with pytest.raises(ValidationError):
        service.enroll(current_role=Role.ADMIN, student_id=1, class_id=CS101)


def test_teacher_cannot_enroll(service, directory):
    with pytest.raises(AuthorizationError):
        service.enroll(current_role=Role.TEACHER, student_id=3, class_id=MA201)

    assert (3, MA201) not in directory.enrollments


@pytest.mark.parametrize("student_id, class_id", [(999, CS101), (1, 999)])
def test_enroll_requires_existing_student_and_class(service, student_id, class_id):
    with pytest.raises(ValidationError):
        service.enroll(current_role=Role.ADMIN, student_id=student_id, class_id=class_id)
