from __future__ import annotations

import pytest

from src.student_attendance.student_attendance.core.enums import Role
from src.student_attendance.student_attendance.core.exceptions import AuthenticationError, ValidationError
from src.student_attendance.student_attendance.users.service import AuthService


@pytest.fixture
def auth(profiles):
    return AuthService(profiles)


def test_authenticate_success(auth):
    user = auth.authenticate("Teacher@Example.com ", "teacher123")

    assert user.profile_id == 1
    assert user.role == Role.TEACHER


@pytest.mark.parametrize(
    "email, password",
    [("teacher@example.com", "wrong"), ("nobody@example.com", "teacher123"), ("", "")],
)
def test_authenticate_rejects_bad_credentials(auth, email, password):
    with pytest.raises(AuthenticationError):
        auth.authenticate(email, password)


def test_sign_up_creates_teacher_with_role(auth, profiles):
    profile_id = auth.sign_up(full_name="New Teacher", email="New@Example.com", password="secret1")

    assert profiles.profiles[profile_id].email == "new@example.com"
    assert auth.has_role(profile_id, Role.TEACHER)
    assert not auth.has_role(profile_id, Role.ADMIN)
    assert auth.authenticate("new@example.com", "secret1").profile_id == profile_id


def test_sign_up_rejects_duplicate_email(auth):
    with pytest.raises(ValidationError):
        auth.sign_up(full_name="Again", email="teacher@example.com", password="secret1")


def test_sign_up_rejects_short_password(auth):
    with pytest.raises(ValidationError):
        auth.sign_up(full_name="Short", email="short@example.com", password="12345")
