from __future__ import annotations

import logging
from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ConstraintViolation, ValidationError
from .repository import ProfileRepository

logger = logging.getLogger("student_attendance.users")


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    profile_id: int
    full_name: str
    email: str
    role: Role


class AuthService:
    """Use cases: sign in, sign up, role checks."""

    def __init__(self, profiles: ProfileRepository):
        self._profiles = profiles

    def authenticate(self, email: str, password: str) -> SessionUser:
        email = (email or "").strip().lower()
        profile = self._profiles.get_by_email(email)
        if not profile or not profile.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(profile.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        logger.info("Profile %s signed in", profile.profile_id)
        return SessionUser(
            profile_id=profile.profile_id,
            full_name=profile.full_name,
            email=profile.email,
            role=profile.role,
        )

    def sign_up(self, *, full_name: str, email: str, password: str) -> int:
        """Create a teacher account; every new sign-up starts as a teacher."""

        full_name = require_non_empty(full_name, "Full name")
        email = require_non_empty(email, "Email").lower()
        if "@" not in email:
            raise ValidationError("Email is invalid")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._profiles.get_by_email(email):
            raise ValidationError("An account with this email already exists")

        try:
            profile_id = self._profiles.create_profile(
                full_name=full_name,
                email=email,
                password_hash=generate_password_hash(password),
                role=Role.TEACHER,
            )
        except ConstraintViolation:
            raise ValidationError("An account with this email already exists")

        logger.info("Created teacher profile %s", profile_id)
        return profile_id

    def has_role(self, profile_id: int, role: Role) -> bool:
        return role in self._profiles.list_roles(profile_id)
