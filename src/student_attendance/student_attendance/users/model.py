from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class Profile:
    """Account of a person who can sign in (teacher, admin or student).

    Plain data object; no database access here.
    """

    profile_id: int
    full_name: str
    email: str
    password_hash: str
    role: Role
    is_active: bool = True
