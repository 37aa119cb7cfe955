from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Profile


class ProfileRepository(Protocol):
    """Repository interface for profiles and their roles.

    Services depend on this interface, never on a concrete database.
    """

    def get_by_email(self, email: str) -> Optional[Profile]:
        raise NotImplementedError

    def create_profile(self, *, full_name: str, email: str, password_hash: str, role: Role) -> int:
        """Insert the profile and its user_roles row; returns profile_id."""

        raise NotImplementedError

    def list_roles(self, profile_id: int) -> Sequence[Role]:
        raise NotImplementedError
