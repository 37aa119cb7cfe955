from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Profile
from .repository import ProfileRepository

_PROFILE_COLUMNS = "profile_id, full_name, email, password_hash, role, is_active"


def _to_profile(row: dict) -> Profile:
    return Profile(
        profile_id=int(row["profile_id"]),
        full_name=row["full_name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLProfileRepository(ProfileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_email(self, email: str) -> Optional[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_PROFILE_COLUMNS} FROM profiles WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_profile(row) if row else None

    def create_profile(self, *, full_name: str, email: str, password_hash: str, role: Role) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO profiles(full_name, email, password_hash, role)
                VALUES(%s,%s,%s,%s)
                """,
                (full_name, email, password_hash, role.value),
            )
            profile_id = int(cur.lastrowid)
            cur.execute(
                "INSERT INTO user_roles(user_id, role) VALUES(%s,%s)",
                (profile_id, role.value),
            )
            return profile_id

    def list_roles(self, profile_id: int) -> Sequence[Role]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT role FROM user_roles WHERE user_id=%s ORDER BY role", (profile_id,))
            return [Role(r["role"]) for r in fetchall(cur)]
