"""Schema and seed loading for scripts/ and the AUTO_INIT_DB / AUTO_SEED_DB settings."""
from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import mysql.connector
from werkzeug.security import generate_password_hash

from ..core.enums import Role
from .connection import DBConfig

logger = logging.getLogger("student_attendance.database")

DEMO_PROFILES = (
    ("Admin Demo", "admin@example.com", "admin123", Role.ADMIN),
    ("Teacher Demo", "teacher@example.com", "teacher123", Role.TEACHER),
)

# Quoted literals are matched whole so a ';' inside them never ends a statement.
_SQL_TOKEN = re.compile(r"""'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*"|;|[^;'"]+|['"]""", re.S)
_LINE_COMMENT = re.compile(r"(?m)^\s*--.*$")
_DB_SELECTION = re.compile(r"(?im)^\s*(?:CREATE\s+DATABASE|USE)\b[^;]*;")


def split_sql(sql: str) -> list[str]:
    """Split a script into statements, ignoring full-line `--` comments."""

    sql = _DB_SELECTION.sub("", _LINE_COMMENT.sub("", sql))
    statements: list[str] = []
    current = ""
    for token in _SQL_TOKEN.findall(sql):
        if token == ";":
            if current.strip():
                statements.append(current.strip())
            current = ""
        else:
            current += token
    if current.strip():
        statements.append(current.strip())
    return statements


@contextmanager
def _raw_cursor(target: DBConfig, *, with_database: bool = True, dictionary: bool = False) -> Iterator:
    conn = mysql.connector.connect(**target.connect_kwargs(with_database=with_database), use_pure=True)
    try:
        cur = conn.cursor(dictionary=dictionary)
        yield cur
        conn.commit()
    finally:
        conn.close()


def run_sql_file(db_config: dict, path: str | Path) -> int:
    path = Path(path)
    statements = split_sql(path.read_text(encoding="utf-8"))
    with _raw_cursor(DBConfig.from_dict(db_config)) as cur:
        for stmt in statements:
            cur.execute(stmt)
    logger.info("Applied %s (%d statements)", path.name, len(statements))
    return len(statements)


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    target = DBConfig.from_dict(db_config)
    with _raw_cursor(target, with_database=False) as cur:
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
    run_sql_file(db_config, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    run_sql_file(db_config, seed_path)


def ensure_demo_profiles(db_config: dict) -> None:
    """Upsert the demo admin and teacher accounts, resetting their passwords."""

    with _raw_cursor(DBConfig.from_dict(db_config), dictionary=True) as cur:
        for full_name, email, password, role in DEMO_PROFILES:
            cur.execute(
                """
                INSERT INTO profiles (full_name, email, password_hash, role)
                VALUES (%s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE
                    full_name = VALUES(full_name),
                    password_hash = VALUES(password_hash),
                    role = VALUES(role),
                    is_active = 1
                """,
                (full_name, email, generate_password_hash(password), role.value),
            )
            cur.execute("SELECT profile_id FROM profiles WHERE email = %s", (email,))
            profile_id = cur.fetchone()["profile_id"]
            cur.execute(
                "INSERT IGNORE INTO user_roles (user_id, role) VALUES (%s, %s)",
                (profile_id, role.value),
            )
            logger.info("Demo %s account ready: %s", role.value, email)


def list_tables(db_config: dict) -> list[str]:
    with _raw_cursor(DBConfig.from_dict(db_config)) as cur:
        cur.execute("SHOW FULL TABLES WHERE Table_type = 'BASE TABLE'")
        return [row[0] for row in cur.fetchall()]
