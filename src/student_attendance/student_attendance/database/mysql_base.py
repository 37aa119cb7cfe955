from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.constants import MYSQL_DUPLICATE_KEY
from ..core.exceptions import BackendError, ConstraintViolation
from .connection import DatabaseConnection

logger = logging.getLogger("student_attendance.database")


def translate_error(exc: mysql.connector.Error) -> BackendError:
    """Map a driver error onto the application's backend error types."""

    message = exc.msg or str(exc)
    if exc.errno == MYSQL_DUPLICATE_KEY:
        return ConstraintViolation(message, errno=exc.errno)
    return BackendError(message, errno=exc.errno)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (connection, cursor) inside one transaction.

    Commits when the block exits normally, rolls back otherwise. Driver errors
    surface as BackendError carrying the database's message.
    """

    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        logger.error("Database connection failed: %s", exc)
        raise translate_error(exc) from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        conn.rollback()
        logger.error("Database call failed (errno=%s): %s", exc.errno, exc.msg)
        raise translate_error(exc) from exc
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
