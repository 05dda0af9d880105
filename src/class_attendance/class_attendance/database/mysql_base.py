from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import AlreadyMarked, NetworkError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """One connection, one transaction: commit on success, rollback on any error."""
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Translate mysql-connector failures into check-in failures.

    A duplicate key on the attendance tables means another device already
    committed the same student/course/day.
    """
    try:
        yield
    except mysql.connector.IntegrityError as e:
        if e.errno == errorcode.ER_DUP_ENTRY:
            logger.warning("%s rejected by uniqueness constraint: %s", operation, e.msg)
            raise AlreadyMarked() from e
        logger.error("%s failed", operation, exc_info=True)
        raise NetworkError(f"Failed to {operation}.", cause=e) from e
    except mysql.connector.Error as e:
        logger.error("%s failed", operation, exc_info=True)
        raise NetworkError(f"Failed to {operation}.", cause=e) from e


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def optional_float(value: Any) -> Optional[float]:
    # DECIMAL columns come back as Decimal; NULL as None.
    return float(value) if value is not None else None
