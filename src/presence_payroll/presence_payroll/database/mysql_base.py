from __future__ import annotations

from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
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


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def in_clause(values: Sequence[int]) -> Tuple[str, Tuple[int, ...]]:
    """Placeholders and params for `col IN (...)` over integer ids."""

    params = tuple(int(v) for v in values)
    return ", ".join(["%s"] * len(params)), params


def to_decimal(value: Any, default: Decimal = Decimal(0)) -> Decimal:
    """Normalize DECIMAL/float/None columns coming back from mysql-connector."""

    if value is None:
        return default
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))
