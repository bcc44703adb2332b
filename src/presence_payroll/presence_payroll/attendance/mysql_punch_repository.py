from __future__ import annotations

from datetime import date, datetime, time
from typing import Sequence

from ..core.enums import PunchKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause
from .model import PresencePunch
from .repository import PunchRepository


class MySQLPunchRepository(PunchRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_users(self, user_ids: Sequence[int], start: datetime, end: datetime) -> Sequence[PresencePunch]:
        if not user_ids:
            return []

        placeholders, params = in_clause(user_ids)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT punch_id, user_id, punched_at, kind, leave_id
                FROM presence_punches
                WHERE user_id IN ({placeholders}) AND punched_at BETWEEN %s AND %s
                ORDER BY user_id ASC, punched_at ASC
                """,
                (*params, start, end),
            )
            rows = fetchall(cur)
            return [
                PresencePunch(
                    punch_id=int(r["punch_id"]),
                    user_id=int(r["user_id"]),
                    timestamp=r["punched_at"],
                    kind=PunchKind(r["kind"]),
                    leave_ref=int(r["leave_id"]) if r.get("leave_id") is not None else None,
                )
                for r in rows
            ]

    def link_leave(self, *, user_id: int, start_date: date, end_date: date, leave_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE presence_punches
                SET leave_id=%s
                WHERE user_id=%s AND punched_at BETWEEN %s AND %s
                """,
                (
                    int(leave_id),
                    int(user_id),
                    datetime.combine(start_date, time.min),
                    datetime.combine(end_date, time.max),
                ),
            )
            return int(cur.rowcount)

    def unlink_leave(self, *, leave_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE presence_punches SET leave_id=NULL WHERE leave_id=%s", (int(leave_id),))
            return int(cur.rowcount)
