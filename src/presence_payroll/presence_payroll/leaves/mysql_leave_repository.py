from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import LeaveSpan
from .repository import LeaveRepository

_COLUMNS = "leave_id, user_id, leave_type, start_date, end_date, reason, status, approver_id, approved_at"


def _row_to_leave(r: Dict[str, Any]) -> LeaveSpan:
    return LeaveSpan(
        leave_id=int(r["leave_id"]),
        user_id=int(r["user_id"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        leave_type=LeaveType(r["leave_type"]),
        status=LeaveStatus(r["status"]),
        reason=r.get("reason"),
        approver_id=r.get("approver_id"),
        approved_at=r.get("approved_at"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_approved_for_users(self, user_ids: Sequence[int], start: date, end: date) -> Sequence[LeaveSpan]:
        if not user_ids:
            return []

        placeholders, params = in_clause(user_ids)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_spans
                WHERE user_id IN ({placeholders})
                  AND status=%s
                  AND start_date <= %s AND end_date >= %s
                ORDER BY user_id ASC, start_date ASC, leave_id ASC
                """,
                (*params, LeaveStatus.APPROVED.value, end, start),
            )
            return [_row_to_leave(r) for r in fetchall(cur)]

    def get_by_id(self, leave_id: int) -> Optional[LeaveSpan]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_spans WHERE leave_id=%s", (int(leave_id),))
            r = fetchone(cur)
            return _row_to_leave(r) if r else None

    def list_for_user(self, user_id: int, *, limit: int = 100) -> Sequence[LeaveSpan]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_spans
                WHERE user_id=%s
                ORDER BY created_at DESC, leave_id DESC
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return [_row_to_leave(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        user_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_spans(user_id, leave_type, start_date, end_date, reason, status)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(user_id), leave_type.value, start_date, end_date, reason, LeaveStatus.PENDING.value),
            )
            return int(cur.lastrowid)

    def decide(
        self,
        *,
        leave_id: int,
        status: LeaveStatus,
        approver_id: int,
        decided_at: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_spans
                SET status=%s, approver_id=%s, approved_at=%s
                WHERE leave_id=%s
                """,
                (status.value, int(approver_id), decided_at, int(leave_id)),
            )
            return cur.rowcount > 0
